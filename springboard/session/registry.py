# springboard/session/registry.py
import logging
import threading
from typing import Callable, Dict, Optional

from springboard.api.teams.services import TeamService
from springboard.models.user import Identity
from springboard.services.authorization_service import AuthorizationService
from springboard.services.profile_service import ProfileService
from springboard.session.context import SessionContext
from springboard.session.stream import AuthEvent, AuthStateStream, SignedIn, SignedOut

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    인증 이벤트 스트림을 구독해 사용자별 SessionContext를 만들고 폐기합니다.

    SignedIn 이벤트에 대한 반응:
    1. 새 SessionContext 생성 (권한 상태: checking)
    2. 권한 확인 (allow-list / members)
    3. users 컬렉션에 프로필 merge 저장
    4. 소속 팀 조회
    """
    def __init__(self, stream: AuthStateStream, authorization_service: AuthorizationService,
                 profile_service: ProfileService, team_service: TeamService):
        self.stream = stream
        self.authorization_service = authorization_service
        self.profile_service = profile_service
        self.team_service = team_service
        self._sessions: Dict[str, SessionContext] = {}
        self._lock = threading.Lock()
        self._unsubscribe: Optional[Callable[[], None]] = None

    def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self.stream.subscribe(self.handle)

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for ctx in sessions:
            ctx.close()

    def handle(self, event: AuthEvent) -> None:
        if isinstance(event, SignedIn):
            self._on_signed_in(event.identity)
        elif isinstance(event, SignedOut):
            self._on_signed_out(event.uid)

    def _on_signed_in(self, identity: Identity) -> None:
        ctx = SessionContext(identity=identity)
        with self._lock:
            previous = self._sessions.get(identity.uid)
            self._sessions[identity.uid] = ctx
        if previous is not None:
            previous.close()

        ctx.authorization = self.authorization_service.check(identity.email)

        try:
            user = self.profile_service.upsert_from_identity(identity)
            if user.email:
                ctx.remember_profiles({user.email: user})
        except Exception as e:
            logger.error(f"사용자 정보 저장 실패 (uid: {identity.uid}): {e}", exc_info=True)

        ctx.team_name = self.team_service.resolve_team_name(identity.email)
        logger.info(
            f"세션 생성 (uid: {identity.uid}, 권한: {ctx.authorization.status.value}, 팀: {ctx.team_name})"
        )

    def _on_signed_out(self, uid: str) -> None:
        with self._lock:
            ctx = self._sessions.pop(uid, None)
        if ctx is not None:
            ctx.close()
            logger.info(f"세션 종료 (uid: {uid})")

    def sign_in(self, identity: Identity) -> SessionContext:
        """SignedIn 이벤트를 발행하고, 그 반응으로 만들어진 세션을 반환합니다."""
        self.stream.publish(SignedIn(identity))
        ctx = self.get(identity.uid)
        if ctx is None:
            raise RuntimeError("세션 레지스트리가 인증 이벤트를 구독하고 있지 않습니다.")
        return ctx

    def sign_out(self, uid: str) -> None:
        self.stream.publish(SignedOut(uid))

    def get(self, uid: str) -> Optional[SessionContext]:
        with self._lock:
            return self._sessions.get(uid)
