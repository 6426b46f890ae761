# springboard/session/context.py
import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, TYPE_CHECKING

from springboard.models.user import Identity, User
from springboard.services.authorization_service import AuthorizationResult, AuthorizationStatus

if TYPE_CHECKING:
    from springboard.api.snippets.editor import SnippetEditor


@dataclass
class SessionContext:
    """
    로그인한 사용자 한 명의 세션 상태.
    로그인 이벤트에서 생성되고 로그아웃 이벤트에서 폐기되며,
    필요한 작업에는 요청마다 명시적으로 전달됩니다.
    """
    identity: Identity
    authorization: AuthorizationResult = field(
        default_factory=lambda: AuthorizationResult(AuthorizationStatus.CHECKING))
    team_name: Optional[str] = None
    # email -> 프로필. 아바타/표시 이름 렌더링용 캐시
    profiles: Dict[str, User] = field(default_factory=dict)
    # 날짜 키 -> 열려 있는 스니펫 편집기 (한 번에 한 날짜만)
    editors: Dict[str, 'SnippetEditor'] = field(default_factory=dict)
    # 달력에 표시 중인 달 (항상 1일)
    calendar_cursor: Optional[date] = None
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def uid(self) -> str:
        return self.identity.uid

    @property
    def email(self) -> Optional[str]:
        return self.identity.email

    @property
    def is_authorized(self) -> bool:
        return self.authorization.is_authorized

    def remember_profiles(self, profiles: Dict[str, User]) -> None:
        self.profiles.update(profiles)

    def profile_for(self, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        return self.profiles.get(email)

    def keep_editor(self, date_key: str, editor: 'SnippetEditor') -> None:
        """새로 연 편집기만 남기고 다른 날짜의 편집기는 버립니다."""
        self.editors.clear()
        self.editors[date_key] = editor

    def close(self) -> None:
        with self.lock:
            self.editors.clear()
            self.profiles.clear()
