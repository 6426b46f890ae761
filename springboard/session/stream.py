# springboard/session/stream.py
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Union

from springboard.models.user import Identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedIn:
    identity: Identity


@dataclass(frozen=True)
class SignedOut:
    uid: str


AuthEvent = Union[SignedIn, SignedOut]
AuthEventHandler = Callable[[AuthEvent], None]


class AuthStateStream:
    """
    로그인/로그아웃 이벤트를 전달하는 앱 전역 이벤트 스트림.
    구독자는 앱 시작 시 한 번 등록하고 종료 시 해제합니다.
    """
    def __init__(self):
        self._handlers: List[AuthEventHandler] = []
        self._lock = threading.Lock()
        self._closed = False

    def subscribe(self, handler: AuthEventHandler) -> Callable[[], None]:
        """핸들러를 등록하고, 등록 해제 함수를 반환합니다."""
        with self._lock:
            if self._closed:
                raise RuntimeError("닫힌 이벤트 스트림에는 구독할 수 없습니다.")
            self._handlers.append(handler)

        def unsubscribe():
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)
        return unsubscribe

    def publish(self, event: AuthEvent) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("닫힌 이벤트 스트림입니다.")
            handlers = list(self._handlers)
        logger.debug(f"인증 이벤트 발행: {type(event).__name__}")
        for handler in handlers:
            handler(event)

    def close(self) -> None:
        with self._lock:
            self._handlers.clear()
            self._closed = True

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)
