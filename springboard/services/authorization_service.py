# springboard/services/authorization_service.py
"""
앱 사용 권한 확인 서비스.

두 가지 정책을 지원하며 AUTH_POLICY 설정으로 선택합니다.
- allow_list: 환경 변수 ALLOW_LIST(쉼표 구분 이메일 목록)에 포함되어 있는지 확인
- members: Firestore 'members' 컬렉션에 해당 email 문서가 있는지 확인

어떤 정책이든 확인 중 오류가 나면 '권한 없음'으로 처리합니다.
"""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Set
from firebase_admin import firestore

from springboard.core import strings
from springboard.models.team import Member

logger = logging.getLogger(__name__)


class AuthorizationStatus(str, Enum):
    AUTHORIZED = 'authorized'
    UNAUTHORIZED = 'unauthorized'
    CHECKING = 'checking'


@dataclass(frozen=True)
class AuthorizationResult:
    status: AuthorizationStatus
    error: Optional[str] = None

    @property
    def is_authorized(self) -> bool:
        return self.status is AuthorizationStatus.AUTHORIZED


def parse_allow_list(raw: Optional[str]) -> Set[str]:
    """'a@x.com, b@y.com' 형식의 문자열을 이메일 집합으로 변환합니다."""
    return {email.strip() for email in (raw or '').split(',') if email.strip()}


class AllowListPolicy:
    """
    환경 변수에 설정된 허용 목록으로 확인합니다.
    목록은 확인할 때마다 다시 읽습니다.
    """
    def __init__(self, source: Optional[Callable[[], Optional[str]]] = None):
        self.source = source or (lambda: os.getenv('ALLOW_LIST'))

    def is_member(self, email: str) -> bool:
        return email in parse_allow_list(self.source())


class MembershipPolicy:
    """Firestore 'members' 컬렉션에서 email 문서 존재 여부로 확인합니다."""
    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.members_ref = self.db.collection('members')

    def is_member(self, email: str) -> bool:
        docs = self.members_ref.where('email', '==', email).limit(1).stream()
        doc = next(docs, None)
        if doc is None:
            return False
        return Member.from_firestore(doc.to_dict()).email == email


class AuthorizationService:
    def __init__(self, policy):
        self.policy = policy

    def check(self, email: Optional[str]) -> AuthorizationResult:
        if not email:
            return AuthorizationResult(AuthorizationStatus.UNAUTHORIZED)
        try:
            if self.policy.is_member(email):
                return AuthorizationResult(AuthorizationStatus.AUTHORIZED)
            logger.info(f"허용되지 않은 사용자: {email}")
            return AuthorizationResult(AuthorizationStatus.UNAUTHORIZED)
        except Exception as e:
            logger.error(f"사용자 권한 확인 중 오류 발생 ({email}): {e}", exc_info=True)
            return AuthorizationResult(AuthorizationStatus.UNAUTHORIZED, error=strings.AUTH_ERROR)


def build_policy(policy_name: str, db=None):
    """AUTH_POLICY 설정값으로 권한 정책 객체를 생성합니다."""
    if policy_name == 'allow_list':
        return AllowListPolicy()
    if policy_name == 'members':
        return MembershipPolicy(db=db)
    raise ValueError(f"지원하지 않는 AUTH_POLICY 입니다: {policy_name}")
