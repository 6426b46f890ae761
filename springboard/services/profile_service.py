# springboard/services/profile_service.py
import logging
from typing import Dict, Iterable, Optional
from firebase_admin import firestore

from springboard.models.user import Identity, User
from springboard.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)

# Firestore 'in' 쿼리 한 번에 넣을 이메일 수
EMAIL_BATCH_SIZE = 10


class ProfileService:
    """
    'users' 컬렉션(사용자 프로필) 읽기/쓰기를 담당하는 공용 서비스 클래스.
    """
    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.users_ref = self.db.collection('users')

    def upsert_from_identity(self, identity: Identity) -> User:
        """
        로그인할 때마다 호출됩니다. 문서가 없으면 생성하고, 있으면 merge로 갱신합니다.
        Identity Provider가 주지 않은 필드는 기존 값을 보존합니다.
        """
        user = User.from_identity(identity, last_login=DateTimeUtils.now())
        self.users_ref.document(identity.uid).set(user.to_firestore(), merge=True)
        logger.info(f"사용자 정보 저장 완료 (uid: {identity.uid})")
        return user

    def get_by_uid(self, uid: str) -> Optional[User]:
        doc = self.users_ref.document(uid).get()
        if not doc.exists:
            return None
        return User.from_firestore(doc.to_dict(), doc_id=doc.id)

    def get_by_emails(self, emails: Iterable[str]) -> Dict[str, User]:
        """
        이메일 목록에 해당하는 프로필을 {email: User}로 반환합니다.
        'in' 쿼리 제한 때문에 EMAIL_BATCH_SIZE 단위로 나누어 조회합니다.
        """
        unique_emails = sorted({e for e in emails if e})
        profiles: Dict[str, User] = {}
        for i in range(0, len(unique_emails), EMAIL_BATCH_SIZE):
            batch = unique_emails[i:i + EMAIL_BATCH_SIZE]
            for doc in self.users_ref.where('email', 'in', batch).stream():
                try:
                    user = User.from_firestore(doc.to_dict(), doc_id=doc.id)
                except ValueError as e:
                    logger.warning(f"잘못된 users 문서 무시 (id: {doc.id}): {e}")
                    continue
                if user.email:
                    profiles[user.email] = user
        return profiles
