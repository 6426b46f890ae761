# springboard/models/user.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from springboard.utils.datetime_utils import normalize_optional_timestamp

@dataclass(frozen=True)
class Identity:
    """
    Identity Provider(Firebase Auth / Google)가 로그인 결과로 돌려준 사용자 정보.
    """
    uid: str
    email: Optional[str]
    display_name: Optional[str] = None
    photo_url: Optional[str] = None


@dataclass
class User:
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    문서 ID는 uid 이며, 로그인할 때마다 merge 방식으로 갱신됩니다.
    """
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    last_login: Optional[datetime] = None

    @classmethod
    def from_firestore(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> 'User':
        uid = data.get('uid') or doc_id
        if not uid:
            raise ValueError("users 문서에 uid가 없습니다.")
        return cls(
            uid=uid,
            email=data.get('email'),
            display_name=data.get('displayName'),
            photo_url=data.get('photoURL'),
            last_login=normalize_optional_timestamp(data.get('lastLogin')),
        )

    @classmethod
    def from_identity(cls, identity: Identity, last_login: datetime) -> 'User':
        return cls(
            uid=identity.uid,
            email=identity.email,
            display_name=identity.display_name,
            photo_url=identity.photo_url,
            last_login=last_login,
        )

    def to_firestore(self) -> Dict[str, Any]:
        """
        merge 저장용 딕셔너리. 값이 없는 필드는 제외해서 기존 값을 보존합니다.
        """
        data = {
            'uid': self.uid,
            'email': self.email,
            'displayName': self.display_name,
            'photoURL': self.photo_url,
            'lastLogin': self.last_login,
        }
        return {k: v for k, v in data.items() if v is not None}

    @property
    def is_complete(self) -> bool:
        """아바타와 표시 이름을 그리는 데 필요한 필드가 모두 있는지 여부"""
        return bool(self.email and self.display_name and self.photo_url)
