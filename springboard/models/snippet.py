# springboard/models/snippet.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from springboard.utils.datetime_utils import DateTimeUtils, normalize_timestamp

@dataclass
class Snippet:
    """
    Firestore 'snippets' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    문서 ID는 '{user_id}_{date}' 이므로 (사용자, 날짜)마다 문서가 최대 하나입니다.
    """
    snippet_id: str
    user_id: str
    user_email: Optional[str]
    date: str  # YYYY-MM-DD
    snippet: str
    created_at: datetime
    modified_at: datetime
    team_name: Optional[str] = None

    @staticmethod
    def make_id(user_id: str, date_key: str) -> str:
        return f"{user_id}_{date_key}"

    @classmethod
    def from_firestore(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> 'Snippet':
        """
        Firestore 문서를 검증하고 timestamp 필드를 UTC datetime으로 정규화합니다.
        """
        user_id = data.get('userId')
        date_key = data.get('date')
        if not user_id or not date_key:
            raise ValueError(f"snippets 문서에 userId/date가 없습니다 (id: {doc_id}).")
        DateTimeUtils.parse_date_key(date_key)

        created_raw = data.get('created_at')
        modified_raw = data.get('modified_at')
        if created_raw is None and modified_raw is None:
            raise ValueError(f"snippets 문서에 timestamp가 없습니다 (id: {doc_id}).")
        # 한쪽만 있는 오래된 문서는 있는 값으로 채웁니다.
        created_at = normalize_timestamp(created_raw if created_raw is not None else modified_raw)
        modified_at = normalize_timestamp(modified_raw if modified_raw is not None else created_raw)

        return cls(
            snippet_id=data.get('snippetId') or doc_id or cls.make_id(user_id, date_key),
            user_id=user_id,
            user_email=data.get('userEmail'),
            date=date_key,
            snippet=data.get('snippet') or '',
            created_at=created_at,
            modified_at=modified_at,
            team_name=data.get('teamName'),
        )

    def to_firestore(self) -> Dict[str, Any]:
        return DateTimeUtils.for_firestore({
            'snippetId': self.snippet_id,
            'userId': self.user_id,
            'userEmail': self.user_email,
            'date': self.date,
            'snippet': self.snippet,
            'created_at': self.created_at,
            'modified_at': self.modified_at,
            'teamName': self.team_name,
        })
