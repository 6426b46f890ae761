# springboard/models/team.py
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

@dataclass
class Team:
    """
    Firestore 'teams' 컬렉션의 문서 구조. 앱에서는 읽기 전용입니다.
    """
    team_name: str
    emails: List[str] = field(default_factory=list)
    team_id: Optional[str] = None

    @classmethod
    def from_firestore(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> 'Team':
        team_name = data.get('teamName')
        if not team_name:
            raise ValueError(f"teams 문서에 teamName이 없습니다 (id: {doc_id}).")
        emails = data.get('emails') or []
        if not isinstance(emails, list):
            raise ValueError(f"teams 문서의 emails는 배열이어야 합니다 (id: {doc_id}).")
        return cls(
            team_name=team_name,
            emails=[e for e in emails if isinstance(e, str)],
            team_id=doc_id,
        )


@dataclass
class Member:
    """
    Firestore 'members' 컬렉션 문서 (members 권한 정책에서 사용).
    """
    email: str

    @classmethod
    def from_firestore(cls, data: Dict[str, Any]) -> 'Member':
        email = data.get('email')
        if not email:
            raise ValueError("members 문서에 email이 없습니다.")
        return cls(email=email)


@dataclass
class TeamMember:
    """팀원 목록 응답용. users 프로필이 없는 팀원은 email만 채워집니다."""
    email: str
    priority: int
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
