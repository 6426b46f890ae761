# springboard/models/calendar.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

@dataclass
class AuthorBadge:
    """달력 칸/스니펫 목록에 표시되는 작성자 정보 (아바타 1개)."""
    user_id: str
    email: Optional[str]
    modified_at: datetime
    is_me: bool = False
    display_name: Optional[str] = None
    photo_url: Optional[str] = None

    @property
    def initial(self) -> str:
        """사진이 없을 때 아바타 대신 보여줄 첫 글자"""
        source = self.display_name or self.email or '?'
        return source[0].upper()


@dataclass
class CalendarDay:
    """월간 달력의 하루 칸 (저장되지 않는 파생 데이터)."""
    date: str
    day: int
    is_today: bool
    is_future: bool
    has_snippet: bool = False
    authors: List[AuthorBadge] = field(default_factory=list)
    overflow_count: int = 0


@dataclass
class MonthView:
    """월간 달력 전체. leading_blanks는 1일 앞의 빈 칸 수(일요일 시작)."""
    year: int
    month: int
    today: str
    leading_blanks: int
    days: List[CalendarDay]
    can_go_next: bool
    team_name: Optional[str] = None
