# springboard/api/calendar/services.py
import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional

from springboard.api.calendar import navigation
from springboard.api.snippets.ordering import collect_authors
from springboard.api.snippets.services import SnippetService
from springboard.models.calendar import CalendarDay, MonthView
from springboard.models.snippet import Snippet
from springboard.services.edit_window import EditWindowPolicy
from springboard.services.profile_service import ProfileService
from springboard.session.context import SessionContext
from springboard.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)


class CalendarService:
    """
    월간 달력 구성과 이동을 담당하는 서비스 클래스.
    '오늘'은 EditWindowPolicy의 기준 시간대를 따릅니다.
    """
    def __init__(self, snippet_service: SnippetService, profile_service: ProfileService,
                 edit_window: EditWindowPolicy, max_avatars: int = 4):
        self.snippet_service = snippet_service
        self.profile_service = profile_service
        self.edit_window = edit_window
        self.max_avatars = max_avatars

    def today(self) -> date:
        return self.edit_window.today()

    def displayed_month(self, ctx: SessionContext) -> date:
        if ctx.calendar_cursor is None:
            ctx.calendar_cursor = navigation.current_month(self.today())
        return ctx.calendar_cursor

    def navigate(self, ctx: SessionContext, action: str, value: Optional[int] = None) -> date:
        """
        달력 이동. 거절되면 NavigationRejected가 발생하고 표시 중인 달은 그대로입니다.
        """
        today = self.today()
        displayed = self.displayed_month(ctx)
        if action == 'previous':
            target = navigation.previous_month(displayed)
        elif action == 'next':
            target = navigation.next_month(displayed, today)
        elif action == 'today':
            target = navigation.current_month(today)
        elif action == 'year':
            if value is None:
                raise ValueError("연도(value)가 필요합니다.")
            target = navigation.select_year(displayed, value, today)
        elif action == 'month':
            if value is None:
                raise ValueError("월(value)이 필요합니다.")
            target = navigation.select_month(displayed, value, today)
        else:
            raise ValueError(f"지원하지 않는 이동입니다: {action}")
        ctx.calendar_cursor = target
        return target

    def jump_to(self, ctx: SessionContext, year: int, month: int) -> date:
        ctx.calendar_cursor = navigation.ensure_not_future_month(year, month, self.today())
        return ctx.calendar_cursor

    def select_day(self, date_key: str) -> str:
        return navigation.select_day(DateTimeUtils.parse_date_key(date_key), self.today())

    def build_month(self, ctx: SessionContext, year: int, month: int) -> MonthView:
        """
        월간 달력을 구성합니다.
        팀 스니펫과 작성자 프로필을 모두 불러온 뒤에 아바타 정보를 채웁니다.
        """
        today = self.today()
        start, end = DateTimeUtils.get_month_range(year, month)

        by_date: Dict[str, List[Snippet]] = defaultdict(list)
        if ctx.team_name:
            snippets = self.snippet_service.list_for_range(
                ctx.team_name, DateTimeUtils.to_date_key(start), DateTimeUtils.to_date_key(end))
            for snippet in snippets:
                by_date[snippet.date].append(snippet)

            emails = {s.user_email for s in snippets if s.user_email}
            if emails:
                try:
                    ctx.remember_profiles(self.profile_service.get_by_emails(emails))
                except Exception as e:
                    # 프로필 없이도 작성 여부 표시는 가능하므로 계속 진행합니다.
                    logger.error(f"작성자 프로필 조회 실패: {e}", exc_info=True)

        days = []
        current = start
        while current <= end:
            date_key = DateTimeUtils.to_date_key(current)
            cell = CalendarDay(
                date=date_key,
                day=current.day,
                is_today=current == today,
                is_future=current > today,
            )
            day_snippets = by_date.get(date_key)
            if day_snippets:
                authors = collect_authors(day_snippets, ctx.uid, ctx.profiles)
                cell.has_snippet = True
                cell.authors = authors[:self.max_avatars]
                cell.overflow_count = max(0, len(authors) - self.max_avatars)
            days.append(cell)
            current += timedelta(days=1)

        return MonthView(
            year=year,
            month=month,
            today=DateTimeUtils.to_date_key(today),
            # date.weekday()는 월요일=0 이므로 일요일 시작 달력에 맞춰 보정합니다.
            leading_blanks=(start.weekday() + 1) % 7,
            days=days,
            can_go_next=navigation.can_go_next(start, today),
            team_name=ctx.team_name,
        )
