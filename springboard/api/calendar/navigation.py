# springboard/api/calendar/navigation.py
"""
월간 달력 이동 규칙

- 이전 달: 제한 없음
- 다음 달: '오늘'이 속한 달을 넘어가면 거절
- 연도 선택: 올해보다 미래면 거절, 올해를 고르면서 표시 중인 달이 이번 달 이후면 이번 달로 맞춤
- 월 선택: 올해의 이번 달 이후는 거절
- 날짜 선택: 오늘 이후는 거절, 그 외에는 해당 날짜의 스니펫 화면 경로 반환

모든 함수는 표시 중인 달을 '그 달 1일'로 다룹니다.
"""
from datetime import date
from typing import List

from springboard.api.pages.services import snippet_path
from springboard.core import strings
from springboard.core.exceptions import NavigationRejected
from springboard.utils.datetime_utils import DateTimeUtils

YEAR_OPTION_COUNT = 10


def current_month(today: date) -> date:
    return DateTimeUtils.first_of_month(today)


def previous_month(displayed: date) -> date:
    return DateTimeUtils.add_months(DateTimeUtils.first_of_month(displayed), -1)


def next_month(displayed: date, today: date) -> date:
    candidate = DateTimeUtils.add_months(DateTimeUtils.first_of_month(displayed), 1)
    if candidate > current_month(today):
        raise NavigationRejected(strings.NO_FUTURE_MONTHS)
    return candidate


def can_go_next(displayed: date, today: date) -> bool:
    return DateTimeUtils.first_of_month(displayed) < current_month(today)


def select_year(displayed: date, year: int, today: date) -> date:
    if year > today.year:
        raise NavigationRejected(strings.NO_FUTURE_MONTHS)
    candidate = date(year, displayed.month, 1)
    if year == today.year and candidate.month > today.month:
        candidate = current_month(today)
    return candidate


def select_month(displayed: date, month: int, today: date) -> date:
    if not 1 <= month <= 12:
        raise ValueError(f"월은 1~12 사이여야 합니다: {month}")
    if displayed.year == today.year and month > today.month:
        raise NavigationRejected(strings.NO_FUTURE_MONTHS)
    return date(displayed.year, month, 1)


def ensure_not_future_month(year: int, month: int, today: date) -> date:
    """직접 지정한 년/월이 이번 달 이후면 거절합니다."""
    try:
        candidate = date(year, month, 1)
    except ValueError:
        raise ValueError(f"잘못된 년/월입니다: {year}-{month}")
    if candidate > current_month(today):
        raise NavigationRejected(strings.NO_FUTURE_MONTHS)
    return candidate


def year_options(today: date) -> List[int]:
    """연도 선택 목록: 올해부터 과거 10년"""
    return [today.year - i for i in range(YEAR_OPTION_COUNT)]


def select_day(target: date, today: date) -> str:
    """선택한 날짜의 스니펫 화면 경로. 미래 날짜는 거절합니다."""
    if target > today:
        raise NavigationRejected(strings.NO_FUTURE_DATES)
    return snippet_path(DateTimeUtils.to_date_key(target))
