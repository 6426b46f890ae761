# springboard/api/calendar/test_calendar_navigation.py
import pytest
from datetime import date

from springboard.api.calendar import navigation
from springboard.core import strings
from springboard.core.exceptions import NavigationRejected

TODAY = date(2025, 6, 15)

def test_next_month_from_current_month_is_rejected():
    with pytest.raises(NavigationRejected) as exc_info:
        navigation.next_month(date(2025, 6, 1), TODAY)
    assert exc_info.value.notice == strings.NO_FUTURE_MONTHS

def test_previous_month_decrements():
    assert navigation.previous_month(date(2025, 6, 1)) == date(2025, 5, 1)
    assert navigation.previous_month(date(2025, 1, 1)) == date(2024, 12, 1)

def test_next_month_from_past_month():
    assert navigation.next_month(date(2025, 5, 1), TODAY) == date(2025, 6, 1)
    assert navigation.next_month(date(2024, 12, 1), TODAY) == date(2025, 1, 1)

def test_can_go_next():
    assert navigation.can_go_next(date(2025, 5, 1), TODAY)
    assert not navigation.can_go_next(date(2025, 6, 1), TODAY)

def test_select_year():
    with pytest.raises(NavigationRejected):
        navigation.select_year(date(2025, 6, 1), 2026, TODAY)
    assert navigation.select_year(date(2025, 3, 1), 2023, TODAY) == date(2023, 3, 1)
    # 과거 연도의 12월을 보다가 올해를 고르면 이번 달로 맞춤
    assert navigation.select_year(date(2024, 12, 1), 2025, TODAY) == date(2025, 6, 1)

def test_select_month():
    assert navigation.select_month(date(2025, 6, 1), 2, TODAY) == date(2025, 2, 1)
    assert navigation.select_month(date(2024, 6, 1), 11, TODAY) == date(2024, 11, 1)
    with pytest.raises(NavigationRejected):
        navigation.select_month(date(2025, 6, 1), 7, TODAY)
    with pytest.raises(ValueError):
        navigation.select_month(date(2025, 6, 1), 13, TODAY)

def test_ensure_not_future_month():
    assert navigation.ensure_not_future_month(2025, 6, TODAY) == date(2025, 6, 1)
    with pytest.raises(NavigationRejected):
        navigation.ensure_not_future_month(2025, 7, TODAY)

def test_year_options():
    options = navigation.year_options(TODAY)
    assert options[0] == 2025
    assert len(options) == navigation.YEAR_OPTION_COUNT

def test_select_day():
    assert navigation.select_day(TODAY, TODAY) == '/snippet/2025-06-15'
    assert navigation.select_day(date(2025, 5, 2), TODAY) == '/snippet/2025-05-02'
    with pytest.raises(NavigationRejected) as exc_info:
        navigation.select_day(date(2025, 6, 16), TODAY)
    assert exc_info.value.notice == strings.NO_FUTURE_DATES
