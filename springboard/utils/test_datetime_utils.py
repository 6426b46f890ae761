# springboard/utils/test_datetime_utils.py
"""
시간/날짜 유틸리티 테스트

사용법: python -m pytest springboard/utils/test_datetime_utils.py -v
"""

import pytest
from datetime import datetime, date, timezone, timedelta
from springboard.utils.datetime_utils import DateTimeUtils, normalize_optional_timestamp

def test_parse_date_key():
    """YYYY-MM-DD 형식만 허용"""
    assert DateTimeUtils.parse_date_key("2025-06-01") == date(2025, 6, 1)

    for invalid in ["2025-6-1", "2025/06/01", "06-01-2025", "2025-02-30", "", "today"]:
        with pytest.raises(ValueError):
            DateTimeUtils.parse_date_key(invalid)

def test_to_date_key_is_zero_padded():
    assert DateTimeUtils.to_date_key(date(2025, 1, 5)) == "2025-01-05"
    assert DateTimeUtils.to_date_key(datetime(2025, 12, 31, 23, 59)) == "2025-12-31"
    # 문자열 비교가 날짜 비교와 같아야 범위 쿼리가 동작합니다.
    assert DateTimeUtils.to_date_key(date(2025, 9, 30)) < DateTimeUtils.to_date_key(date(2025, 10, 1))

def test_parse_iso_datetime():
    """ISO 포맷 파싱 테스트"""
    test_cases = [
        "2024-01-15T10:30:00Z",
        "2024-01-15T10:30:00+09:00",
        "2024-01-15T10:30:00.123456Z",
        "2024-01-15T10:30:00"
    ]

    for iso_string in test_cases:
        dt = DateTimeUtils.parse_iso_datetime(iso_string)
        assert isinstance(dt, datetime)
        assert dt.tzinfo == timezone.utc

    assert DateTimeUtils.parse_iso_datetime("2024-01-15T10:30:00+09:00").hour == 1

def test_normalize_timestamp_variants():
    """Firestore에서 올 수 있는 timestamp 표현이 모두 같은 UTC datetime이 되어야 함"""
    expected = datetime(2025, 6, 1, 3, 0, tzinfo=timezone.utc)
    kst = timezone(timedelta(hours=9))

    assert DateTimeUtils.normalize_timestamp(expected) == expected
    assert DateTimeUtils.normalize_timestamp(datetime(2025, 6, 1, 12, 0, tzinfo=kst)) == expected
    assert DateTimeUtils.normalize_timestamp(datetime(2025, 6, 1, 3, 0)) == expected
    assert DateTimeUtils.normalize_timestamp("2025-06-01T03:00:00Z") == expected
    assert DateTimeUtils.normalize_timestamp(int(expected.timestamp() * 1000)) == expected

    assert DateTimeUtils.normalize_timestamp(date(2025, 6, 1)) == datetime(2025, 6, 1, tzinfo=timezone.utc)

def test_normalize_timestamp_rejects_garbage():
    for value in [None, True, object(), "not a date"]:
        with pytest.raises(ValueError):
            DateTimeUtils.normalize_timestamp(value)

    assert normalize_optional_timestamp(None) is None

def test_for_firestore():
    """Firestore 변환 테스트"""
    test_data = {
        'day': date(2020, 1, 15),
        'timestamp': datetime(2024, 1, 15, 10, 30),
        'nested': {'event_date': date(2023, 12, 25)},
        'list_data': [{'created_at': datetime(2024, 1, 1)}]
    }

    converted = DateTimeUtils.for_firestore(test_data)

    assert isinstance(converted['day'], datetime)
    assert converted['timestamp'].tzinfo is not None
    assert isinstance(converted['nested']['event_date'], datetime)
    assert converted['list_data'][0]['created_at'].tzinfo is not None

def test_month_helpers():
    assert DateTimeUtils.get_month_range(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert DateTimeUtils.get_month_range(2025, 12) == (date(2025, 12, 1), date(2025, 12, 31))
    assert DateTimeUtils.add_months(date(2025, 1, 1), -1) == date(2024, 12, 1)
    assert DateTimeUtils.add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)

    with pytest.raises(ValueError):
        DateTimeUtils.get_month_range(2025, 13)

def test_to_local_and_timezone():
    seoul = DateTimeUtils.get_timezone('Asia/Seoul')
    local = DateTimeUtils.to_local(datetime(2025, 5, 31, 23, 30, tzinfo=timezone.utc), seoul)
    assert (local.date(), local.hour) == (date(2025, 6, 1), 8)

    with pytest.raises(ValueError):
        DateTimeUtils.get_timezone('Mars/Olympus')

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
