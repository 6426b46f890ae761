# springboard/utils/datetime_utils.py
"""
프로젝트 전체에서 일관된 시간/날짜 처리를 위한 중앙화된 유틸리티 모듈

이 모듈의 목적:
1. 스니펫 날짜 키(YYYY-MM-DD) 파싱/생성 통일
2. Firestore 읽기/쓰기 시 timestamp 표현을 하나로 정규화
3. 기준 시간대(편집 가능 시간 판단용) 처리
"""

import logging
from datetime import datetime, date, timezone, time, tzinfo
from typing import Any, Optional, Tuple, Union
from dateutil import parser as dateutil_parser
from dateutil import tz as dateutil_tz
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

# 스니펫 문서의 date 필드 형식. 사전식 비교가 날짜 비교와 같도록 0 채움 고정 길이를 사용합니다.
DATE_KEY_FORMAT = '%Y-%m-%d'


class DateTimeUtils:
    """시간/날짜 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def get_timezone(name: str) -> tzinfo:
        """IANA 시간대 이름(예: 'Asia/Seoul')을 tzinfo로 변환"""
        zone = dateutil_tz.gettz(name)
        if zone is None:
            raise ValueError(f"알 수 없는 시간대입니다: {name}")
        return zone

    @staticmethod
    def to_local(dt: datetime, zone: tzinfo) -> datetime:
        """UTC(또는 naive=UTC) datetime을 주어진 시간대의 현지 시각으로 변환"""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(zone)

    @staticmethod
    def parse_date_key(date_string: str) -> date:
        """
        스니펫 날짜 키(YYYY-MM-DD)를 date 객체로 파싱합니다.
        라우트 경로에 그대로 쓰이는 값이므로 다른 형식은 허용하지 않습니다.
        """
        if not date_string or not isinstance(date_string, str):
            raise ValueError("빈 문자열은 파싱할 수 없습니다")
        try:
            parsed = datetime.strptime(date_string, DATE_KEY_FORMAT).date()
        except ValueError:
            raise ValueError(f"잘못된 날짜 형식입니다 (YYYY-MM-DD): {date_string}")
        # strptime은 '2025-6-1' 같은 0 없는 값도 받아들이므로 왕복 비교로 형식을 고정합니다.
        if parsed.strftime(DATE_KEY_FORMAT) != date_string:
            raise ValueError(f"잘못된 날짜 형식입니다 (YYYY-MM-DD): {date_string}")
        return parsed

    @staticmethod
    def to_date_key(d: Union[date, datetime]) -> str:
        """date 객체를 YYYY-MM-DD 형식 문자열로 변환"""
        if isinstance(d, datetime):
            d = d.date()
        return d.strftime(DATE_KEY_FORMAT)

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 UTC datetime 객체로 파싱

        지원 포맷:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00.123456Z
        - 2024-01-15T10:30:00
        """
        try:
            if not iso_string:
                raise ValueError("빈 문자열은 파싱할 수 없습니다")

            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'

            dt = dateutil_parser.isoparse(iso_string)

            # timezone-naive인 경우 UTC로 가정
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)

            return dt.astimezone(timezone.utc)

        except Exception as e:
            logger.error(f"ISO datetime 파싱 실패: {iso_string} - {e}")
            raise ValueError(f"잘못된 ISO 날짜 형식입니다: {iso_string}")

    @staticmethod
    def normalize_timestamp(value: Any) -> datetime:
        """
        Firestore에서 읽은 timestamp 값을 UTC timezone-aware datetime 하나로 정규화합니다.

        변환 규칙:
        - Firestore DatetimeWithNanoseconds / datetime -> UTC datetime
        - date -> 해당 날짜 00:00 UTC
        - ISO 문자열 -> UTC datetime
        - 정수/실수 -> Unix timestamp(밀리초)로 간주
        """
        if value is None:
            raise ValueError("timestamp 값이 없습니다")
        if isinstance(value, bool):
            raise ValueError(f"timestamp로 변환할 수 없습니다: {value!r}")
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        if isinstance(value, date):
            return datetime.combine(value, time.min).replace(tzinfo=timezone.utc)
        if isinstance(value, str):
            return DateTimeUtils.parse_iso_datetime(value)
        if isinstance(value, (int, float)):
            return DateTimeUtils.from_timestamp_ms(value)
        # 구버전 클라이언트가 남긴 protobuf Timestamp 류 객체
        if hasattr(value, 'timestamp'):
            return datetime.fromtimestamp(value.timestamp(), tz=timezone.utc)
        raise ValueError(f"timestamp로 변환할 수 없습니다: {value!r}")

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Firestore 저장을 위해 객체의 날짜/시간 필드를 변환

        변환 규칙:
        - date -> datetime (00:00:00 UTC)
        - timezone-naive datetime -> timezone-aware datetime (UTC)
        - dict/list 내부 재귀적 변환
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        elif isinstance(obj, date):
            return datetime.combine(obj, time.min).replace(tzinfo=timezone.utc)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_timestamp_ms(timestamp_ms: Union[int, float]) -> datetime:
        """Unix timestamp (밀리초)를 UTC datetime 객체로 변환"""
        if not isinstance(timestamp_ms, (int, float)) or isinstance(timestamp_ms, bool):
            raise ValueError("timestamp_ms는 숫자여야 합니다")
        return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc)

    @staticmethod
    def add_months(d: date, months: int) -> date:
        """날짜에 월 수를 더함 (말일은 해당 월의 말일로 맞춰짐)"""
        return d + relativedelta(months=months)

    @staticmethod
    def first_of_month(d: date) -> date:
        return d.replace(day=1)

    @staticmethod
    def get_month_range(year: int, month: int) -> Tuple[date, date]:
        """특정 년월의 첫째 날과 마지막 날을 반환"""
        try:
            start_date = date(year, month, 1)
            end_date = start_date + relativedelta(months=1) - relativedelta(days=1)
            return start_date, end_date
        except Exception as e:
            logger.error(f"월 범위 계산 실패: {year}-{month} - {e}")
            raise ValueError(f"월 범위를 계산할 수 없습니다: {year}-{month}")


# 편의를 위한 글로벌 함수들
def now() -> datetime:
    """현재 UTC 시간 반환"""
    return DateTimeUtils.now()

def parse_date_key(date_string: str) -> date:
    """YYYY-MM-DD 문자열을 date로 파싱"""
    return DateTimeUtils.parse_date_key(date_string)

def to_date_key(d: Union[date, datetime]) -> str:
    """date를 YYYY-MM-DD 문자열로 변환"""
    return DateTimeUtils.to_date_key(d)

def normalize_timestamp(value: Any) -> datetime:
    """Firestore timestamp 값 정규화"""
    return DateTimeUtils.normalize_timestamp(value)

def normalize_optional_timestamp(value: Any) -> Optional[datetime]:
    """값이 없으면 None, 있으면 정규화된 UTC datetime"""
    if value is None:
        return None
    return DateTimeUtils.normalize_timestamp(value)

def for_firestore(obj: Any) -> Any:
    """Firestore 저장용 변환"""
    return DateTimeUtils.for_firestore(obj)
