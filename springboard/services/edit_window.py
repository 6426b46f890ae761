# springboard/services/edit_window.py
import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Union

from springboard.core import strings
from springboard.core.exceptions import EditWindowClosed
from springboard.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)


class EditWindowPolicy:
    """
    기준 시간대의 현재 시각으로 '오늘'을 정하고, 스니펫 편집 가능 여부를 판단합니다.

    - 오늘 스니펫은 언제든 작성/수정/삭제 가능
    - 어제 스니펫은 기준 시간대 cutoff_hour 시 이전까지만 가능
    - 그 외 날짜는 읽기 전용

    판단은 매 호출마다 clock()을 다시 읽습니다. 결과를 캐시하지 마세요.
    """

    def __init__(self, timezone_name: str = 'Asia/Seoul', cutoff_hour: int = 9,
                 clock: Optional[Callable[[], datetime]] = None):
        if not 0 <= cutoff_hour <= 23:
            raise ValueError(f"cutoff_hour는 0~23 사이여야 합니다: {cutoff_hour}")
        self.zone = DateTimeUtils.get_timezone(timezone_name)
        self.cutoff_hour = cutoff_hour
        self.clock = clock or DateTimeUtils.now

    def local_now(self) -> datetime:
        return DateTimeUtils.to_local(self.clock(), self.zone)

    def today(self) -> date:
        return self.local_now().date()

    def today_key(self) -> str:
        return DateTimeUtils.to_date_key(self.today())

    def is_today(self, target: Union[date, str]) -> bool:
        return self._as_date(target) == self.today()

    def is_future(self, target: Union[date, str]) -> bool:
        return self._as_date(target) > self.today()

    def can_edit(self, target: Union[date, str]) -> bool:
        target = self._as_date(target)
        local_now = self.local_now()
        today = local_now.date()
        if target == today:
            return True
        if target == today - timedelta(days=1):
            return local_now.hour < self.cutoff_hour
        return False

    def ensure_can_edit(self, target: Union[date, str]) -> None:
        """편집 불가능하면 EditWindowClosed를 발생시킵니다."""
        if not self.can_edit(target):
            logger.info(f"편집 가능 시간이 아님: {target} (현재 {self.local_now().isoformat()})")
            raise EditWindowClosed(strings.EDIT_WINDOW_CLOSED)

    @staticmethod
    def _as_date(target: Union[date, str]) -> date:
        if isinstance(target, str):
            return DateTimeUtils.parse_date_key(target)
        if isinstance(target, datetime):
            return target.date()
        return target
