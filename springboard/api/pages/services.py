# springboard/api/pages/services.py
"""
화면 경로 접근 정책.
클라이언트가 화면을 그리기 전에 어디로 보내야 하는지 결정합니다.
"""
from typing import Optional

from springboard.utils.datetime_utils import DateTimeUtils

HOME_PATH = '/'
LOGIN_PATH = '/login'
SNIPPET_PATH_PREFIX = '/snippet/'

def snippet_path(date_key: str) -> str:
    return f"{SNIPPET_PATH_PREFIX}{date_key}"

def resolve_redirect(path: str, signed_in: bool, authorized: bool) -> Optional[str]:
    """
    이동해야 할 경로를 반환합니다. 그대로 두면 되는 경우 None.

    - 로그인 안 됨 / 권한 없음: '/' 와 '/snippet/...' 은 '/login' 으로
    - 로그인 + 권한 있음: '/login' 은 '/' 로
    - '/snippet/<날짜>' 의 날짜 형식이 잘못되면 '/' 로
    """
    path = path or HOME_PATH
    allowed = signed_in and authorized

    if path == LOGIN_PATH:
        return HOME_PATH if allowed else None

    if path == HOME_PATH:
        return None if allowed else LOGIN_PATH

    if path.startswith(SNIPPET_PATH_PREFIX):
        if not allowed:
            return LOGIN_PATH
        try:
            DateTimeUtils.parse_date_key(path[len(SNIPPET_PATH_PREFIX):])
        except ValueError:
            return HOME_PATH
        return None

    return None
