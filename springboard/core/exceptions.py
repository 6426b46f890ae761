# springboard/core/exceptions.py
"""
서비스 계층에서 사용자에게 보여줄 안내 문구(notice)를 함께 전달하는 예외들.
라우트는 notice를 그대로 응답 message로 내려줍니다.
"""


class NavigationRejected(ValueError):
    """달력 이동/날짜 선택이 정책에 의해 거절된 경우"""
    def __init__(self, notice: str):
        super().__init__(notice)
        self.notice = notice


class EditWindowClosed(PermissionError):
    """편집 가능 시간이 지난 날짜에 작성/수정/삭제를 시도한 경우"""
    def __init__(self, notice: str):
        super().__init__(notice)
        self.notice = notice


class ConfirmationRequired(Exception):
    """되돌릴 수 없는 작업에 사용자 확인이 필요한 경우"""
    def __init__(self, notice: str):
        super().__init__(notice)
        self.notice = notice
