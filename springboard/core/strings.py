# springboard/core/strings.py
"""사용자에게 노출되는 문구 모음"""

APP_NAME = "Daily Springboard"

# 인증
AUTH_ERROR = "인증 확인 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요."
NOT_AUTHORIZED = "등록되지 않은 사용자입니다. 관리자에게 문의하세요."
SESSION_EXPIRED = "세션이 만료되었습니다. 다시 로그인해주세요."

# 달력
NO_FUTURE_MONTHS = "이번달 이후는 볼 수 없습니다."
NO_FUTURE_DATES = "미래 날짜는 선택할 수 없습니다."
SNIPPET_LOAD_ERROR = "스니펫을 불러오는 중 오류가 발생했습니다."
DAYS_OF_WEEK = ["일", "월", "화", "수", "목", "금", "토"]

# 스니펫
NO_SNIPPET_TODAY = "아직 오늘의 스니펫이 없습니다."
NO_SNIPPET_FOR_DATE = "이 날짜에 스니펫이 없습니다."
EDIT_WINDOW_CLOSED = "오늘 스니펫, 또는 마감 시각 전까지의 어제 스니펫만 작성/수정/삭제할 수 있습니다."
SNIPPET_SAVE_ERROR = "스니펫 저장 중 오류가 발생했습니다."
SNIPPET_DELETE_ERROR = "스니펫 삭제 중 오류가 발생했습니다."
DELETE_CONFIRM = "스니펫을 삭제하면 되돌릴 수 없습니다. 삭제하시겠습니까?"
NOT_IN_EDIT_MODE = "편집 중이 아닙니다."

# 이전 스니펫이 없을 때 편집기에 제안하는 기본 템플릿
SNIPPET_TEMPLATE = """# 어제 한 일
-

# 오늘 할 일
-

# 고민/공유할 것
-
"""
