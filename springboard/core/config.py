# springboard/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.
from datetime import timedelta

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # JWT 토큰 서명 키. .env 파일에 정의된 값을 읽어옵니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=14)
    # Google OAuth 인증 코드 교환에 필요한 클라이언트 시크릿 파일 경로
    GOOGLE_CLIENT_SECRETS_PATH = os.getenv('GOOGLE_CLIENT_SECRETS_PATH')

    # 앱 사용 권한 정책: 'allow_list'(환경 변수 허용 목록) 또는 'members'(Firestore members 컬렉션)
    AUTH_POLICY = os.getenv('AUTH_POLICY', 'allow_list')
    # 편집 가능 시간 판단 기준 시간대와 전날 스니펫 수정 마감 시각(시)
    REFERENCE_TIMEZONE = os.getenv('REFERENCE_TIMEZONE', 'Asia/Seoul')
    EDIT_CUTOFF_HOUR = int(os.getenv('EDIT_CUTOFF_HOUR', 9))

    # 달력에서 하루 칸에 보여줄 최대 아바타 수
    CALENDAR_MAX_AVATARS = 4

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    # 개발용 Firebase 프로젝트 서비스 계정 키 파일 경로
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'testing-secret-key-with-enough-length')
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')

class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다."""
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

# FLASK_ENV 값에 따라 create_app 함수에서 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
