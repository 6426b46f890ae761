# springboard/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import atexit
import logging
from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials, firestore

# - 설정
from springboard.core import strings
from springboard.core.config import config_by_name

# - API 블루프린트
from springboard.api.auth.routes import auth_bp
from springboard.api.calendar.routes import calendar_bp
from springboard.api.snippets.routes import snippets_bp
from springboard.api.teams.routes import teams_bp
from springboard.api.pages.routes import pages_bp

# - 서비스 모듈
from springboard.api.auth import services as auth_service_module
from springboard.api.calendar.services import CalendarService
from springboard.api.snippets.services import SnippetService
from springboard.api.teams.services import TeamService
from springboard.services.authorization_service import AuthorizationService, build_policy
from springboard.services.edit_window import EditWindowPolicy
from springboard.services.profile_service import ProfileService
from springboard.session.registry import SessionRegistry
from springboard.session.stream import AuthStateStream

def create_app(config_name=None, db=None, clock=None):
    """
    Flask 애플리케이션 팩토리 함수.

    Args:
        config_name: 'development' | 'testing' | 'production'. 없으면 FLASK_ENV 사용
        db: Firestore 클라이언트. 주어지면 Firebase 초기화를 건너뜁니다.
        clock: 현재 시각(UTC, timezone-aware)을 돌려주는 함수. 편집 가능 시간 판단에 사용
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    jwt_manager = JWTManager(app)

    @jwt_manager.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        return auth_service_module.auth_service.is_token_revoked(jwt_payload)

    if db is None:
        if not firebase_admin._apps:
            cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
            if not cred_path or not os.path.exists(cred_path):
                raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
            cred = credentials.Certificate(cred_path)
            firebase_admin.initialize_app(cred)
        db = firestore.client()

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    # 5-1. 다른 서비스의 기반이 되는 공용 서비스
    app.services['profiles'] = ProfileService(db=db)
    app.services['authorization'] = AuthorizationService(build_policy(app.config['AUTH_POLICY'], db=db))
    app.services['edit_window'] = EditWindowPolicy(
        timezone_name=app.config['REFERENCE_TIMEZONE'],
        cutoff_hour=app.config['EDIT_CUTOFF_HOUR'],
        clock=clock,
    )

    # 5-2. 다른 서비스를 주입받아야 하는 도메인 서비스
    app.services['teams'] = TeamService(profile_service=app.services['profiles'], db=db)
    app.services['snippets'] = SnippetService(db=db)
    app.services['calendar'] = CalendarService(
        snippet_service=app.services['snippets'],
        profile_service=app.services['profiles'],
        edit_window=app.services['edit_window'],
        max_avatars=app.config['CALENDAR_MAX_AVATARS'],
    )

    # 5-3. 인증 이벤트 스트림과 세션 레지스트리
    app.services['auth_stream'] = AuthStateStream()
    app.services['sessions'] = SessionRegistry(
        stream=app.services['auth_stream'],
        authorization_service=app.services['authorization'],
        profile_service=app.services['profiles'],
        team_service=app.services['teams'],
    )
    app.services['sessions'].start()
    # atexit은 역순으로 실행되므로 세션 정리 후 스트림이 닫힙니다.
    atexit.register(app.services['auth_stream'].close)
    atexit.register(app.services['sessions'].stop)

    # - 인증 서비스 (앱 컨텍스트 필요)
    auth_service_module.auth_service.init_app(app, db=db)

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(calendar_bp, url_prefix='/api/calendar')
    app.register_blueprint(snippets_bp, url_prefix='/api/snippets')
    app.register_blueprint(teams_bp, url_prefix='/api/teams')
    app.register_blueprint(pages_bp, url_prefix='/api/routes')

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok", "app": strings.APP_NAME}), 200

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        if isinstance(err, HTTPException):
            return jsonify({"error_code": err.name.upper().replace(" ", "_"), "message": err.description}), err.code
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
