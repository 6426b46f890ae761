# springboard/api/auth/routes.py

import logging
import jwt
from flask import Blueprint, request, jsonify, current_app, g
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt_identity,
)
from firebase_admin import auth as firebase_auth
from marshmallow import ValidationError

from springboard.api.auth.schemas import SocialLoginSchema, LogoutRequestSchema, UserInfoSchema, SessionSchema
from springboard.core import strings
from springboard.core.security import session_required
from .services import auth_service

auth_bp = Blueprint('auth_bp', __name__)

@auth_bp.route('/social', methods=['POST'])
def social_login():
    """
    소셜 로그인을 처리하는 엔드포인트입니다.
    로그인 이벤트를 발행해 권한 확인/프로필 저장/팀 조회를 거친 세션을 만들고,
    권한이 있는 사용자에게만 토큰을 발급합니다.
    """
    sessions = current_app.services['sessions']
    try:
        validated_data = SocialLoginSchema().load(request.get_json(silent=True) or {})
        identity = auth_service.verify_identity(validated_data)
    except ValidationError as e:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": e.messages}), 400
    except (firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError, ValueError) as e:
        logging.warning(f"로그인 토큰 검증 실패: {e}")
        return jsonify({"error_code": "INVALID_CREDENTIALS", "message": "유효하지 않은 로그인 정보입니다."}), 401
    except Exception as e:
        logging.error(f"소셜 로그인 중 예외 발생: {e}", exc_info=True)
        return jsonify({"error_code": "AUTH_ERROR", "message": strings.AUTH_ERROR}), 500

    ctx = sessions.sign_in(identity)
    if not ctx.is_authorized:
        message = ctx.authorization.error or strings.NOT_AUTHORIZED
        sessions.sign_out(identity.uid)
        return jsonify({"error_code": "NOT_AUTHORIZED", "message": message, "authorized": False}), 403

    return jsonify({
        "access_token": create_access_token(identity=identity.uid),
        "refresh_token": create_refresh_token(identity=identity.uid),
        "user_info": UserInfoSchema().dump(identity),
        "authorized": True,
        "team_name": ctx.team_name,
    }), 200


# --- 토큰 재발급 엔드포인트 ---
@auth_bp.route('/token/refresh', methods=['POST'])
@jwt_required(refresh=True) # Refresh Token만 허용 (서명, 만료, Blocklist 검사 포함)
def refresh_token():
    """유효한 Refresh Token으로 새로운 Access Token을 발급합니다."""
    current_user_id = get_jwt_identity()
    new_access_token = create_access_token(identity=current_user_id)
    return jsonify(access_token=new_access_token), 200


# --- 로그아웃 엔드포인트 ---
@auth_bp.route('/logout', methods=['POST'])
def logout():
    """로그아웃. 전달받은 Access/Refresh 토큰을 무효화하고 세션을 종료합니다."""
    try:
        data = LogoutRequestSchema().load(request.get_json(silent=True) or {})

        secret_key = current_app.config['JWT_SECRET_KEY']
        algorithm = current_app.config.get('JWT_ALGORITHM', 'HS256')

        # 만료된 토큰으로도 로그아웃할 수 있도록 만료 검사는 하지 않습니다.
        decoded_access = jwt.decode(data['access_token'], secret_key, algorithms=[algorithm], options={"verify_exp": False})
        decoded_refresh = jwt.decode(data['refresh_token'], secret_key, algorithms=[algorithm], options={"verify_exp": False})

        auth_service.logout_user(
            decoded_access['jti'], decoded_access['exp'],
            decoded_refresh['jti'], decoded_refresh['exp']
        )
        current_app.services['sessions'].sign_out(decoded_access['sub'])

        return jsonify({"message": "로그아웃 되었습니다."}), 200

    except ValidationError as e:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": e.messages}), 400
    except jwt.PyJWTError as e:
        logging.error(f"JWT 해독 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "INVALID_TOKEN", "message": "유효하지 않은 토큰입니다."}), 422
    except Exception as e:
        logging.error(f"로그아웃 처리 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "LOGOUT_FAILED", "message": "로그아웃 처리 중 오류가 발생했습니다."}), 500


@auth_bp.route('/me', methods=['GET'])
@session_required
def get_my_session():
    """현재 세션의 사용자/권한/팀 정보를 반환합니다."""
    return jsonify(SessionSchema().dump(g.session)), 200
