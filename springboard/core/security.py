# springboard/core/security.py
from functools import wraps
import jwt
from flask import jsonify, g, current_app
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException

from springboard.core import strings

def current_session_or_none():
    """
    JWT가 있으면 해당 사용자의 SessionContext를, 없으면 None을 반환합니다.
    만료/폐기/손상된 토큰도 로그인하지 않은 것으로 봅니다.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, jwt.PyJWTError):
        return None
    uid = get_jwt_identity()
    if not uid:
        return None
    return current_app.services['sessions'].get(uid)

def session_required(f):
    """
    유효한 Access Token과 살아 있는 세션, 그리고 사용 권한을 요구합니다.
    통과하면 g.session 에 SessionContext를 넣어줍니다.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        uid = get_jwt_identity()
        ctx = current_app.services['sessions'].get(uid)
        if ctx is None:
            return jsonify({"error_code": "SESSION_EXPIRED", "message": strings.SESSION_EXPIRED}), 401
        if not ctx.is_authorized:
            message = ctx.authorization.error or strings.NOT_AUTHORIZED
            return jsonify({"error_code": "NOT_AUTHORIZED", "message": message}), 403
        g.session = ctx
        return f(*args, **kwargs)

    return decorated_function
