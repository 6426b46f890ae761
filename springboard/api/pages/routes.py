# springboard/api/pages/routes.py
from flask import Blueprint, request, jsonify

from springboard.api.pages.services import resolve_redirect
from springboard.core.security import current_session_or_none

pages_bp = Blueprint('pages_bp', __name__)

@pages_bp.route('/guard', methods=['GET'])
def guard():
    """
    GET /api/routes/guard?path=/snippet/2025-06-01
    토큰이 없어도 호출할 수 있습니다. 세션 상태에 따라 이동할 경로를 알려줍니다.
    """
    path = request.args.get('path', '/')
    ctx = current_session_or_none()
    redirect = resolve_redirect(
        path,
        signed_in=ctx is not None,
        authorized=ctx.is_authorized if ctx is not None else False,
    )
    return jsonify({"path": path, "redirect": redirect}), 200
