# springboard/api/teams/routes.py
import logging
from flask import Blueprint, jsonify, current_app, g

from springboard.api.teams.schemas import MyTeamResponseSchema
from springboard.core.security import session_required

teams_bp = Blueprint('teams_bp', __name__)

@teams_bp.route('/me', methods=['GET'])
@session_required
def get_my_team():
    """
    내 팀 이름과 (나를 제외한) 팀원 목록을 조회합니다.
    팀이 없으면 team_name은 null, members는 빈 배열입니다.
    """
    ctx = g.session
    team_service = current_app.services['teams']
    try:
        members = team_service.list_team_members(ctx.email) if ctx.team_name else []
        response = MyTeamResponseSchema().dump({"team_name": ctx.team_name, "members": members})
        return jsonify(response), 200
    except Exception as e:
        logging.error(f"팀원 목록 조회 중 오류 발생 (uid: {ctx.uid}): {e}", exc_info=True)
        return jsonify({"error_code": "TEAM_LOAD_FAILED", "message": "팀 정보를 불러오는 중 오류가 발생했습니다."}), 500
