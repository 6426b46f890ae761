# springboard/api/teams/schemas.py
from marshmallow import Schema, fields

class TeamMemberSchema(Schema):
    """팀원 한 명의 응답 스키마"""
    email = fields.Str(required=True)
    priority = fields.Int()
    display_name = fields.Str(allow_none=True)
    photo_url = fields.Str(allow_none=True)

class MyTeamResponseSchema(Schema):
    """GET /api/teams/me 응답"""
    team_name = fields.Str(allow_none=True)
    members = fields.List(fields.Nested(TeamMemberSchema))
