# springboard/api/auth/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError

class SocialLoginSchema(Schema):
    """소셜 로그인 요청의 유효성을 검사하는 스키마"""
    # provider: 'firebase'(팝업 로그인 ID Token) 또는 'google'(OAuth 인증 코드)
    provider = fields.Str(
        required=True,
        validate=validate.OneOf(['firebase', 'google']),
        metadata={"description": "로그인 제공자 (firebase | google)"}
    )
    id_token = fields.Str(metadata={"description": "Firebase ID Token"})
    auth_code = fields.Str(metadata={"description": "Google OAuth 2.0 인증 코드"})
    redirect_uri = fields.Str(metadata={"description": "인증 코드 발급 시 사용한 redirect URI"})

    @validates_schema
    def validate_credentials(self, data, **kwargs):
        if data.get('provider') == 'firebase' and not data.get('id_token'):
            raise ValidationError("firebase 로그인에는 id_token이 필요합니다.", "id_token")
        if data.get('provider') == 'google' and not data.get('auth_code'):
            raise ValidationError("google 로그인에는 auth_code가 필요합니다.", "auth_code")

class LogoutRequestSchema(Schema):
    """로그아웃 요청의 유효성을 검사하는 스키마"""
    access_token = fields.Str(required=True)
    refresh_token = fields.Str(required=True)

class UserInfoSchema(Schema):
    """로그인 응답/세션 조회에 포함되는 사용자 정보"""
    uid = fields.Str(required=True)
    email = fields.Str(allow_none=True)
    display_name = fields.Str(allow_none=True)
    photo_url = fields.Str(allow_none=True)

class SessionSchema(Schema):
    """GET /api/auth/me 응답"""
    user = fields.Nested(UserInfoSchema, attribute='identity')
    authorization = fields.Function(lambda ctx: ctx.authorization.status.value)
    authorized = fields.Bool(attribute='is_authorized')
    team_name = fields.Str(allow_none=True)
