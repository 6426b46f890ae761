# springboard/api/snippets/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError

from springboard.api.calendar.schemas import validate_date_key

# 스니펫 본문 최대 길이 (Firestore 문서 1MiB 제한보다 충분히 작게)
MAX_SNIPPET_LENGTH = 20000

class RangeQuerySchema(Schema):
    """GET /api/snippets?start=YYYY-MM-DD&end=YYYY-MM-DD"""
    start = fields.Str(required=True, validate=validate_date_key)
    end = fields.Str(required=True, validate=validate_date_key)

    @validates_schema
    def validate_order(self, data, **kwargs):
        if data.get('start') and data.get('end') and data['start'] > data['end']:
            raise ValidationError("start는 end보다 늦을 수 없습니다.", "start")

class DraftSchema(Schema):
    """PUT /api/snippets/{date}/draft"""
    body = fields.Str(required=True, validate=validate.Length(max=MAX_SNIPPET_LENGTH))

class SaveRequestSchema(Schema):
    """POST /api/snippets/{date}/save. body가 없으면 현재 편집 중인 내용을 저장합니다."""
    body = fields.Str(validate=validate.Length(max=MAX_SNIPPET_LENGTH))

class DeleteQuerySchema(Schema):
    """DELETE /api/snippets/{date}?confirm=true"""
    confirm = fields.Bool(load_default=False)

class KeyEventSchema(Schema):
    """POST /api/snippets/{date}/keys"""
    key = fields.Str(required=True, validate=validate.Length(min=1, max=32))
    ctrl = fields.Bool(load_default=False)
    meta = fields.Bool(load_default=False)

class SnippetSchema(Schema):
    """스니펫 문서 응답"""
    snippet_id = fields.Str()
    user_id = fields.Str()
    user_email = fields.Str(allow_none=True)
    date = fields.Str()
    snippet = fields.Str()
    created_at = fields.DateTime()
    modified_at = fields.DateTime()
    team_name = fields.Str(allow_none=True)

class SnippetEntrySchema(SnippetSchema):
    """스니펫 화면의 한 항목 (작성자 표시 정보 포함)"""
    is_mine = fields.Bool()
    display_name = fields.Str(allow_none=True)
    photo_url = fields.Str(allow_none=True)

class EditorStateSchema(Schema):
    """스니펫 화면 상태 응답"""
    date = fields.Str()
    mode = fields.Str()
    is_today = fields.Bool()
    can_edit = fields.Bool()
    can_create = fields.Bool()
    snippet_exists = fields.Bool()
    body = fields.Str()
    suggestion = fields.Str(allow_none=True)
    entries = fields.List(fields.Nested(SnippetEntrySchema))
    empty_message = fields.Str(allow_none=True)
