# springboard/api/calendar/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError

from springboard.utils.datetime_utils import DateTimeUtils

def validate_date_key(value: str):
    """YYYY-MM-DD 형식 검사"""
    try:
        DateTimeUtils.parse_date_key(value)
    except ValueError as e:
        raise ValidationError(str(e))

class CalendarQuerySchema(Schema):
    """GET /api/calendar 쿼리 파라미터. 둘 다 없으면 세션에 표시 중인 달을 사용합니다."""
    year = fields.Int(validate=validate.Range(min=1970, max=9999))
    month = fields.Int(validate=validate.Range(min=1, max=12))

    @validates_schema
    def validate_pair(self, data, **kwargs):
        if ('year' in data) != ('month' in data):
            raise ValidationError("year와 month는 함께 지정해야 합니다.")

class NavigateRequestSchema(Schema):
    """POST /api/calendar/navigate"""
    action = fields.Str(required=True, validate=validate.OneOf(['previous', 'next', 'today', 'year', 'month']))
    value = fields.Int(allow_none=True)

    @validates_schema
    def validate_value(self, data, **kwargs):
        if data.get('action') in ('year', 'month') and data.get('value') is None:
            raise ValidationError("year/month 이동에는 value가 필요합니다.", "value")

class SelectDayRequestSchema(Schema):
    """POST /api/calendar/select-day"""
    date = fields.Str(required=True, validate=validate_date_key)

class AuthorBadgeSchema(Schema):
    user_id = fields.Str()
    email = fields.Str(allow_none=True)
    display_name = fields.Str(allow_none=True)
    photo_url = fields.Str(allow_none=True)
    initial = fields.Str()
    is_me = fields.Bool()
    modified_at = fields.DateTime()

class CalendarDaySchema(Schema):
    date = fields.Str()
    day = fields.Int()
    is_today = fields.Bool()
    is_future = fields.Bool()
    has_snippet = fields.Bool()
    authors = fields.List(fields.Nested(AuthorBadgeSchema))
    overflow_count = fields.Int()

class MonthViewSchema(Schema):
    """월간 달력 응답"""
    year = fields.Int()
    month = fields.Int()
    today = fields.Str()
    leading_blanks = fields.Int()
    can_go_next = fields.Bool()
    team_name = fields.Str(allow_none=True)
    days = fields.List(fields.Nested(CalendarDaySchema))
