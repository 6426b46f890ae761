# springboard/api/calendar/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app, g
from marshmallow import ValidationError

from springboard.api.calendar.navigation import year_options
from springboard.api.calendar.schemas import (
    CalendarQuerySchema, NavigateRequestSchema, SelectDayRequestSchema, MonthViewSchema
)
from springboard.core import strings
from springboard.core.exceptions import NavigationRejected
from springboard.core.security import session_required

calendar_bp = Blueprint('calendar_bp', __name__)

@calendar_bp.route('', methods=['GET'])
@session_required
def get_month():
    """
    월간 달력을 조회합니다.
    - year/month를 지정하면 그 달로 이동한 뒤 조회 (이번 달 이후는 거절)
    - 지정하지 않으면 세션에 표시 중인 달을 조회
    """
    calendar_service = current_app.services['calendar']
    ctx = g.session
    try:
        query = CalendarQuerySchema().load(request.args)
        with ctx.lock:
            if 'year' in query:
                displayed = calendar_service.jump_to(ctx, query['year'], query['month'])
            else:
                displayed = calendar_service.displayed_month(ctx)
            month_view = calendar_service.build_month(ctx, displayed.year, displayed.month)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except NavigationRejected as e:
        return jsonify({"error_code": "FUTURE_MONTH", "message": e.notice}), 400
    except Exception as e:
        logging.error(f"달력 조회 중 오류 발생 (uid: {ctx.uid}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_LOAD_FAILED", "message": strings.SNIPPET_LOAD_ERROR}), 500

    response = MonthViewSchema().dump(month_view)
    response['days_of_week'] = strings.DAYS_OF_WEEK
    response['year_options'] = year_options(calendar_service.today())
    return jsonify(response), 200


@calendar_bp.route('/navigate', methods=['POST'])
@session_required
def navigate():
    """
    이전 달/다음 달/오늘/연도 선택/월 선택.
    거절되면 표시 중인 달은 그대로이고 안내 문구를 반환합니다.
    """
    calendar_service = current_app.services['calendar']
    ctx = g.session
    try:
        data = NavigateRequestSchema().load(request.get_json(silent=True) or {})
        with ctx.lock:
            displayed = calendar_service.navigate(ctx, data['action'], data.get('value'))
        return jsonify({"year": displayed.year, "month": displayed.month}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except NavigationRejected as e:
        with ctx.lock:
            displayed = calendar_service.displayed_month(ctx)
        return jsonify({
            "error_code": "FUTURE_MONTH",
            "message": e.notice,
            "year": displayed.year,
            "month": displayed.month,
        }), 400
    except ValueError as e:
        return jsonify({"error_code": "INVALID_NAVIGATION", "message": str(e)}), 400


@calendar_bp.route('/select-day', methods=['POST'])
@session_required
def select_day():
    """날짜 칸 클릭. 오늘/과거 날짜면 스니펫 화면 경로를 돌려줍니다."""
    calendar_service = current_app.services['calendar']
    try:
        data = SelectDayRequestSchema().load(request.get_json(silent=True) or {})
        return jsonify({"route": calendar_service.select_day(data['date'])}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except NavigationRejected as e:
        return jsonify({"error_code": "FUTURE_DATE", "message": e.notice}), 400
