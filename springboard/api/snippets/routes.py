# springboard/api/snippets/routes.py
"""
스니펫 자원 관리 라우트

자원: /api/snippets/{date}
- 하루치 스니펫 화면(보기/편집) 상태를 세션에 두고 단계별로 조작합니다.
- 모든 변경 요청은 요청 시점의 시각으로 편집 가능 여부를 다시 확인합니다.
"""
import logging
from flask import Blueprint, request, jsonify, current_app, g
from marshmallow import ValidationError

from springboard.api.snippets.editor import SnippetEditor
from springboard.api.snippets.schemas import (
    RangeQuerySchema, DraftSchema, SaveRequestSchema, DeleteQuerySchema,
    KeyEventSchema, SnippetSchema, EditorStateSchema
)
from springboard.core import strings
from springboard.core.exceptions import ConfirmationRequired, EditWindowClosed
from springboard.core.security import session_required
from springboard.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)

snippets_bp = Blueprint('snippets_bp', __name__)

def _open_editor(ctx, date_key: str, reload: bool = False) -> SnippetEditor:
    """세션에 열린 편집기를 가져오고, 없거나 reload면 새로 만들어 불러옵니다."""
    editor = ctx.editors.get(date_key)
    if editor is None or reload:
        editor = SnippetEditor(
            date_key=date_key,
            session=ctx,
            snippet_service=current_app.services['snippets'],
            profile_service=current_app.services['profiles'],
            edit_window=current_app.services['edit_window'],
        )
        editor.load()
        ctx.keep_editor(date_key, editor)
    return editor

def _state_response(editor: SnippetEditor, status: int = 200, **extra):
    response = EditorStateSchema().dump(editor.to_state())
    response.update(extra)
    return jsonify(response), status

def _invalid_date_response(date: str):
    return jsonify({
        "error_code": "INVALID_DATE_FORMAT",
        "message": f"잘못된 날짜 형식입니다 (YYYY-MM-DD): {date}"
    }), 400

def _is_valid_date(date: str) -> bool:
    try:
        DateTimeUtils.parse_date_key(date)
        return True
    except ValueError:
        return False


@snippets_bp.route('', methods=['GET'])
@session_required
def list_team_snippets():
    """팀의 기간별 스니펫 목록 (양 끝 날짜 포함)"""
    ctx = g.session
    try:
        query = RangeQuerySchema().load(request.args)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    if not ctx.team_name:
        return jsonify({"snippets": []}), 200
    try:
        snippets = current_app.services['snippets'].list_for_range(ctx.team_name, query['start'], query['end'])
        return jsonify({"snippets": SnippetSchema(many=True).dump(snippets)}), 200
    except Exception as e:
        logger.error(f"기간별 스니펫 조회 실패 ({query}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_LOAD_FAILED", "message": strings.SNIPPET_LOAD_ERROR}), 500


@snippets_bp.route('/<string:date>', methods=['GET'])
@session_required
def open_snippet_page(date: str):
    """
    해당 날짜의 스니펫 화면을 엽니다 (매번 새로 불러옵니다).

    Response:
        200: 화면 상태 (mode, entries, body, can_edit ...)
        400: 잘못된 날짜 형식
    """
    if not _is_valid_date(date):
        return _invalid_date_response(date)
    ctx = g.session
    try:
        with ctx.lock:
            editor = _open_editor(ctx, date, reload=True)
            return _state_response(editor)
    except Exception as e:
        logger.error(f"스니펫 화면 로딩 실패 ({ctx.uid}, {date}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_LOAD_FAILED", "message": strings.SNIPPET_LOAD_ERROR}), 500


@snippets_bp.route('/<string:date>/edit', methods=['POST'])
@session_required
def begin_edit(date: str):
    """'작성'/'수정' 버튼 - 편집 모드로 전환"""
    if not _is_valid_date(date):
        return _invalid_date_response(date)
    ctx = g.session
    try:
        with ctx.lock:
            editor = _open_editor(ctx, date)
            editor.begin_edit()
            return _state_response(editor)
    except EditWindowClosed as e:
        return jsonify({"error_code": "EDIT_WINDOW_CLOSED", "message": e.notice}), 403
    except Exception as e:
        logger.error(f"편집 모드 전환 실패 ({ctx.uid}, {date}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_LOAD_FAILED", "message": strings.SNIPPET_LOAD_ERROR}), 500


@snippets_bp.route('/<string:date>/draft', methods=['PUT'])
@session_required
def update_draft(date: str):
    """편집 중인 본문 갱신"""
    if not _is_valid_date(date):
        return _invalid_date_response(date)
    ctx = g.session
    try:
        data = DraftSchema().load(request.get_json(silent=True) or {})
        with ctx.lock:
            editor = _open_editor(ctx, date)
            editor.update_draft(data['body'])
            return _state_response(editor)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "INVALID_EDITOR_STATE", "message": str(e)}), 409
    except Exception as e:
        logger.error(f"본문 갱신 실패 ({ctx.uid}, {date}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_LOAD_FAILED", "message": strings.SNIPPET_LOAD_ERROR}), 500


@snippets_bp.route('/<string:date>/suggestion/apply', methods=['POST'])
@session_required
def apply_suggestion(date: str):
    """빈 본문에 제안 내용(이전 스니펫 또는 템플릿) 넣기"""
    if not _is_valid_date(date):
        return _invalid_date_response(date)
    ctx = g.session
    try:
        with ctx.lock:
            editor = _open_editor(ctx, date)
            applied = editor.apply_suggestion()
            return _state_response(editor, applied=applied)
    except ValueError as e:
        return jsonify({"error_code": "INVALID_EDITOR_STATE", "message": str(e)}), 409
    except Exception as e:
        logger.error(f"제안 내용 적용 실패 ({ctx.uid}, {date}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_LOAD_FAILED", "message": strings.SNIPPET_LOAD_ERROR}), 500


@snippets_bp.route('/<string:date>/save', methods=['POST'])
@session_required
def save_snippet(date: str):
    """
    스니펫 저장 (upsert). 성공하면 보기 모드로 돌아갑니다.
    실패하면 화면 상태는 바뀌지 않습니다.
    """
    if not _is_valid_date(date):
        return _invalid_date_response(date)
    ctx = g.session
    try:
        data = SaveRequestSchema().load(request.get_json(silent=True) or {})
        with ctx.lock:
            editor = _open_editor(ctx, date)
            editor.save(data.get('body'))
            return _state_response(editor)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except EditWindowClosed as e:
        return jsonify({"error_code": "EDIT_WINDOW_CLOSED", "message": e.notice}), 403
    except ValueError as e:
        return jsonify({"error_code": "INVALID_EDITOR_STATE", "message": str(e)}), 409
    except Exception as e:
        logger.error(f"스니펫 저장 중 오류 발생 ({ctx.uid}, {date}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_SAVE_FAILED", "message": strings.SNIPPET_SAVE_ERROR}), 500


@snippets_bp.route('/<string:date>/cancel', methods=['POST'])
@session_required
def cancel_edit(date: str):
    """편집 취소 - 마지막 저장본으로 되돌림 (저장하지 않음)"""
    if not _is_valid_date(date):
        return _invalid_date_response(date)
    ctx = g.session
    try:
        with ctx.lock:
            editor = _open_editor(ctx, date)
            editor.cancel()
            return _state_response(editor)
    except Exception as e:
        logger.error(f"편집 취소 실패 ({ctx.uid}, {date}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_LOAD_FAILED", "message": strings.SNIPPET_LOAD_ERROR}), 500


@snippets_bp.route('/<string:date>/keys', methods=['POST'])
@session_required
def handle_key(date: str):
    """
    편집 모드 단축키
    - Ctrl/Cmd + Enter: 저장
    - Escape: 취소
    - Tab: 본문이 비어 있을 때 제안 내용 넣기
    """
    if not _is_valid_date(date):
        return _invalid_date_response(date)
    ctx = g.session
    try:
        data = KeyEventSchema().load(request.get_json(silent=True) or {})
        with ctx.lock:
            editor = _open_editor(ctx, date)
            action = editor.handle_key(data['key'], ctrl=data['ctrl'], meta=data['meta'])
            return _state_response(editor, action=action.value)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except EditWindowClosed as e:
        return jsonify({"error_code": "EDIT_WINDOW_CLOSED", "message": e.notice}), 403
    except Exception as e:
        logger.error(f"단축키 처리 중 오류 발생 ({ctx.uid}, {date}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_SAVE_FAILED", "message": strings.SNIPPET_SAVE_ERROR}), 500


@snippets_bp.route('/<string:date>', methods=['DELETE'])
@session_required
def delete_snippet(date: str):
    """
    내 스니펫 삭제 (되돌릴 수 없음).
    - confirm=true 가 없으면 확인 문구와 함께 428을 반환하고 아무것도 하지 않습니다.
    """
    if not _is_valid_date(date):
        return _invalid_date_response(date)
    ctx = g.session
    try:
        query = DeleteQuerySchema().load(request.args)
        with ctx.lock:
            editor = _open_editor(ctx, date)
            if not editor.snippet_exists:
                return jsonify({"error_code": "SNIPPET_NOT_FOUND", "message": "삭제할 스니펫이 없습니다."}), 404
            editor.delete(confirm=query['confirm'])
            return _state_response(editor)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except EditWindowClosed as e:
        return jsonify({"error_code": "EDIT_WINDOW_CLOSED", "message": e.notice}), 403
    except ConfirmationRequired as e:
        return jsonify({"error_code": "CONFIRMATION_REQUIRED", "message": e.notice}), 428
    except PermissionError as e:
        return jsonify({"error_code": "FORBIDDEN", "message": str(e)}), 403
    except ValueError as e:
        return jsonify({"error_code": "SNIPPET_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logger.error(f"스니펫 삭제 중 오류 발생 ({ctx.uid}, {date}): {e}", exc_info=True)
        return jsonify({"error_code": "SNIPPET_DELETE_FAILED", "message": strings.SNIPPET_DELETE_ERROR}), 500
