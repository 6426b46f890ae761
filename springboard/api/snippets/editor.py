# springboard/api/snippets/editor.py
"""
하루치 스니펫 화면(보기/편집)의 상태 머신.

상태: loading -> view_with_content | view_empty | edit
- 내 스니펫이 있으면 보기 모드
- 없고 오늘이며 팀 목록도 비어 있으면 바로 편집 모드
- 그 외에는 빈 보기 모드 ('작성' 버튼)

편집기 인스턴스는 세션(SessionContext.editors)에 날짜별로 보관됩니다.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from springboard.api.snippets.ordering import order_snippets
from springboard.api.snippets.services import SnippetService
from springboard.core import strings
from springboard.core.exceptions import ConfirmationRequired
from springboard.models.snippet import Snippet
from springboard.models.user import User
from springboard.services.edit_window import EditWindowPolicy
from springboard.services.profile_service import ProfileService
from springboard.session.context import SessionContext
from springboard.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)


class EditorMode(str, Enum):
    LOADING = 'loading'
    VIEW_WITH_CONTENT = 'view_with_content'
    VIEW_EMPTY = 'view_empty'
    EDIT = 'edit'


class KeyAction(str, Enum):
    SAVED = 'saved'
    CANCELLED = 'cancelled'
    SUGGESTION_APPLIED = 'suggestion_applied'
    IGNORED = 'ignored'


# 빈 본문에 제안 내용을 넣는 단축키
SUGGESTION_KEY = 'Tab'


class SnippetEditor:
    def __init__(self, date_key: str, session: SessionContext, snippet_service: SnippetService,
                 profile_service: ProfileService, edit_window: EditWindowPolicy):
        DateTimeUtils.parse_date_key(date_key)
        self.date_key = date_key
        self.session = session
        self.snippet_service = snippet_service
        self.profile_service = profile_service
        self.edit_window = edit_window

        self.mode = EditorMode.LOADING
        self.snippets: List[Snippet] = []
        self.my_snippet: Optional[Snippet] = None
        self.draft = ''
        self.saved_body = ''
        self.suggestion: Optional[str] = None
        self.suggestion_looked_up = False

    # ------------------------------------------------------------------ 조회

    @property
    def is_today(self) -> bool:
        return self.edit_window.is_today(self.date_key)

    @property
    def snippet_exists(self) -> bool:
        return self.my_snippet is not None

    def load(self) -> None:
        """팀의 해당 날짜 스니펫을 다시 불러오고 초기 모드를 정합니다."""
        self.mode = EditorMode.LOADING
        try:
            if self.session.team_name:
                snippets = self.snippet_service.list_for_date(self.session.team_name, self.date_key)
            else:
                # 팀이 없어도 내 스니펫은 보여주고, 오늘이면 작성할 수 있게 합니다.
                own = self.snippet_service.get_snippet(self.session.uid, self.date_key)
                snippets = [own] if own else []
        except Exception as e:
            logger.error(f"스니펫 목록 조회 실패 ({self.date_key}): {e}", exc_info=True)
            self.mode = EditorMode.VIEW_EMPTY
            raise

        self.snippets = order_snippets(snippets, self.session.uid)
        self.my_snippet = next((s for s in self.snippets if s.user_id == self.session.uid), None)
        self.saved_body = self.my_snippet.snippet if self.my_snippet else ''
        self.draft = self.saved_body
        self._refresh_profiles({s.user_email for s in self.snippets if s.user_email})

        if self.my_snippet:
            self.mode = EditorMode.VIEW_WITH_CONTENT
        elif self.is_today and not self.snippets:
            self._enter_edit()
        else:
            self.mode = EditorMode.VIEW_EMPTY

    def _refresh_profiles(self, emails) -> None:
        if not emails:
            return
        try:
            self.session.remember_profiles(self.profile_service.get_by_emails(emails))
        except Exception as e:
            # 프로필이 없어도 이메일로 표시할 수 있으므로 화면은 계속 그립니다.
            logger.error(f"사용자 프로필 조회 실패: {e}", exc_info=True)

    # ------------------------------------------------------------------ 편집

    def begin_edit(self) -> None:
        """'작성'/'수정' 버튼. 편집 가능 시간인지 지금 시각으로 확인합니다."""
        self.edit_window.ensure_can_edit(self.date_key)
        if self.mode is EditorMode.EDIT:
            return
        self._enter_edit()

    def _enter_edit(self) -> None:
        self.draft = self.saved_body
        self.mode = EditorMode.EDIT
        if self.my_snippet is None and self.is_today and not self.suggestion_looked_up:
            self._look_up_suggestion()

    def _look_up_suggestion(self) -> None:
        """가장 최근의 이전 스니펫을 제안으로 준비합니다. 편집기당 한 번만 조회합니다."""
        self.suggestion_looked_up = True
        try:
            previous = self.snippet_service.find_latest_before(
                self.session.uid, self.session.team_name, self.date_key)
        except Exception as e:
            logger.error(f"이전 스니펫 조회 실패 ({self.session.uid}): {e}", exc_info=True)
            previous = None
        self.suggestion = previous.snippet if previous and previous.snippet else strings.SNIPPET_TEMPLATE

    def _ensure_editing(self) -> None:
        if self.mode is not EditorMode.EDIT:
            raise ValueError(strings.NOT_IN_EDIT_MODE)

    def update_draft(self, body: str) -> None:
        self._ensure_editing()
        self.draft = body

    def apply_suggestion(self) -> bool:
        """본문이 비어 있을 때만 제안 내용을 넣습니다."""
        self._ensure_editing()
        if self.draft.strip() or not self.suggestion:
            return False
        self.draft = self.suggestion
        return True

    def cancel(self) -> None:
        """편집 내용을 버리고 마지막 저장본으로 되돌립니다. 저장은 하지 않습니다."""
        if self.mode is not EditorMode.EDIT:
            return
        self.draft = self.saved_body
        self.mode = EditorMode.VIEW_WITH_CONTENT if self.my_snippet else EditorMode.VIEW_EMPTY

    def save(self, body: Optional[str] = None) -> Snippet:
        self._ensure_editing()
        self.edit_window.ensure_can_edit(self.date_key)
        if body is not None:
            self.draft = body

        # 실패하면 예외가 그대로 올라가고 로컬 상태는 바뀌지 않습니다.
        saved = self.snippet_service.save_snippet(
            user_id=self.session.uid,
            user_email=self.session.email,
            team_name=self.session.team_name,
            date_key=self.date_key,
            body=self.draft,
            now=self.edit_window.clock(),
        )

        others = [s for s in self.snippets if s.snippet_id != saved.snippet_id]
        self.snippets = order_snippets(others + [saved], self.session.uid)
        self.my_snippet = saved
        self.saved_body = saved.snippet
        self.draft = saved.snippet
        self.mode = EditorMode.VIEW_WITH_CONTENT
        self._refresh_own_profile()
        return saved

    def _refresh_own_profile(self) -> None:
        """내 프로필 캐시가 없거나 필드가 비어 있으면 users 문서에서 다시 읽습니다."""
        cached = self.session.profile_for(self.session.email)
        if cached is not None and cached.is_complete:
            return
        try:
            profile = self.profile_service.get_by_uid(self.session.uid)
        except Exception as e:
            logger.error(f"프로필 갱신 실패 (uid: {self.session.uid}): {e}", exc_info=True)
            profile = None
        if profile is None:
            identity = self.session.identity
            profile = User(uid=identity.uid, email=identity.email,
                           display_name=identity.display_name, photo_url=identity.photo_url)
        if profile.email:
            self.session.remember_profiles({profile.email: profile})

    def delete(self, confirm: bool = False) -> None:
        """
        내 스니펫을 삭제합니다. 되돌릴 수 없으므로 confirm=True 일 때만 진행합니다.
        """
        if self.my_snippet is None:
            raise ValueError("삭제할 스니펫이 없습니다.")
        self.edit_window.ensure_can_edit(self.date_key)
        if not confirm:
            raise ConfirmationRequired(strings.DELETE_CONFIRM)

        self.snippet_service.delete_snippet(self.session.uid, self.date_key)

        deleted_id = self.my_snippet.snippet_id
        self.snippets = [s for s in self.snippets if s.snippet_id != deleted_id]
        self.my_snippet = None
        self.saved_body = ''
        self.draft = ''
        self.mode = EditorMode.VIEW_EMPTY

    def handle_key(self, key: str, ctrl: bool = False, meta: bool = False) -> KeyAction:
        """
        편집 모드 단축키
        - Ctrl/Cmd + Enter: 저장
        - Escape: 취소
        - Tab: (본문이 비어 있을 때) 제안 내용 넣기
        """
        if self.mode is not EditorMode.EDIT:
            return KeyAction.IGNORED
        if key == 'Enter' and (ctrl or meta):
            self.save()
            return KeyAction.SAVED
        if key == 'Escape':
            self.cancel()
            return KeyAction.CANCELLED
        if key == SUGGESTION_KEY and not (ctrl or meta):
            return KeyAction.SUGGESTION_APPLIED if self.apply_suggestion() else KeyAction.IGNORED
        return KeyAction.IGNORED

    # ------------------------------------------------------------------ 응답

    def to_state(self) -> Dict[str, Any]:
        can_edit = self.edit_window.can_edit(self.date_key)
        editing = self.mode is EditorMode.EDIT
        entries = []
        for snippet in self.snippets:
            profile = self.session.profile_for(snippet.user_email)
            entries.append({
                'snippet_id': snippet.snippet_id,
                'user_id': snippet.user_id,
                'user_email': snippet.user_email,
                'date': snippet.date,
                'snippet': snippet.snippet,
                'created_at': snippet.created_at,
                'modified_at': snippet.modified_at,
                'team_name': snippet.team_name,
                'is_mine': snippet.user_id == self.session.uid,
                'display_name': profile.display_name if profile else None,
                'photo_url': profile.photo_url if profile else None,
            })

        empty_message = None
        if not entries:
            empty_message = strings.NO_SNIPPET_TODAY if self.is_today else strings.NO_SNIPPET_FOR_DATE

        return {
            'date': self.date_key,
            'mode': self.mode.value,
            'is_today': self.is_today,
            'can_edit': can_edit,
            'can_create': can_edit and not editing and self.my_snippet is None,
            'snippet_exists': self.snippet_exists,
            'body': self.draft if editing else self.saved_body,
            'suggestion': self.suggestion if editing and not self.draft.strip() else None,
            'entries': entries,
            'empty_message': empty_message,
        }
