# springboard/api/snippets/services.py

import logging
from datetime import datetime
from firebase_admin import firestore
from typing import Optional, List, Iterable

from springboard.models.snippet import Snippet
from springboard.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)


class SnippetService:
    """
    'snippets' 컬렉션 읽기/쓰기를 담당하는 서비스 클래스.
    - 문서 ID는 '{user_id}_{date}' 이므로 같은 날 저장을 반복해도 문서는 하나입니다.
    - 쓰기는 본인 문서에만 하므로 다른 사용자와 충돌하지 않습니다.
    """
    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.snippets_ref = self.db.collection('snippets')

    def _to_snippets(self, docs: Iterable) -> List[Snippet]:
        snippets = []
        for doc in docs:
            try:
                snippets.append(Snippet.from_firestore(doc.to_dict(), doc_id=doc.id))
            except ValueError as e:
                logger.warning(f"잘못된 snippets 문서 무시 (id: {doc.id}): {e}")
        return snippets

    def get_snippet(self, user_id: str, date_key: str) -> Optional[Snippet]:
        doc = self.snippets_ref.document(Snippet.make_id(user_id, date_key)).get()
        if not doc.exists:
            return None
        return Snippet.from_firestore(doc.to_dict(), doc_id=doc.id)

    def list_for_date(self, team_name: str, date_key: str) -> List[Snippet]:
        """팀의 특정 날짜 스니펫 전체"""
        query = (self.snippets_ref
                 .where('teamName', '==', team_name)
                 .where('date', '==', date_key))
        return self._to_snippets(query.stream())

    def list_for_range(self, team_name: str, start_key: str, end_key: str) -> List[Snippet]:
        """
        팀의 [start_key, end_key] 기간 스니펫 전체 (양 끝 포함).
        date는 YYYY-MM-DD 문자열이라 사전순 비교가 날짜 비교와 같습니다.
        """
        if start_key > end_key:
            raise ValueError(f"시작일이 종료일보다 늦습니다: {start_key} > {end_key}")
        query = (self.snippets_ref
                 .where('teamName', '==', team_name)
                 .where('date', '>=', start_key)
                 .where('date', '<=', end_key))
        return self._to_snippets(query.stream())

    def find_latest_before(self, user_id: str, team_name: Optional[str], before_key: str) -> Optional[Snippet]:
        """before_key 이전 날짜 중 가장 최근의 내 스니펫 (같은 팀)"""
        query = self.snippets_ref.where('userId', '==', user_id)
        if team_name:
            query = query.where('teamName', '==', team_name)
        query = (query
                 .where('date', '<', before_key)
                 .order_by('date', direction=firestore.Query.DESCENDING)
                 .limit(1))
        snippets = self._to_snippets(query.stream())
        return snippets[0] if snippets else None

    def save_snippet(self, user_id: str, user_email: Optional[str], team_name: Optional[str],
                     date_key: str, body: str, now: Optional[datetime] = None) -> Snippet:
        """
        스니펫을 저장합니다 (upsert).
        - 처음 저장: created_at, modified_at 모두 now
        - 이후 저장: created_at은 유지하고 본문/modified_at/팀/이메일만 merge
        """
        DateTimeUtils.parse_date_key(date_key)
        now = DateTimeUtils.normalize_timestamp(now or DateTimeUtils.now())
        snippet_id = Snippet.make_id(user_id, date_key)
        snippet_ref = self.snippets_ref.document(snippet_id)

        try:
            snippet_doc = snippet_ref.get()
            if snippet_doc.exists:
                existing = Snippet.from_firestore(snippet_doc.to_dict(), doc_id=snippet_doc.id)
                updates = {
                    'snippet': body,
                    'modified_at': now,
                    'teamName': team_name,
                    'userEmail': user_email,
                }
                snippet_ref.set(DateTimeUtils.for_firestore(updates), merge=True)
                saved = Snippet(
                    snippet_id=existing.snippet_id,
                    user_id=existing.user_id,
                    user_email=user_email,
                    date=existing.date,
                    snippet=body,
                    created_at=existing.created_at,
                    modified_at=now,
                    team_name=team_name,
                )
                logger.info(f"스니펫 수정 완료: {snippet_id}")
            else:
                saved = Snippet(
                    snippet_id=snippet_id,
                    user_id=user_id,
                    user_email=user_email,
                    date=date_key,
                    snippet=body,
                    created_at=now,
                    modified_at=now,
                    team_name=team_name,
                )
                snippet_ref.set(saved.to_firestore())
                logger.info(f"새 스니펫 생성 완료: {snippet_id}")
            return saved
        except Exception as e:
            logger.error(f"스니펫 저장 실패 ({snippet_id}): {e}", exc_info=True)
            raise

    def delete_snippet(self, user_id: str, date_key: str) -> None:
        """본인 스니펫을 삭제합니다. 문서가 없으면 ValueError."""
        snippet_id = Snippet.make_id(user_id, date_key)
        snippet_ref = self.snippets_ref.document(snippet_id)
        try:
            snippet_doc = snippet_ref.get()
            if not snippet_doc.exists:
                raise ValueError("삭제할 스니펫이 없습니다.")
            if snippet_doc.to_dict().get('userId') != user_id:
                raise PermissionError("스니펫을 삭제할 권한이 없습니다.")
            snippet_ref.delete()
            logger.info(f"스니펫 삭제 완료: {snippet_id}")
        except (ValueError, PermissionError):
            raise
        except Exception as e:
            logger.error(f"스니펫 삭제 실패 ({snippet_id}): {e}", exc_info=True)
            raise
