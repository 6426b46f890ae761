# springboard/api/snippets/ordering.py
"""
달력과 스니펫 화면이 같은 순서로 작성자를 보여주도록 정렬 규칙을 한 곳에 둡니다.
규칙: 로그인한 사용자가 맨 앞, 나머지는 modified_at 오름차순.
"""
from typing import Dict, List, Optional

from springboard.models.calendar import AuthorBadge
from springboard.models.snippet import Snippet
from springboard.models.user import User


def order_snippets(snippets: List[Snippet], viewer_uid: str) -> List[Snippet]:
    return sorted(snippets, key=lambda s: (s.user_id != viewer_uid, s.modified_at))


def collect_authors(snippets: List[Snippet], viewer_uid: str,
                    profiles: Optional[Dict[str, User]] = None) -> List[AuthorBadge]:
    """
    스니펫 목록에서 작성자를 이메일 기준으로 중복 제거하고(가장 최근 modified_at 유지)
    정렬된 AuthorBadge 목록을 반환합니다.
    """
    profiles = profiles or {}
    latest: Dict[str, Snippet] = {}
    for snippet in snippets:
        author_key = snippet.user_email or snippet.user_id
        current = latest.get(author_key)
        if current is None or snippet.modified_at > current.modified_at:
            latest[author_key] = snippet

    badges = []
    for snippet in latest.values():
        profile = profiles.get(snippet.user_email) if snippet.user_email else None
        badges.append(AuthorBadge(
            user_id=snippet.user_id,
            email=snippet.user_email,
            modified_at=snippet.modified_at,
            is_me=snippet.user_id == viewer_uid,
            display_name=profile.display_name if profile else None,
            photo_url=profile.photo_url if profile else None,
        ))
    badges.sort(key=lambda b: (not b.is_me, b.modified_at))
    return badges
