# springboard/api/teams/services.py
import logging
from typing import List, Optional
from firebase_admin import firestore

from springboard.models.team import Team, TeamMember
from springboard.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


class TeamService:
    """
    팀 조회를 담당하는 서비스 클래스. 'teams' 컬렉션은 읽기 전용입니다.
    """
    def __init__(self, profile_service: ProfileService, db=None):
        self.db = db or firestore.client()
        self.teams_ref = self.db.collection('teams')
        self.profile_service = profile_service

    def find_team(self, email: Optional[str]) -> Optional[Team]:
        """
        email을 멤버로 가진 팀을 찾습니다.
        여러 팀에 속해 있으면 teamName(같으면 문서 ID) 사전순으로 첫 번째 팀을 고릅니다.
        """
        if not email:
            return None
        teams = []
        for doc in self.teams_ref.where('emails', 'array_contains', email).stream():
            try:
                teams.append(Team.from_firestore(doc.to_dict(), doc_id=doc.id))
            except ValueError as e:
                logger.warning(f"잘못된 teams 문서 무시: {e}")
        if not teams:
            logger.info(f"소속 팀 없음: {email}")
            return None

        teams.sort(key=lambda t: (t.team_name, t.team_id or ''))
        if len(teams) > 1:
            logger.warning(
                f"{email}이(가) 여러 팀에 속해 있습니다: {[t.team_name for t in teams]} "
                f"-> '{teams[0].team_name}' 사용"
            )
        return teams[0]

    def resolve_team_name(self, email: Optional[str]) -> Optional[str]:
        """
        팀 이름을 반환합니다. 조회 실패 시에도 예외 대신 None(팀 없음)을 돌려줍니다.
        """
        try:
            team = self.find_team(email)
        except Exception as e:
            logger.error(f"소속 팀 조회 실패 ({email}): {e}", exc_info=True)
            return None
        if team:
            logger.info(f"Found team for user: {team.team_name}")
        return team.team_name if team else None

    def list_team_members(self, email: str) -> List[TeamMember]:
        """
        내 팀의 다른 팀원 목록을 프로필과 함께 반환합니다.
        순서는 팀 문서의 emails 배열 순서를 따르며, 프로필이 없는 팀원도 포함됩니다.
        """
        team = self.find_team(email)
        if not team:
            return []

        member_emails = []
        for member_email in team.emails:
            if member_email != email and member_email not in member_emails:
                member_emails.append(member_email)
        if not member_emails:
            return []

        profiles = self.profile_service.get_by_emails(member_emails)
        members = []
        for priority, member_email in enumerate(member_emails):
            profile = profiles.get(member_email)
            members.append(TeamMember(
                email=member_email,
                priority=priority,
                display_name=profile.display_name if profile else None,
                photo_url=profile.photo_url if profile else None,
            ))
        return members
