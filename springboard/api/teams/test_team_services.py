# springboard/api/teams/test_team_services.py
import pytest

from springboard.api.teams.services import TeamService
from springboard.conftest import FakeFirestore
from springboard.services.profile_service import ProfileService

@pytest.fixture
def db():
    db = FakeFirestore()
    db.seed('teams', 't1', {'teamName': 'Alpha', 'emails': ['a@x.com', 'b@x.com', 'c@x.com']})
    db.seed('users', 'uid-c', {'uid': 'uid-c', 'email': 'c@x.com', 'displayName': 'Carol'})
    return db

@pytest.fixture
def team_service(db):
    return TeamService(ProfileService(db=db), db=db)

def test_resolve_team_name(team_service):
    assert team_service.resolve_team_name('a@x.com') == 'Alpha'
    assert team_service.resolve_team_name('nobody@x.com') is None
    assert team_service.resolve_team_name(None) is None

def test_multiple_teams_pick_smallest_name(db, team_service):
    db.seed('teams', 't0', {'teamName': 'Zulu', 'emails': ['a@x.com']})
    db.seed('teams', 't2', {'teamName': 'Bravo', 'emails': ['a@x.com']})
    assert team_service.resolve_team_name('a@x.com') == 'Alpha'

def test_invalid_team_documents_are_skipped(db, team_service):
    db.seed('teams', 'broken', {'emails': ['solo@x.com']})
    assert team_service.resolve_team_name('solo@x.com') is None

def test_lookup_failure_means_no_team(db, team_service):
    db.fail('teams', 'query')
    assert team_service.resolve_team_name('a@x.com') is None

def test_list_team_members_excludes_self_and_keeps_order(team_service):
    members = team_service.list_team_members('a@x.com')
    assert [m.email for m in members] == ['b@x.com', 'c@x.com']
    assert [m.priority for m in members] == [0, 1]
    assert members[0].display_name is None
    assert members[1].display_name == 'Carol'

def test_list_team_members_without_team(team_service):
    assert team_service.list_team_members('nobody@x.com') == []
