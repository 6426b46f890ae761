# springboard/session/test_session_registry.py
import pytest

from springboard.api.teams.services import TeamService
from springboard.conftest import FakeFirestore
from springboard.models.user import Identity
from springboard.services.authorization_service import (
    AllowListPolicy, AuthorizationService, AuthorizationStatus
)
from springboard.services.profile_service import ProfileService
from springboard.session.registry import SessionRegistry
from springboard.session.stream import AuthStateStream, SignedIn, SignedOut

ALICE = Identity('uid-a', 'a@x.com', 'Alice', 'https://example.com/a.png')

@pytest.fixture
def db():
    db = FakeFirestore()
    db.seed('teams', 't1', {'teamName': 'Alpha', 'emails': ['a@x.com']})
    return db

@pytest.fixture
def stream():
    return AuthStateStream()

@pytest.fixture
def registry(db, stream):
    profiles = ProfileService(db=db)
    registry = SessionRegistry(
        stream=stream,
        authorization_service=AuthorizationService(AllowListPolicy(source=lambda: 'a@x.com')),
        profile_service=profiles,
        team_service=TeamService(profiles, db=db),
    )
    registry.start()
    yield registry
    registry.stop()

def test_stream_subscribe_and_unsubscribe(stream):
    received = []
    unsubscribe = stream.subscribe(received.append)
    stream.publish(SignedOut('x'))
    unsubscribe()
    stream.publish(SignedOut('y'))
    assert received == [SignedOut('x')]
    assert stream.subscriber_count == 0

def test_closed_stream_rejects_events(stream):
    stream.close()
    with pytest.raises(RuntimeError):
        stream.publish(SignedIn(ALICE))
    with pytest.raises(RuntimeError):
        stream.subscribe(lambda event: None)

def test_sign_in_builds_session(db, registry):
    ctx = registry.sign_in(ALICE)
    assert ctx.is_authorized
    assert ctx.team_name == 'Alpha'
    assert ctx.profile_for('a@x.com').display_name == 'Alice'
    assert db.docs('users')['uid-a']['email'] == 'a@x.com'
    assert registry.get('uid-a') is ctx

def test_unauthorized_user(registry):
    ctx = registry.sign_in(Identity('uid-z', 'z@x.com'))
    assert ctx.authorization.status is AuthorizationStatus.UNAUTHORIZED
    assert ctx.team_name is None

def test_profile_failure_does_not_block_sign_in(db, registry):
    db.fail('users', 'set')
    ctx = registry.sign_in(ALICE)
    assert ctx.is_authorized
    assert ctx.profiles == {}

def test_sign_in_again_replaces_session(registry):
    first = registry.sign_in(ALICE)
    first.editors['2025-06-01'] = object()
    second = registry.sign_in(ALICE)
    assert second is not first
    assert first.editors == {}
    assert registry.get('uid-a') is second

def test_sign_out_tears_down_session(registry):
    ctx = registry.sign_in(ALICE)
    ctx.editors['2025-06-01'] = object()
    registry.sign_out('uid-a')
    assert registry.get('uid-a') is None
    assert ctx.editors == {}
    # 이미 없는 세션의 로그아웃은 무시
    registry.sign_out('uid-a')

def test_sign_in_requires_subscription(registry):
    registry.stop()
    with pytest.raises(RuntimeError):
        registry.sign_in(ALICE)
