# springboard/services/test_profile_service.py
from springboard.conftest import FakeFirestore
from springboard.models.user import Identity
from springboard.services import profile_service as profile_service_module
from springboard.services.profile_service import ProfileService

def test_upsert_creates_then_merges():
    db = FakeFirestore()
    service = ProfileService(db=db)

    service.upsert_from_identity(Identity('u1', 'a@x.com', 'Alice', 'https://example.com/a.png'))
    first_login = db.docs('users')['u1']['lastLogin']

    # 두 번째 로그인에서 사진이 빠져도 기존 값은 유지됩니다.
    service.upsert_from_identity(Identity('u1', 'a@x.com', 'Alice Kim', None))
    doc = db.docs('users')['u1']
    assert doc['displayName'] == 'Alice Kim'
    assert doc['photoURL'] == 'https://example.com/a.png'
    assert doc['lastLogin'] >= first_login
    assert len(db.docs('users')) == 1

def test_get_by_uid():
    db = FakeFirestore()
    db.seed('users', 'u1', {'uid': 'u1', 'email': 'a@x.com', 'lastLogin': '2025-06-01T00:00:00Z'})
    service = ProfileService(db=db)

    user = service.get_by_uid('u1')
    assert user.email == 'a@x.com'
    assert user.last_login.tzinfo is not None
    assert service.get_by_uid('missing') is None

def test_get_by_emails_batches_in_queries(monkeypatch):
    monkeypatch.setattr(profile_service_module, 'EMAIL_BATCH_SIZE', 2)
    db = FakeFirestore()
    for i in range(5):
        db.seed('users', f'u{i}', {'uid': f'u{i}', 'email': f'user{i}@x.com'})
    service = ProfileService(db=db)

    profiles = service.get_by_emails([f'user{i}@x.com' for i in range(5)] + ['user0@x.com', None])
    assert sorted(profiles) == [f'user{i}@x.com' for i in range(5)]

    in_queries = [filters for name, filters in db.query_log if name == 'users']
    assert len(in_queries) == 3
    assert all(len(filters[0][2]) <= 2 for filters in in_queries)
