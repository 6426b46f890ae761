# springboard/conftest.py
"""
테스트 공용 fixture

- FakeFirestore: 서비스가 사용하는 Firestore 쿼리만 흉내내는 메모리 저장소
- FakeClock: 기준 시간대(Asia/Seoul) 현재 시각을 테스트에서 고정/이동
- app / client / login: 실제 create_app()에 가짜 DB와 시계를 주입한 Flask 앱
"""
import copy
import itertools
from datetime import datetime, timezone

import firebase_admin.auth
import pytest
from dateutil import tz

from springboard import create_app

SEOUL = tz.gettz('Asia/Seoul')


# ══════════════════════════════════════════════════════════════════════════
# FakeFirestore
# ══════════════════════════════════════════════════════════════════════════

class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocumentRef:
    def __init__(self, db, collection_name, doc_id):
        self._db = db
        self._collection_name = collection_name
        self.id = doc_id

    @property
    def _docs(self):
        return self._db.data.setdefault(self._collection_name, {})

    def get(self):
        self._db.check_failure(self._collection_name, 'get')
        return FakeSnapshot(self.id, self._docs.get(self.id))

    def set(self, data, merge=False):
        self._db.check_failure(self._collection_name, 'set')
        data = copy.deepcopy(data)
        if merge and self.id in self._docs:
            self._docs[self.id].update(data)
        else:
            self._docs[self.id] = data

    def update(self, data):
        self._db.check_failure(self._collection_name, 'set')
        if self.id not in self._docs:
            raise KeyError(self.id)
        self._docs[self.id].update(copy.deepcopy(data))

    def delete(self):
        self._db.check_failure(self._collection_name, 'delete')
        self._docs.pop(self.id, None)


_OPERATORS = {
    '==': lambda field, value: field == value,
    '<': lambda field, value: field is not None and field < value,
    '<=': lambda field, value: field is not None and field <= value,
    '>': lambda field, value: field is not None and field > value,
    '>=': lambda field, value: field is not None and field >= value,
    'in': lambda field, value: field in value,
    'array_contains': lambda field, value: isinstance(field, list) and value in field,
}


class FakeQuery:
    def __init__(self, db, collection_name, filters=(), orders=(), limit_count=None):
        self._db = db
        self._collection_name = collection_name
        self._filters = tuple(filters)
        self._orders = tuple(orders)
        self._limit = limit_count

    def where(self, field, op, value):
        if op not in _OPERATORS:
            raise ValueError(f"unsupported operator: {op}")
        return FakeQuery(self._db, self._collection_name,
                         self._filters + ((field, op, value),), self._orders, self._limit)

    def order_by(self, field, direction='ASCENDING'):
        return FakeQuery(self._db, self._collection_name,
                         self._filters, self._orders + ((field, direction),), self._limit)

    def limit(self, count):
        return FakeQuery(self._db, self._collection_name, self._filters, self._orders, count)

    def stream(self):
        self._db.check_failure(self._collection_name, 'query')
        self._db.query_log.append((self._collection_name, self._filters))
        docs = self._db.data.get(self._collection_name, {})
        matched = [
            (doc_id, data) for doc_id, data in docs.items()
            if all(_OPERATORS[op](data.get(field), value) for field, op, value in self._filters)
        ]
        for field, direction in reversed(self._orders):
            matched.sort(key=lambda item: item[1].get(field), reverse=direction == 'DESCENDING')
        if self._limit is not None:
            matched = matched[:self._limit]
        return iter([FakeSnapshot(doc_id, copy.deepcopy(data)) for doc_id, data in matched])

    def get(self):
        return list(self.stream())


class FakeCollection(FakeQuery):
    _auto_ids = itertools.count(1)

    def __init__(self, db, name):
        super().__init__(db, name)
        self.id = name

    def document(self, doc_id=None):
        return FakeDocumentRef(self._db, self._collection_name, doc_id or f"auto-{next(self._auto_ids)}")


class FakeFirestore:
    """
    컬렉션 이름 -> {문서 ID: dict} 로 데이터를 보관합니다.
    fail(collection, action)으로 특정 동작에서 오류를 일으킬 수 있습니다.
    action: 'get' | 'set' | 'delete' | 'query'
    """
    def __init__(self):
        self.data = {}
        self.failures = set()
        self.query_log = []

    def collection(self, name):
        return FakeCollection(self, name)

    def fail(self, collection_name, action):
        self.failures.add((collection_name, action))

    def check_failure(self, collection_name, action):
        if (collection_name, action) in self.failures:
            raise RuntimeError(f"firestore unavailable: {collection_name}.{action}")

    def seed(self, collection_name, doc_id, data):
        self.data.setdefault(collection_name, {})[doc_id] = copy.deepcopy(data)

    def docs(self, collection_name):
        return self.data.get(collection_name, {})


# ══════════════════════════════════════════════════════════════════════════
# FakeClock
# ══════════════════════════════════════════════════════════════════════════

class FakeClock:
    """호출하면 현재 시각(UTC)을 돌려줍니다. set_local()로 서울 현지 시각을 지정합니다."""
    def __init__(self, current=None):
        self.current = current or datetime(2025, 6, 1, 3, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.current

    def set_local(self, year, month, day, hour=12, minute=0):
        self.current = datetime(year, month, day, hour, minute, tzinfo=SEOUL).astimezone(timezone.utc)


def make_snippet_doc(user_id, date_key, body, team_name='Alpha', email=None, modified_at=None, created_at=None):
    """snippets 컬렉션 문서 dict를 만듭니다."""
    modified_at = modified_at or datetime(2025, 6, 1, 0, 0, tzinfo=timezone.utc)
    return {
        'snippetId': f"{user_id}_{date_key}",
        'userId': user_id,
        'userEmail': email,
        'date': date_key,
        'snippet': body,
        'created_at': created_at or modified_at,
        'modified_at': modified_at,
        'teamName': team_name,
    }


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_db():
    db = FakeFirestore()
    db.seed('teams', 'team-alpha', {'teamName': 'Alpha', 'emails': ['a@x.com', 'b@x.com', 'c@x.com']})
    db.seed('users', 'uid-b', {'uid': 'uid-b', 'email': 'b@x.com', 'displayName': 'Bob',
                               'photoURL': 'https://example.com/b.png'})
    return db


@pytest.fixture
def clock():
    clock = FakeClock()
    clock.set_local(2025, 6, 1, 12, 0)
    return clock


@pytest.fixture
def app(fake_db, clock, monkeypatch):
    monkeypatch.setenv('ALLOW_LIST', 'a@x.com,b@x.com,c@x.com,solo@x.com')
    app = create_app('testing', db=fake_db, clock=clock)
    yield app
    app.services['sessions'].stop()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def id_tokens(monkeypatch):
    """
    'token-<uid>' 형식의 Firebase ID Token을 검증된 것처럼 만들어 줍니다.
    등록되지 않은 토큰은 ValueError로 거절됩니다.
    """
    claims = {}

    def fake_verify_id_token(id_token, *args, **kwargs):
        if id_token not in claims:
            raise ValueError("Invalid ID token")
        return claims[id_token]

    monkeypatch.setattr(firebase_admin.auth, 'verify_id_token', fake_verify_id_token)
    return claims


@pytest.fixture
def login(client, id_tokens):
    """login('uid-a', 'a@x.com') -> (응답 JSON, Authorization 헤더)"""
    def _login(uid, email, name=None, picture=None):
        token = f"token-{uid}"
        id_tokens[token] = {'uid': uid, 'email': email, 'name': name, 'picture': picture}
        response = client.post('/api/auth/social', json={'provider': 'firebase', 'id_token': token})
        body = response.get_json()
        headers = {}
        if response.status_code == 200:
            headers = {'Authorization': f"Bearer {body['access_token']}"}
        return response, headers
    return _login
