# springboard/services/test_authorization_service.py
from springboard.conftest import FakeFirestore
from springboard.core import strings
from springboard.services.authorization_service import (
    AllowListPolicy, AuthorizationService, AuthorizationStatus, MembershipPolicy,
    build_policy, parse_allow_list
)

class BrokenPolicy:
    def is_member(self, email):
        raise RuntimeError("policy backend down")

def test_parse_allow_list():
    assert parse_allow_list(" a@x.com, b@x.com ,,") == {"a@x.com", "b@x.com"}
    assert parse_allow_list(None) == set()

def test_allow_list_is_read_on_every_check():
    raw = {"value": "a@x.com"}
    service = AuthorizationService(AllowListPolicy(source=lambda: raw["value"]))

    assert service.check("a@x.com").is_authorized
    assert service.check("b@x.com").status is AuthorizationStatus.UNAUTHORIZED

    raw["value"] = "a@x.com,b@x.com"
    assert service.check("b@x.com").is_authorized

def test_missing_email_is_unauthorized():
    service = AuthorizationService(AllowListPolicy(source=lambda: "a@x.com"))
    assert service.check(None).status is AuthorizationStatus.UNAUTHORIZED
    assert service.check("").status is AuthorizationStatus.UNAUTHORIZED

def test_errors_are_treated_as_unauthorized():
    result = AuthorizationService(BrokenPolicy()).check("a@x.com")
    assert result.status is AuthorizationStatus.UNAUTHORIZED
    assert result.error == strings.AUTH_ERROR

def test_membership_policy():
    db = FakeFirestore()
    db.seed('members', 'm1', {'email': 'a@x.com'})
    service = AuthorizationService(MembershipPolicy(db=db))

    assert service.check("a@x.com").is_authorized
    assert not service.check("z@x.com").is_authorized

    db.fail('members', 'query')
    assert service.check("a@x.com").error == strings.AUTH_ERROR

def test_build_policy():
    db = FakeFirestore()
    assert isinstance(build_policy('allow_list'), AllowListPolicy)
    assert isinstance(build_policy('members', db=db), MembershipPolicy)
