import jwt
import pytest

from tests.conftest import make_settings
from vitrina.core.exceptions import InvalidToken
from vitrina.services.security import PasswordHasher
from vitrina.services.token_service import ROLE_ADMIN, ROLE_USER, TokenService


def test_password_hash_and_verify():
    hasher = PasswordHasher(make_settings())
    h = hasher.hash("ab")
    assert h != "ab"
    assert hasher.verify("ab", h)
    assert not hasher.verify("ba", h)
    assert not hasher.verify("ab", "not-a-hash")
    assert not hasher.verify("ab", "")


def test_apply_password_only_when_present():
    hasher = PasswordHasher(make_settings())
    changes = hasher.apply_password({"fullname": "X", "password": "pw"})
    assert "password" not in changes
    assert hasher.verify("pw", changes["password_hash"])
    assert hasher.apply_password({"fullname": "X"}) == {"fullname": "X"}


def test_access_token_round_trip_and_lifetimes():
    settings = make_settings()
    svc = TokenService(settings)
    user_claims = svc.verify(svc.issue_access("abc", ROLE_USER))
    admin_claims = svc.verify(svc.issue_access("def", ROLE_ADMIN))
    assert user_claims["sub"] == "abc"
    assert user_claims["role"] == ROLE_USER
    assert user_claims["exp"] - user_claims["iat"] == 365 * 86400
    assert admin_claims["exp"] - admin_claims["iat"] == 30 * 86400


def test_refresh_token_lifetime():
    svc = TokenService(make_settings())
    claims = svc.verify(svc.issue_refresh("abc"), expected_type="refresh")
    assert claims["exp"] - claims["iat"] == 60 * 86400


def test_tokens_issued_together_are_distinct():
    svc = TokenService(make_settings())
    assert svc.issue_access("abc", ROLE_USER) != svc.issue_access("abc", ROLE_USER)


def test_tampered_token_is_rejected():
    svc = TokenService(make_settings())
    token = svc.issue_access("abc", ROLE_USER)
    forged = jwt.encode({"sub": "abc", "type": "access", "iat": 1, "exp": 9999999999}, "other-secret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        svc.verify(forged)
    with pytest.raises(InvalidToken):
        svc.verify(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))


def test_expired_token_is_rejected():
    svc = TokenService(make_settings(user_access_token_expire_days=-1))
    token = svc.issue_access("abc", ROLE_USER)
    with pytest.raises(InvalidToken) as exc:
        svc.verify(token)
    assert exc.value.message == "Token expired"


def test_refresh_token_is_not_an_access_token():
    svc = TokenService(make_settings())
    with pytest.raises(InvalidToken):
        svc.verify(svc.issue_refresh("abc"))
    with pytest.raises(InvalidToken):
        svc.verify(svc.issue_access("abc", ROLE_ADMIN), expected_type="refresh")


def test_refresh_secret_can_differ():
    svc = TokenService(make_settings(jwt_refresh_secret="refresh-only"))
    refresh = svc.issue_refresh("abc")
    assert svc.verify(refresh, expected_type="refresh")["sub"] == "abc"
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(refresh, "test-secret", algorithms=["HS256"])


def test_missing_secret_is_a_configuration_error():
    svc = TokenService(make_settings(jwt_secret=None))
    with pytest.raises(RuntimeError):
        svc.issue_access("abc", ROLE_USER)
