"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from wrappedup.core.config import Settings
from wrappedup.domain.entities import TokenStatus, TokenType
from wrappedup.infrastructure.auth import JWTService

ACCESS_KEY = "access-test-key-0123456789abcdef0123456789"
REFRESH_KEY = "refresh-test-key-0123456789abcdef012345678"


@pytest.fixture
def settings():
    return Settings(
        environment="testing",
        secret_key=ACCESS_KEY,
        refresh_secret_key=REFRESH_KEY,
        access_token_expire_minutes=15,
        refresh_token_expire_days=30,
    )


@pytest.fixture
def service(settings):
    return JWTService(settings=settings)


def _decode(token: str, key: str) -> dict:
    return jwt.decode(
        token, key, algorithms=["HS256"], options={"verify_exp": False, "verify_iss": False}
    )


class TestIssue:
    def test_access_token_claims(self, service, make_user):
        user = make_user()
        before = datetime.now(timezone.utc)

        claims = _decode(service.issue_access_token(user), ACCESS_KEY)

        assert claims["sub"] == user.id
        assert claims["type"] == "access"
        assert claims["iss"] == "wrappedup"
        assert claims["username"] == "reader"
        assert claims["role"] == "USER"
        assert claims["jti"]
        exp = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
        assert before + timedelta(minutes=15) - timedelta(seconds=2) <= exp
        assert exp <= before + timedelta(minutes=15) + timedelta(seconds=2)

    def test_refresh_token_claims(self, service, make_user):
        user = make_user()
        before = datetime.now(timezone.utc)

        claims = _decode(service.issue_refresh_token(user), REFRESH_KEY)

        assert claims["sub"] == user.id
        assert claims["type"] == "refresh"
        assert "username" not in claims
        exp = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
        assert exp >= before + timedelta(days=30) - timedelta(seconds=2)

    def test_refresh_outlives_access(self, service, make_user):
        user = make_user()
        access = _decode(service.issue_access_token(user), ACCESS_KEY)
        refresh = _decode(service.issue_refresh_token(user), REFRESH_KEY)
        assert refresh["exp"] > access["exp"]

    def test_tokens_signed_with_different_keys(self, service, make_user):
        token = service.issue_refresh_token(make_user())
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(token, ACCESS_KEY, algorithms=["HS256"], options={"verify_iss": False})

    def test_each_issue_is_distinct(self, service, make_user):
        user = make_user()
        assert service.issue_access_token(user) != service.issue_access_token(user)
        assert service.issue_refresh_token(user) != service.issue_refresh_token(user)

    def test_expires_in_seconds(self, service):
        assert service.access_token_expires_in() == 900


class TestInspect:
    def test_valid_tokens(self, service, make_user):
        user = make_user()

        access = service.inspect(service.issue_access_token(user), TokenType.ACCESS)
        refresh = service.inspect(service.issue_refresh_token(user), TokenType.REFRESH)

        assert access.status is TokenStatus.VALID
        assert access.user_id == user.id
        assert refresh.status is TokenStatus.VALID
        assert refresh.user_id == user.id

    def test_expired_token(self, service, make_user):
        token = service.issue_refresh_token(make_user(), expires_delta=timedelta(seconds=-10))

        check = service.inspect(token, TokenType.REFRESH)

        assert check.status is TokenStatus.EXPIRED
        assert check.user_id is None

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token(self, service, token):
        assert service.inspect(token, TokenType.REFRESH).status is TokenStatus.INVALID

    def test_access_token_rejected_as_refresh(self, service, make_user):
        token = service.issue_access_token(make_user())
        assert service.inspect(token, TokenType.REFRESH).status is TokenStatus.INVALID

    def test_refresh_token_rejected_as_access(self, service, make_user):
        token = service.issue_refresh_token(make_user())
        assert service.inspect(token, TokenType.ACCESS).status is TokenStatus.INVALID

    def test_type_claim_enforced_with_shared_key(self, settings, make_user):
        shared = JWTService(secret_key=ACCESS_KEY, refresh_secret_key=ACCESS_KEY, settings=settings)
        token = shared.issue_access_token(make_user())
        assert shared.inspect(token, TokenType.REFRESH).status is TokenStatus.INVALID

    def test_forged_expired_token_is_invalid(self, service, make_user):
        now = datetime.now(timezone.utc)
        forged = jwt.encode(
            {
                "iss": "wrappedup",
                "sub": make_user().id,
                "iat": now - timedelta(days=2),
                "exp": now - timedelta(days=1),
                "type": "refresh",
            },
            "attacker-key-0123456789abcdef0123456789abc",
            algorithm="HS256",
        )
        assert service.inspect(forged, TokenType.REFRESH).status is TokenStatus.INVALID

    def test_wrong_issuer(self, service, make_user):
        token = jwt.encode(
            {
                "iss": "someone-else",
                "sub": make_user().id,
                "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
                "type": "access",
            },
            ACCESS_KEY,
            algorithm="HS256",
        )
        assert service.inspect(token, TokenType.ACCESS).status is TokenStatus.INVALID

    def test_missing_subject(self, service):
        token = jwt.encode(
            {
                "iss": "wrappedup",
                "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
                "type": "access",
            },
            ACCESS_KEY,
            algorithm="HS256",
        )
        assert service.inspect(token, TokenType.ACCESS).status is TokenStatus.INVALID


class TestConvenienceChecks:
    def test_is_expired_fails_closed(self, service, make_user):
        user = make_user()
        assert service.is_expired(service.issue_refresh_token(user)) is False
        assert service.is_expired(
            service.issue_refresh_token(user, expires_delta=timedelta(seconds=-10))
        ) is True
        assert service.is_expired("garbage") is True
        assert service.is_expired("") is True

    def test_validate_and_extract_user_id(self, service, make_user):
        user = make_user()
        assert service.validate_and_extract_user_id(service.issue_access_token(user)) == user.id
        assert service.validate_and_extract_user_id(service.issue_refresh_token(user)) is None
        assert service.validate_and_extract_user_id("garbage") is None
        assert service.validate_and_extract_user_id(
            service.issue_access_token(user, expires_delta=timedelta(seconds=-10))
        ) is None
        assert (
            service.validate_and_extract_user_id(
                service.issue_refresh_token(user), TokenType.REFRESH
            )
            == user.id
        )


def test_derived_refresh_key_differs_from_secret(make_user):
    settings = Settings(environment="testing", secret_key=ACCESS_KEY)
    service = JWTService(settings=settings)

    assert settings.effective_refresh_secret_key != ACCESS_KEY
    token = service.issue_refresh_token(make_user())
    assert service.inspect(token, TokenType.REFRESH).is_valid
