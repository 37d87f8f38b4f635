from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from venue_backend.application.services.password_hashing import WerkzeugPasswordHasher
from venue_backend.application.services.tokens import JwtTokenIssuer
from venue_backend.domain.users.entities import User
from venue_backend.domain.users.exceptions import InvalidTokenError

ISSUED_AT = datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)
USER = User(id=7, username="alice", password_hash="x", created_at=ISSUED_AT)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_token_valid_until_one_hour_after_issue() -> None:
    clock = FakeClock(ISSUED_AT)
    issuer = JwtTokenIssuer(secret="s3cret", clock=clock)
    issued = issuer.issue(USER)

    assert issued.expires_at == ISSUED_AT + timedelta(hours=1)

    clock.now = ISSUED_AT + timedelta(minutes=59, seconds=59)
    identity = issuer.verify(issued.token)
    assert identity.user_id == 7
    assert identity.username == "alice"
    assert identity.issued_at == ISSUED_AT

    clock.now = ISSUED_AT + timedelta(hours=1)
    with pytest.raises(InvalidTokenError) as info:
        issuer.verify(issued.token)
    assert info.value.code == "token_expired"
    assert info.value.status == 401


def test_token_signed_with_other_secret_is_rejected() -> None:
    clock = FakeClock(ISSUED_AT)
    foreign = JwtTokenIssuer(secret="other-secret", clock=clock).issue(USER)

    with pytest.raises(InvalidTokenError):
        JwtTokenIssuer(secret="s3cret", clock=clock).verify(foreign.token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_tokens_are_rejected(token: str) -> None:
    with pytest.raises(InvalidTokenError):
        JwtTokenIssuer(secret="s3cret").verify(token)


def test_token_missing_claims_is_rejected() -> None:
    token = jwt.encode({"sub": "7"}, "s3cret", algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        JwtTokenIssuer(secret="s3cret").verify(token)


def test_token_with_unsigned_algorithm_is_rejected() -> None:
    now = int(datetime.now(UTC).timestamp())
    token = jwt.encode(
        {"sub": "7", "username": "alice", "iat": now, "exp": now + 60},
        None,
        algorithm="none",
    )

    with pytest.raises(InvalidTokenError):
        JwtTokenIssuer(secret="s3cret").verify(token)


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        JwtTokenIssuer(secret="")


def test_werkzeug_hasher_salts_and_verifies() -> None:
    hasher = WerkzeugPasswordHasher("pbkdf2:sha256:1000")

    first = hasher.hash("secret123")
    second = hasher.hash("secret123")

    assert first != second
    assert "secret123" not in first
    assert hasher.verify("secret123", first)
    assert not hasher.verify("wrong", first)


def test_sub_second_issue_time_keeps_full_hour() -> None:
    issued_at = ISSUED_AT.replace(microsecond=600_000)
    clock = FakeClock(issued_at)
    issuer = JwtTokenIssuer(secret="s3cret", clock=clock)
    issued = issuer.issue(USER)

    assert issued.expires_at >= issued_at + timedelta(hours=1)

    clock.now = issued_at + timedelta(hours=1) - timedelta(milliseconds=1)
    assert issuer.verify(issued.token).user_id == 7

    clock.now = issued_at + timedelta(hours=1, seconds=1)
    with pytest.raises(InvalidTokenError):
        issuer.verify(issued.token)
