# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless session tokens signed with the process-wide secret."""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from venue_backend.domain.users.entities import IssuedToken, TokenIdentity, User
from venue_backend.domain.users.exceptions import InvalidTokenError
from venue_backend.domain.users.repositories import TokenIssuer

_REQUIRED_CLAIMS = ["sub", "username", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenIssuer(TokenIssuer):
    def __init__(
        self,
        *,
        secret: str,
        ttl_seconds: int = 3600,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user: User) -> IssuedToken:
        issued_at = self._clock()
        # Claims are whole seconds; exp rounds up.
        expires_at = datetime.fromtimestamp(math.ceil((issued_at + self._ttl).timestamp()), UTC)
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "username": user.username,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str) -> TokenIdentity:
        if not token:
            raise InvalidTokenError("missing_token")
        try:
            # Expiry is checked against our own clock below.
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc

        try:
            user_id = int(claims["sub"])
            issued_at = datetime.fromtimestamp(int(claims["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(claims["exp"]), UTC)
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc

        if self._clock() >= expires_at:
            raise InvalidTokenError("token_expired")

        return TokenIdentity(
            user_id=user_id,
            username=str(claims["username"]),
            issued_at=issued_at,
            expires_at=expires_at,
        )


__all__ = ["JwtTokenIssuer"]
