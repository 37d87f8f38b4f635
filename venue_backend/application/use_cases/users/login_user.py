# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from venue_backend.domain.users.entities import IssuedToken
from venue_backend.domain.users.exceptions import InvalidCredentialsError
from venue_backend.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenIssuer,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._dummy_hash: str | None = None

    def _burn_verify(self, password: str) -> None:
        # Unknown usernames still pay for one hash check.
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash("dummy-password")
        self._password_hasher.verify(password, self._dummy_hash)

    def execute(self, username: str, password: str) -> IssuedToken:
        user = self._users.find_by_username(username)
        if user is None:
            self._burn_verify(password)
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        return self._tokens.issue(user)
