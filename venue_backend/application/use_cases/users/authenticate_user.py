# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from venue_backend.domain.users.entities import TokenIdentity
from venue_backend.domain.users.repositories import TokenIssuer


class AuthenticateUseCase:
    def __init__(self, *, tokens: TokenIssuer) -> None:
        self._tokens = tokens

    def execute(self, token: str) -> TokenIdentity:
        return self._tokens.verify(token)
