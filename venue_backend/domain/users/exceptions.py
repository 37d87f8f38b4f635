# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from venue_backend.shared.errors.base import DomainError, UnauthorizedError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.BAD_REQUEST
    message = "Username already exists"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid credentials"


class InvalidTokenError(UnauthorizedError):
    def __init__(self, reason: str = "invalid_token") -> None:
        super().__init__(code=reason, message="Invalid or expired token")
