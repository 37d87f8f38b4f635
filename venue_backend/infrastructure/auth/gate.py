# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import cast

from flask import Request, current_app, g, request

from venue_backend.domain.users.entities import TokenIdentity
from venue_backend.domain.users.exceptions import InvalidTokenError
from venue_backend.shared.logging import logger


class AuthedRequest(Request):
    identity: TokenIdentity


def authed_request() -> AuthedRequest:
    """Return the current request cast to include authentication attributes."""
    return cast(AuthedRequest, request)


def _bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    scheme, _, value = auth.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return value.strip()


def auth_required(f: Callable) -> Callable:
    @wraps(f)
    def inner(*a, **kw):
        token = _bearer_token()
        if not token:
            logger.warning(
                f"No bearer token on {request.method} {request.path} "
                f"from {request.remote_addr}"
            )
            raise InvalidTokenError("missing_token")

        container = current_app.extensions["venue_backend"]
        try:
            identity = container.authenticate_use_case.execute(token)
        except InvalidTokenError as exc:
            logger.warning(f"Auth failed ({exc.code}) on {request.method} {request.path}")
            raise

        g.identity = identity
        g.user_id = identity.user_id
        authed_request().identity = identity
        return f(*a, **kw)

    return inner


def mutations_guard(f: Callable) -> Callable:
    """Apply ``auth_required`` when the app is configured to gate venue mutations."""

    guarded = auth_required(f)

    @wraps(f)
    def inner(*a, **kw):
        config = current_app.config["APP_CONFIG"]
        if config.auth.require_auth_for_mutations:
            return guarded(*a, **kw)
        return f(*a, **kw)

    return inner
