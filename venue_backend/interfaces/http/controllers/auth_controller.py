# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from venue_backend.application.use_cases.users.login_user import LoginUserUseCase
from venue_backend.application.use_cases.users.signup_user import SignupUserUseCase
from venue_backend.domain.users.exceptions import InvalidCredentialsError
from venue_backend.infrastructure.auth import auth_required, authed_request
from venue_backend.interfaces.http.dto.auth import (
    IdentityDTO,
    LoginRequestDTO,
    LoginSuccessDTO,
    SignupRequestDTO,
    SignupSuccessDTO,
)
from venue_backend.shared.errors.validation import raise_validation_error
from venue_backend.shared.logging import logger
from venue_backend.shared.middleware.rate_limit import rate_limit


def _get_client_ip() -> str | None:
    return request.remote_addr


class AuthController:
    def __init__(
        self,
        *,
        signup_use_case: SignupUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._signup_use_case = signup_use_case
        self._login_use_case = login_use_case

    @rate_limit(limit=5, window_seconds=60.0)
    def signup(self) -> tuple[Response, int]:
        try:
            dto = SignupRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._signup_use_case.execute(dto.username, dto.password)

        logger.info(f"auth.signup: ok user_id={user.id} ip={_get_client_ip()}")
        return jsonify(SignupSuccessDTO().model_dump()), 201

    @rate_limit()
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            issued = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            logger.warning(
                f"auth.login: rejected username={dto.username} ip={_get_client_ip()}"
            )
            raise

        logger.info(f"auth.login: ok username={dto.username}")
        payload = LoginSuccessDTO(
            token=issued.token,
            expires_at=issued.expires_at.isoformat(),
        ).model_dump()
        return jsonify(payload), 200

    @auth_required
    def me(self) -> tuple[Response, int]:
        identity = authed_request().identity
        payload = IdentityDTO(
            user_id=identity.user_id,
            username=identity.username,
            issued_at=identity.issued_at.isoformat(),
            expires_at=identity.expires_at.isoformat(),
        ).model_dump()
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
