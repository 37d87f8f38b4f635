# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str = "Request failed"
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.context:
            payload.update(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or cast(
            str, getattr(self, "message", "Request failed")
        )
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        message: str = "Internal server error",
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, message=message)


class StorageError(InfrastructureError):
    """Storage backend unreachable or the operation was rejected.

    Driver details stay in the server log; the client only sees the generic
    message.
    """

    def __init__(self, code: str = "storage_error") -> None:
        super().__init__(code)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str = "Invalid request body",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            context=context,
        )


class InvalidIdentifierError(AppError):
    def __init__(self, raw: str) -> None:
        super().__init__(
            code="invalid_id",
            status=HTTPStatus.BAD_REQUEST,
            message="Invalid ID format",
            context={"id": raw},
        )


class UnauthorizedError(AppError):
    def __init__(self, code: str = "unauthorized", message: str = "Unauthorized") -> None:
        super().__init__(code=code, status=HTTPStatus.UNAUTHORIZED, message=message)
