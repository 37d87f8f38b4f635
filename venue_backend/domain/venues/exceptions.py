# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from venue_backend.shared.errors.base import DomainError


class VenueNotFoundError(DomainError):
    code = "venue_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Venue not found"
