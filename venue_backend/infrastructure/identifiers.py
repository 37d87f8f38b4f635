# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Venue identifier schemes, one per storage engine key format."""

from __future__ import annotations

import re
import secrets

from venue_backend.domain.venues import IdentifierScheme, VenueId
from venue_backend.shared.errors import InvalidIdentifierError

_INTEGER_RE = re.compile(r"^[1-9][0-9]{0,17}$")
_OBJECT_KEY_RE = re.compile(r"^[0-9a-fA-F]{24}$")


class IntegerIdentifiers(IdentifierScheme):
    """Sequential primary keys assigned by a relational engine."""

    name = "integer"

    def parse(self, raw: str) -> int:
        value = (raw or "").strip()
        if not _INTEGER_RE.match(value):
            raise InvalidIdentifierError(raw)
        return int(value)

    def format(self, value: VenueId) -> str:
        return str(int(value))


class ObjectKeyIdentifiers(IdentifierScheme):
    """Opaque 12-byte keys rendered as 24 hex characters."""

    name = "object_key"

    def parse(self, raw: str) -> str:
        value = (raw or "").strip()
        if not _OBJECT_KEY_RE.match(value):
            raise InvalidIdentifierError(raw)
        return value.lower()

    def format(self, value: VenueId) -> str:
        return str(value)

    def new(self) -> str:
        return secrets.token_hex(12)


__all__ = ["IntegerIdentifiers", "ObjectKeyIdentifiers"]
