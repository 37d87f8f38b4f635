# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Venue, VenueDraft, VenueId


class IdentifierScheme(Protocol):
    """Parses and formats the venue key format of one storage engine."""

    name: str

    def parse(self, raw: str) -> VenueId: ...
    def format(self, value: VenueId) -> str: ...


class VenueRepository(Protocol):
    identifiers: IdentifierScheme

    def list(self) -> list[Venue]: ...
    def get(self, venue_id: VenueId) -> Venue | None: ...
    def create(self, draft: VenueDraft) -> Venue: ...
    def create_many(self, drafts: Sequence[VenueDraft]) -> list[Venue]: ...
    def update(self, venue_id: VenueId, draft: VenueDraft) -> Venue | None: ...
    def delete(self, venue_id: VenueId) -> bool: ...
    def count(self) -> int: ...
