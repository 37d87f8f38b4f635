# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Venue CRUD use cases.

Identifiers arrive as raw path segments. Each use case parses them through the
repository's identifier scheme before touching storage, so a malformed id is
rejected with ``InvalidIdentifierError`` and never reaches the engine.
"""

from __future__ import annotations

from venue_backend.domain.venues import Venue, VenueDraft, VenueNotFoundError, VenueRepository


class ListVenuesUseCase:
    def __init__(self, *, venues: VenueRepository) -> None:
        self._venues = venues

    def execute(self) -> list[Venue]:
        return self._venues.list()


class GetVenueUseCase:
    def __init__(self, *, venues: VenueRepository) -> None:
        self._venues = venues

    def execute(self, raw_id: str) -> Venue:
        venue_id = self._venues.identifiers.parse(raw_id)
        venue = self._venues.get(venue_id)
        if venue is None:
            raise VenueNotFoundError(context={"id": raw_id})
        return venue


class CreateVenueUseCase:
    def __init__(self, *, venues: VenueRepository) -> None:
        self._venues = venues

    def execute(self, draft: VenueDraft) -> Venue:
        return self._venues.create(draft)


class UpdateVenueUseCase:
    def __init__(self, *, venues: VenueRepository) -> None:
        self._venues = venues

    def execute(self, raw_id: str, draft: VenueDraft) -> Venue:
        venue_id = self._venues.identifiers.parse(raw_id)
        updated = self._venues.update(venue_id, draft)
        if updated is None:
            raise VenueNotFoundError(context={"id": raw_id})
        return updated


class DeleteVenueUseCase:
    def __init__(self, *, venues: VenueRepository) -> None:
        self._venues = venues

    def execute(self, raw_id: str) -> None:
        venue_id = self._venues.identifiers.parse(raw_id)
        if not self._venues.delete(venue_id):
            raise VenueNotFoundError(context={"id": raw_id})
