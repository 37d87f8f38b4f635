# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Process-local stores keyed by generated object keys."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from venue_backend.domain.users.entities import User
from venue_backend.domain.users.exceptions import UserAlreadyExistsError
from venue_backend.domain.users.repositories import UserRepository
from venue_backend.domain.venues import Venue, VenueDraft, VenueId, VenueRepository
from venue_backend.infrastructure.identifiers import ObjectKeyIdentifiers


class InMemoryVenueRepository(VenueRepository):
    def __init__(self) -> None:
        self.identifiers = ObjectKeyIdentifiers()
        self._venues: dict[str, Venue] = {}
        self._lock = threading.Lock()

    def list(self) -> list[Venue]:
        with self._lock:
            return list(self._venues.values())

    def get(self, venue_id: VenueId) -> Venue | None:
        with self._lock:
            return self._venues.get(str(venue_id))

    def _insert(self, draft: VenueDraft) -> Venue:
        key = self.identifiers.new()
        while key in self._venues:
            key = self.identifiers.new()
        venue = Venue(id=key, name=draft.name, url=draft.url, district=draft.district)
        self._venues[key] = venue
        return venue

    def create(self, draft: VenueDraft) -> Venue:
        with self._lock:
            return self._insert(draft)

    def create_many(self, drafts: Sequence[VenueDraft]) -> list[Venue]:
        with self._lock:
            snapshot = dict(self._venues)
            try:
                return [self._insert(draft) for draft in drafts]
            except Exception:
                self._venues = snapshot
                raise

    def update(self, venue_id: VenueId, draft: VenueDraft) -> Venue | None:
        key = str(venue_id)
        with self._lock:
            if key not in self._venues:
                return None
            venue = Venue(id=key, name=draft.name, url=draft.url, district=draft.district)
            self._venues[key] = venue
            return venue

    def delete(self, venue_id: VenueId) -> bool:
        with self._lock:
            return self._venues.pop(str(venue_id), None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._venues)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1
        self._lock = threading.Lock()

    def find_by_username(self, username: str) -> User | None:
        with self._lock:
            return self._users.get(username)

    def find_by_id(self, user_id: int) -> User | None:
        with self._lock:
            return next((u for u in self._users.values() if u.id == user_id), None)

    def add(self, user: User) -> User:
        with self._lock:
            if user.username in self._users:
                raise UserAlreadyExistsError()
            stored = User(
                id=self._seq,
                username=user.username,
                password_hash=user.password_hash,
                created_at=user.created_at,
            )
            self._seq += 1
            self._users[stored.username] = stored
            return stored

    def count(self) -> int:
        with self._lock:
            return len(self._users)


__all__ = ["InMemoryUserRepository", "InMemoryVenueRepository"]
