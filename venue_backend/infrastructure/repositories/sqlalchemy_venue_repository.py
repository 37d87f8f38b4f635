# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from venue_backend.domain.venues import Venue as DomainVenue
from venue_backend.domain.venues import VenueDraft, VenueId, VenueRepository
from venue_backend.infrastructure.db.models import Venue
from venue_backend.infrastructure.db.session import session_scope
from venue_backend.infrastructure.identifiers import IntegerIdentifiers
from venue_backend.shared.errors import StorageError
from venue_backend.shared.logging import logger


def _to_domain(row: Venue) -> DomainVenue:
    return DomainVenue(id=row.id, name=row.name, url=row.url, district=row.district)


class SqlAlchemyVenueRepository(VenueRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self.identifiers = IntegerIdentifiers()

    def list(self) -> list[DomainVenue]:
        try:
            with session_scope(self._session_factory) as session:
                rows = session.scalars(select(Venue).order_by(Venue.id.asc())).all()
                return [_to_domain(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.error(f"venues.list: storage failure ({type(exc).__name__}: {exc})")
            raise StorageError("venues_list_failed") from exc

    def get(self, venue_id: VenueId) -> DomainVenue | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(Venue, int(venue_id))
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"venues.get: storage failure (id={venue_id}, {type(exc).__name__}: {exc})")
            raise StorageError("venue_get_failed") from exc

    def create(self, draft: VenueDraft) -> DomainVenue:
        try:
            with session_scope(self._session_factory) as session:
                row = Venue(name=draft.name, url=draft.url, district=draft.district)
                session.add(row)
                session.flush()
                return _to_domain(row)
        except SQLAlchemyError as exc:
            logger.error(f"venues.create: storage failure ({type(exc).__name__}: {exc})")
            raise StorageError("venue_create_failed") from exc

    def create_many(self, drafts: Sequence[VenueDraft]) -> list[DomainVenue]:
        """Insert all drafts in one transaction; nothing is kept if any row fails."""

        try:
            with session_scope(self._session_factory) as session:
                rows = [Venue(name=d.name, url=d.url, district=d.district) for d in drafts]
                session.add_all(rows)
                session.flush()
                return [_to_domain(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.error(f"venues.create_many: storage failure (rows={len(drafts)}, {type(exc).__name__}: {exc})")
            raise StorageError("venue_create_failed") from exc

    def update(self, venue_id: VenueId, draft: VenueDraft) -> DomainVenue | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(Venue, int(venue_id))
                if row is None:
                    return None
                row.name = draft.name
                row.url = draft.url
                row.district = draft.district
                session.flush()
                return _to_domain(row)
        except SQLAlchemyError as exc:
            logger.error(f"venues.update: storage failure (id={venue_id}, {type(exc).__name__}: {exc})")
            raise StorageError("venue_update_failed") from exc

    def delete(self, venue_id: VenueId) -> bool:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(Venue, int(venue_id))
                if row is None:
                    return False
                session.delete(row)
                return True
        except SQLAlchemyError as exc:
            logger.error(f"venues.delete: storage failure (id={venue_id}, {type(exc).__name__}: {exc})")
            raise StorageError("venue_delete_failed") from exc

    def count(self) -> int:
        try:
            with session_scope(self._session_factory) as session:
                return int(session.scalar(select(func.count()).select_from(Venue)) or 0)
        except SQLAlchemyError as exc:
            logger.error(f"venues.count: storage failure ({type(exc).__name__}: {exc})")
            raise StorageError("venue_count_failed") from exc
