# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from venue_backend.application.use_cases.venues import (
    CreateVenueUseCase,
    DeleteVenueUseCase,
    GetVenueUseCase,
    ListVenuesUseCase,
    UpdateVenueUseCase,
)
from venue_backend.domain.venues import IdentifierScheme, VenueDraft
from venue_backend.infrastructure.auth import mutations_guard
from venue_backend.interfaces.http.dto.venues import MessageDTO, VenueDTO, VenuePayloadDTO
from venue_backend.shared.errors.validation import raise_validation_error
from venue_backend.shared.logging import logger


def _read_draft() -> VenueDraft:
    try:
        dto = VenuePayloadDTO.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)
    return dto.to_draft()


class VenuesController:
    def __init__(
        self,
        *,
        identifiers: IdentifierScheme,
        list_venues: ListVenuesUseCase,
        get_venue: GetVenueUseCase,
        create_venue: CreateVenueUseCase,
        update_venue: UpdateVenueUseCase,
        delete_venue: DeleteVenueUseCase,
    ) -> None:
        self._identifiers = identifiers
        self._list_venues = list_venues
        self._get_venue = get_venue
        self._create_venue = create_venue
        self._update_venue = update_venue
        self._delete_venue = delete_venue

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("venues", __name__, url_prefix="/api")
        bp.add_url_rule("/venues", view_func=self.list_venues, methods=["GET"])
        bp.add_url_rule("/venues", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/venues/<venue_id>", view_func=self.get, methods=["GET"])
        bp.add_url_rule("/venues/<venue_id>", view_func=self.update, methods=["PUT"])
        bp.add_url_rule("/venues/<venue_id>", view_func=self.delete, methods=["DELETE"])
        return bp

    def _dump(self, venue) -> dict:
        return VenueDTO.from_entity(venue, self._identifiers).model_dump()

    def list_venues(self) -> tuple[Response, int]:
        t0 = perf_counter()
        items = self._list_venues.execute()
        dt = (perf_counter() - t0) * 1000
        logger.info(f"venues.list: ok (n={len(items)}, dt_ms={dt:.0f})")
        return jsonify([self._dump(v) for v in items]), 200

    def get(self, venue_id: str) -> tuple[Response, int]:
        venue = self._get_venue.execute(venue_id)
        logger.debug(f"venues.get: ok (id={venue_id})")
        return jsonify(self._dump(venue)), 200

    @mutations_guard
    def create(self) -> tuple[Response, int]:
        t0 = perf_counter()
        draft = _read_draft()
        venue = self._create_venue.execute(draft)
        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"venues.create: ok (id={self._identifiers.format(venue.id)}, dt_ms={dt:.0f})"
        )
        return jsonify(self._dump(venue)), 201

    @mutations_guard
    def update(self, venue_id: str) -> tuple[Response, int]:
        t0 = perf_counter()
        # Identifier problems win over body problems.
        self._identifiers.parse(venue_id)
        draft = _read_draft()
        venue = self._update_venue.execute(venue_id, draft)
        dt = (perf_counter() - t0) * 1000
        logger.info(f"venues.update: ok (id={venue_id}, dt_ms={dt:.0f})")
        return jsonify(self._dump(venue)), 200

    @mutations_guard
    def delete(self, venue_id: str) -> tuple[Response, int]:
        self._delete_venue.execute(venue_id)
        logger.info(f"venues.delete: ok (id={venue_id})")
        return jsonify(MessageDTO(message="Venue deleted").model_dump()), 200
