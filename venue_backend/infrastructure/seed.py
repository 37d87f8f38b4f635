# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""One-time bootstrap that fills an empty venue collection."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, TypeAdapter

from venue_backend.domain.venues import VenueDraft, VenueRepository
from venue_backend.shared.logging import logger


class _SeedVenue(BaseModel):
    name: str
    url: str
    district: str

    model_config = ConfigDict(extra="ignore")


_SEED_ADAPTER = TypeAdapter(list[_SeedVenue])


class SeedError(Exception):
    pass


def load_seed_file(path: Path) -> list[VenueDraft]:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SeedError(f"Cannot read seed file {path}: {exc}") from exc
    try:
        items = _SEED_ADAPTER.validate_python(raw)
    except ValueError as exc:
        raise SeedError(f"Seed file {path} is malformed: {exc}") from exc
    return [VenueDraft(name=i.name, url=i.url, district=i.district) for i in items]


def seed_venues(venues: VenueRepository, path: Path) -> int:
    """Insert the seed dataset when the collection is empty; return how many were added."""

    existing = venues.count()
    if existing:
        logger.info(f"seed.venues: skipped (existing={existing})")
        return 0

    drafts = load_seed_file(path)
    venues.create_many(drafts)
    logger.info(f"seed.venues: inserted {len(drafts)} venues from {path}")
    return len(drafts)


__all__ = ["SeedError", "load_seed_file", "seed_venues"]
