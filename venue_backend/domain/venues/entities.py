# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

VenueId: TypeAlias = int | str


@dataclass(slots=True, frozen=True)
class VenueDraft:
    """Field values for a venue that has no identifier yet."""

    name: str
    url: str
    district: str


@dataclass(slots=True, frozen=True)
class Venue:

    id: VenueId
    name: str
    url: str
    district: str
