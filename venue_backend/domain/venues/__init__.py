# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Venue, VenueDraft, VenueId
from .exceptions import VenueNotFoundError
from .repositories import IdentifierScheme, VenueRepository

__all__ = [
    "IdentifierScheme",
    "Venue",
    "VenueDraft",
    "VenueId",
    "VenueNotFoundError",
    "VenueRepository",
]
