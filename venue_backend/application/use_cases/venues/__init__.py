# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .manage_venues import (
    CreateVenueUseCase,
    DeleteVenueUseCase,
    GetVenueUseCase,
    ListVenuesUseCase,
    UpdateVenueUseCase,
)

__all__ = [
    "CreateVenueUseCase",
    "DeleteVenueUseCase",
    "GetVenueUseCase",
    "ListVenuesUseCase",
    "UpdateVenueUseCase",
]
