# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .gate import AuthedRequest, auth_required, authed_request, mutations_guard

__all__ = ["AuthedRequest", "auth_required", "authed_request", "mutations_guard"]
