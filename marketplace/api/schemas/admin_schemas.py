# This file defines response schemas for the admin reporting endpoints.

from __future__ import annotations

from marketplace.api.schemas.common import Money, ProfileResponse


class BestProfessionResponse(ProfileResponse):
    total_received: Money


class BestClientResponse(ProfileResponse):
    total_paid: Money
