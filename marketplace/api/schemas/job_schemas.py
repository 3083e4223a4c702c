# This file defines response schemas for job endpoints.
# `paid` is tri-state on the wire as in storage: null, false, or true.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from marketplace.api.schemas.common import Money
from marketplace.api.schemas.contract_schemas import ContractResponse


class JobResponse(BaseModel):
    id: int
    description: str
    price: Money
    paid: bool | None = None
    payment_date: datetime | None = None
    contract_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    contract: ContractResponse | None = None
