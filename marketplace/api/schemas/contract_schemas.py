# This file defines response schemas for contract endpoints.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ContractResponse(BaseModel):
    id: int
    terms: str
    status: str
    client_id: int
    contractor_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
