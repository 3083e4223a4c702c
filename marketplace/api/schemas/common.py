# This file defines shared schema pieces reused by multiple API endpoints.
# Money stays a Decimal inside the service and is emitted as a JSON number.

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, PlainSerializer

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime


class ProfileResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    profession: str
    balance: Money
    type: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
