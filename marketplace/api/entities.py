# This file defines the plain records that repositories return and services reason about.
# Rows are converted once at the repository boundary so money is always a cent-quantized Decimal.

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Any, Final

PROFILE_TYPE_CLIENT: Final[str] = "client"
PROFILE_TYPE_CONTRACTOR: Final[str] = "contractor"

CONTRACT_STATUS_NEW: Final[str] = "new"
CONTRACT_STATUS_IN_PROGRESS: Final[str] = "in_progress"
CONTRACT_STATUS_TERMINATED: Final[str] = "terminated"

CENT: Final[Decimal] = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Quantize a numeric value to cents; `None` counts as zero."""

    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_EVEN)


@dataclass(frozen=True)
class Profile:
    id: int
    first_name: str
    last_name: str
    profession: str
    balance: Decimal
    type: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_client(self) -> bool:
        return self.type == PROFILE_TYPE_CLIENT

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Profile:
        return cls(
            id=int(row["id"]),
            first_name=row["first_name"],
            last_name=row["last_name"],
            profession=row["profession"],
            balance=to_money(row["balance"]),
            type=row["type"],
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Contract:
    id: int
    terms: str
    status: str
    client_id: int
    contractor_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Contract:
        return cls(
            id=int(row["id"]),
            terms=row["terms"],
            status=row["status"],
            client_id=int(row["client_id"]),
            contractor_id=int(row["contractor_id"]),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Job:
    id: int
    description: str
    price: Decimal
    paid: bool | None
    payment_date: datetime | None
    contract_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    contract: Contract | None = None

    @property
    def is_paid(self) -> bool:
        """Only an explicit true counts as paid; NULL and false are both outstanding."""

        return self.paid is True

    @classmethod
    def from_row(cls, row: dict[str, Any], *, contract: Contract | None = None) -> Job:
        paid = row["paid"]
        return cls(
            id=int(row["id"]),
            description=row["description"],
            price=to_money(row["price"]),
            paid=None if paid is None else bool(paid),
            payment_date=row.get("payment_date"),
            contract_id=int(row["contract_id"]),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            contract=contract,
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
