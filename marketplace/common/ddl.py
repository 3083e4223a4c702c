"""
Table definitions for the ledger store.
`apply_ledger_ddl` creates the three tables when they are missing; there is no migration tooling.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Final

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.engine import Engine

PROFILE_TYPES: Final[tuple[str, ...]] = ("client", "contractor")
CONTRACT_STATUSES: Final[tuple[str, ...]] = ("new", "in_progress", "terminated")

# Balances and prices are currency amounts with two decimal digits.
MONEY = Numeric(12, 2)


def _sql_in_list(values: tuple[str, ...]) -> str:
    return ", ".join(f"'{value}'" for value in values)


def utc_now() -> datetime:
    """Naive UTC timestamp, the representation stored in every timestamp column."""

    return datetime.now(tz=UTC).replace(tzinfo=None)


metadata = MetaData()

profiles = Table(
    "profiles",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("first_name", String(255), nullable=False),
    Column("last_name", String(255), nullable=False),
    Column("profession", String(255), nullable=False),
    Column("balance", MONEY, nullable=False, default=0),
    Column("type", String(16), nullable=False),
    Column("created_at", DateTime, nullable=False, default=utc_now),
    Column("updated_at", DateTime, nullable=False, default=utc_now, onupdate=utc_now),
    CheckConstraint(f"type IN ({_sql_in_list(PROFILE_TYPES)})", name="ck_profiles_type"),
)

contracts = Table(
    "contracts",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("terms", Text, nullable=False),
    Column("status", String(16), nullable=False, default="new"),
    Column("client_id", Integer, ForeignKey("profiles.id"), nullable=False, index=True),
    Column("contractor_id", Integer, ForeignKey("profiles.id"), nullable=False, index=True),
    Column("created_at", DateTime, nullable=False, default=utc_now),
    Column("updated_at", DateTime, nullable=False, default=utc_now, onupdate=utc_now),
    CheckConstraint(
        f"status IN ({_sql_in_list(CONTRACT_STATUSES)})", name="ck_contracts_status"
    ),
)

jobs = Table(
    "jobs",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("description", Text, nullable=False),
    Column("price", MONEY, nullable=False),
    Column("paid", Boolean, nullable=True),
    Column("payment_date", DateTime, nullable=True),
    Column("contract_id", Integer, ForeignKey("contracts.id"), nullable=False, index=True),
    Column("created_at", DateTime, nullable=False, default=utc_now),
    Column("updated_at", DateTime, nullable=False, default=utc_now, onupdate=utc_now),
)

LEDGER_TABLE_NAMES: Final[tuple[str, ...]] = (
    profiles.name,
    contracts.name,
    jobs.name,
)


def apply_ledger_ddl(engine: Engine) -> None:
    """Create the ledger tables in dependency order, skipping tables that already exist."""

    metadata.create_all(engine, checkfirst=True)


def drop_ledger_tables(engine: Engine) -> None:
    metadata.drop_all(engine, checkfirst=True)
