# This file implements Job queries: unpaid listings, settlement lookups, and earnings aggregates.
# Paid means an explicit true in `jobs.paid`; NULL and false are both outstanding.

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import func, or_, select, true, update
from sqlalchemy.engine import Connection
from sqlalchemy.sql import ColumnElement, Select

from marketplace.api.db_access import DatabaseClient
from marketplace.api.entities import CONTRACT_STATUS_IN_PROGRESS, Contract, Job, Profile, to_money
from marketplace.common.ddl import contracts, jobs, profiles, utc_now

_CONTRACT_PREFIX = "contract__"


def _is_paid() -> ColumnElement[bool]:
    return jobs.c.paid.is_(true())


def _is_unpaid() -> ColumnElement[bool]:
    return jobs.c.paid.is_not(true())


def _job_with_contract() -> Select[Any]:
    contract_columns = [column.label(f"{_CONTRACT_PREFIX}{column.name}") for column in contracts.c]
    return select(*jobs.c, *contract_columns).join(contracts, contracts.c.id == jobs.c.contract_id)


def _split_job_row(row: dict[str, Any]) -> Job:
    contract_values = {
        key[len(_CONTRACT_PREFIX):]: value
        for key, value in row.items()
        if key.startswith(_CONTRACT_PREFIX)
    }
    return Job.from_row(row, contract=Contract.from_row(contract_values))


class JobRepository:
    """Read and write access to the `jobs` table and its joins."""

    def __init__(self, *, db: DatabaseClient) -> None:
        self.db = db

    def list_unpaid_for_profile(self, *, profile_id: int) -> list[Job]:
        """Outstanding jobs on in-progress contracts where the profile is either party."""

        query = (
            _job_with_contract()
            .where(
                _is_unpaid(),
                contracts.c.status == CONTRACT_STATUS_IN_PROGRESS,
                or_(
                    contracts.c.client_id == profile_id,
                    contracts.c.contractor_id == profile_id,
                ),
            )
            .order_by(jobs.c.id)
        )
        return [_split_job_row(row) for row in self.db.fetch_all(query)]

    def find_for_client(
        self,
        connection: Connection,
        *,
        job_id: int,
        client_id: int,
        for_update: bool = False,
    ) -> Job | None:
        query = _job_with_contract().where(
            jobs.c.id == job_id,
            contracts.c.client_id == client_id,
        )
        if for_update:
            query = query.with_for_update(of=jobs)
        row = self.db.fetch_one(query, connection=connection)
        return _split_job_row(row) if row is not None else None

    def mark_paid(self, connection: Connection, *, job_id: int, paid_at: datetime) -> bool:
        """Flag an outstanding job as paid; returns False when it was already paid."""

        statement = (
            update(jobs)
            .where(jobs.c.id == job_id, _is_unpaid())
            .values(paid=True, payment_date=paid_at, updated_at=utc_now())
        )
        return self.db.execute(statement, connection=connection) == 1

    def pending_total_for_client(
        self, *, client_id: int, connection: Connection | None = None
    ) -> Decimal:
        query = (
            select(func.coalesce(func.sum(jobs.c.price), 0))
            .select_from(jobs.join(contracts, contracts.c.id == jobs.c.contract_id))
            .where(contracts.c.client_id == client_id, _is_unpaid())
        )
        return to_money(self.db.fetch_scalar(query, connection=connection))

    def top_contractors_by_earnings(
        self, *, start: datetime, end: datetime, limit: int
    ) -> list[tuple[Profile, Decimal]]:
        return self._top_profiles_by_paid_total(
            party_column=contracts.c.contractor_id, start=start, end=end, limit=limit
        )

    def top_clients_by_payments(
        self, *, start: datetime, end: datetime, limit: int
    ) -> list[tuple[Profile, Decimal]]:
        return self._top_profiles_by_paid_total(
            party_column=contracts.c.client_id, start=start, end=end, limit=limit
        )

    def _top_profiles_by_paid_total(
        self,
        *,
        party_column: ColumnElement[int],
        start: datetime,
        end: datetime,
        limit: int,
    ) -> list[tuple[Profile, Decimal]]:
        total = func.sum(jobs.c.price).label("paid_total")
        query = (
            select(*profiles.c, total)
            .select_from(
                jobs.join(contracts, contracts.c.id == jobs.c.contract_id).join(
                    profiles, profiles.c.id == party_column
                )
            )
            .where(_is_paid(), jobs.c.created_at.between(start, end))
            .group_by(*profiles.c)
            .order_by(total.desc(), profiles.c.id)
            .limit(limit)
        )
        return [
            (Profile.from_row(row), to_money(row["paid_total"]))
            for row in self.db.fetch_all(query)
        ]
