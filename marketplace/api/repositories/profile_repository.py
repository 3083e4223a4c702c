# This file implements Profile lookups and balance writes for the ledger.
# Balance writes always run on a caller-supplied transaction connection.

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.engine import Connection

from marketplace.api.db_access import DatabaseClient
from marketplace.api.entities import Profile, to_money
from marketplace.common.ddl import profiles, utc_now


class ProfileRepository:
    """Read and write access to the `profiles` table."""

    def __init__(self, *, db: DatabaseClient) -> None:
        self.db = db

    def get(self, profile_id: int, *, connection: Connection | None = None) -> Profile | None:
        query = select(profiles).where(profiles.c.id == profile_id)
        row = self.db.fetch_one(query, connection=connection)
        return Profile.from_row(row) if row is not None else None

    def get_for_update(self, connection: Connection, profile_id: int) -> Profile | None:
        locked = self.lock_many(connection, [profile_id])
        return locked.get(profile_id)

    def lock_many(self, connection: Connection, profile_ids: Iterable[int]) -> dict[int, Profile]:
        """Lock profile rows in ascending id order and return them keyed by id."""

        ids = sorted(set(profile_ids))
        query = (
            select(profiles)
            .where(profiles.c.id.in_(ids))
            .order_by(profiles.c.id)
            .with_for_update()
        )
        rows = self.db.fetch_all(query, connection=connection)
        return {int(row["id"]): Profile.from_row(row) for row in rows}

    def set_balance(self, connection: Connection, profile_id: int, balance: Decimal) -> int:
        statement = (
            update(profiles)
            .where(profiles.c.id == profile_id)
            .values(balance=to_money(balance), updated_at=utc_now())
        )
        return self.db.execute(statement, connection=connection)
