# This file implements Contract lookups scoped to the calling profile.

from __future__ import annotations

from sqlalchemy import or_, select

from marketplace.api.db_access import DatabaseClient
from marketplace.api.entities import CONTRACT_STATUS_TERMINATED, Contract
from marketplace.common.ddl import contracts


class ContractRepository:
    """Read access to the `contracts` table."""

    def __init__(self, *, db: DatabaseClient) -> None:
        self.db = db

    def get_for_client(self, *, contract_id: int, client_id: int) -> Contract | None:
        query = select(contracts).where(
            contracts.c.id == contract_id,
            contracts.c.client_id == client_id,
        )
        row = self.db.fetch_one(query)
        return Contract.from_row(row) if row is not None else None

    def list_active_for_profile(self, *, profile_id: int) -> list[Contract]:
        """Contracts where the profile is either party, excluding terminated ones."""

        query = (
            select(contracts)
            .where(
                contracts.c.status != CONTRACT_STATUS_TERMINATED,
                or_(
                    contracts.c.client_id == profile_id,
                    contracts.c.contractor_id == profile_id,
                ),
            )
            .order_by(contracts.c.id)
        )
        return [Contract.from_row(row) for row in self.db.fetch_all(query)]
