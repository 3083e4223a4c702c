# This file implements contract reads scoped to the calling profile.

from __future__ import annotations

from marketplace.api.entities import Contract, Profile
from marketplace.api.error_handlers import NotFoundError
from marketplace.api.repositories.contract_repository import ContractRepository


class ContractService:
    def __init__(self, *, contracts: ContractRepository) -> None:
        self.contracts = contracts

    def get_contract(self, *, contract_id: int, caller: Profile) -> Contract:
        """Return the contract only when the caller is its client; otherwise it does not exist."""

        contract = self.contracts.get_for_client(contract_id=contract_id, client_id=caller.id)
        if contract is None:
            raise NotFoundError(f"contract {contract_id} not found")
        return contract

    def list_active_contracts(self, *, caller: Profile) -> list[Contract]:
        return self.contracts.list_active_for_profile(profile_id=caller.id)
