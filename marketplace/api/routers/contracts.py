# This file defines contract endpoints for the authenticated caller.
# A contract owned by another client answers 404, the same as a missing one.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from marketplace.api.dependencies import CurrentProfileDep, get_contract_service
from marketplace.api.schemas.common import ErrorResponse
from marketplace.api.schemas.contract_schemas import ContractResponse
from marketplace.api.services.contract_service import ContractService

router = APIRouter(
    prefix="/contracts",
    tags=["contracts"],
    responses={401: {"model": ErrorResponse}},
)
ContractServiceDep = Annotated[ContractService, Depends(get_contract_service)]


@router.get(
    "/{contract_id}",
    response_model=ContractResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_contract(
    contract_id: int,
    caller: CurrentProfileDep,
    service: ContractServiceDep,
) -> dict[str, object]:
    return service.get_contract(contract_id=contract_id, caller=caller).as_dict()


@router.get("", response_model=list[ContractResponse])
def list_contracts(
    caller: CurrentProfileDep,
    service: ContractServiceDep,
) -> list[dict[str, object]]:
    return [contract.as_dict() for contract in service.list_active_contracts(caller=caller)]
