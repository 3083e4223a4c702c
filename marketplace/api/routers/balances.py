# This file defines the balance deposit endpoint.
# The body is read as raw JSON so that a non-numeric amount is reported as 400
# rather than as a schema validation failure.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Response, status

from marketplace.api.dependencies import get_deposit_service
from marketplace.api.schemas.common import ErrorResponse
from marketplace.api.services.deposit_service import DepositService

router = APIRouter(prefix="/balances", tags=["balances"])
DepositServiceDep = Annotated[DepositService, Depends(get_deposit_service)]


@router.post(
    "/deposit/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def deposit(
    user_id: int,
    service: DepositServiceDep,
    payload: Annotated[dict[str, Any] | None, Body()] = None,
) -> Response:
    raw_amount = (payload or {}).get("amount")
    service.deposit(profile_id=user_id, raw_amount=raw_amount)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
