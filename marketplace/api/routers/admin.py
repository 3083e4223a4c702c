# This file defines admin reporting endpoints over paid jobs.
# Dates are taken as raw query strings so that bad or missing values answer 400 "invalid date range".

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from marketplace.api.dependencies import get_reporting_service
from marketplace.api.schemas.admin_schemas import BestClientResponse, BestProfessionResponse
from marketplace.api.schemas.common import ErrorResponse
from marketplace.api.services.reporting_service import ReportingService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    responses={400: {"model": ErrorResponse}},
)
ReportingServiceDep = Annotated[ReportingService, Depends(get_reporting_service)]


@router.get("/best-profession", response_model=BestProfessionResponse | None)
def best_profession(
    service: ReportingServiceDep,
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
) -> dict[str, Any] | None:
    return service.best_profession(start_raw=start, end_raw=end)


@router.get("/best-clients", response_model=list[BestClientResponse])
def best_clients(
    service: ReportingServiceDep,
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
) -> list[dict[str, Any]]:
    return service.best_clients(start_raw=start, end_raw=end, limit=limit)
