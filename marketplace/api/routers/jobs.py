# This file defines job endpoints: the caller's unpaid jobs and paying for a job.
# Payment answers 204 with no body; every refusal carries the standard error payload.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from marketplace.api.dependencies import CurrentProfileDep, get_job_service, get_settlement_service
from marketplace.api.schemas.common import ErrorResponse
from marketplace.api.schemas.job_schemas import JobResponse
from marketplace.api.services.job_service import JobService
from marketplace.api.services.settlement_service import SettlementService

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    responses={401: {"model": ErrorResponse}},
)
JobServiceDep = Annotated[JobService, Depends(get_job_service)]
SettlementServiceDep = Annotated[SettlementService, Depends(get_settlement_service)]


@router.get("/unpaid", response_model=list[JobResponse])
def list_unpaid_jobs(
    caller: CurrentProfileDep,
    service: JobServiceDep,
) -> list[dict[str, object]]:
    return [job.as_dict() for job in service.list_unpaid_jobs(caller=caller)]


@router.post(
    "/{job_id}/pay",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
def pay_for_job(
    job_id: int,
    caller: CurrentProfileDep,
    service: SettlementServiceDep,
) -> Response:
    service.pay_for_job(job_id=job_id, caller=caller)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
