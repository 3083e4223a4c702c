# This file implements job settlement: paying a job's price from client to contractor.
# The debit, the credit, and the paid flag are written in one transaction; any failure rolls back all three.
# Concurrent attempts on the same job are serialized by row locks and a conditional paid update,
# so at most one of them can settle.

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from marketplace.api.db_access import DatabaseClient
from marketplace.api.entities import Profile
from marketplace.api.error_handlers import ForbiddenError, NotFoundError, UnprocessableError
from marketplace.api.metrics import LEDGER_SETTLEMENTS_TOTAL
from marketplace.api.repositories.job_repository import JobRepository
from marketplace.api.repositories.profile_repository import ProfileRepository
from marketplace.common.ddl import utc_now

LOGGER = logging.getLogger("settlement")

ALREADY_PAID_MESSAGE = "already paid"
INSUFFICIENT_BALANCE_MESSAGE = "insufficient balance"


@dataclass(frozen=True)
class SettlementReceipt:
    job_id: int
    client_id: int
    contractor_id: int
    amount: Decimal
    client_balance: Decimal
    contractor_balance: Decimal
    paid_at: datetime


class SettlementService:
    """Validates and executes single-job payments."""

    def __init__(
        self,
        *,
        db: DatabaseClient,
        profiles: ProfileRepository,
        jobs: JobRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.db = db
        self.profiles = profiles
        self.jobs = jobs
        self.clock = clock

    def pay_for_job(self, *, job_id: int, caller: Profile) -> SettlementReceipt:
        if not caller.is_client:
            LEDGER_SETTLEMENTS_TOTAL.labels(outcome="forbidden").inc()
            raise ForbiddenError("only clients can pay for jobs")

        try:
            receipt = self._settle(job_id=job_id, client_id=caller.id)
        except NotFoundError:
            LEDGER_SETTLEMENTS_TOTAL.labels(outcome="not_found").inc()
            raise
        except UnprocessableError as exc:
            LEDGER_SETTLEMENTS_TOTAL.labels(outcome=exc.error_code.lower()).inc()
            LOGGER.info(
                "settlement rejected job_id=%s client_id=%s reason=%s",
                job_id,
                caller.id,
                exc.error_code,
            )
            raise

        LEDGER_SETTLEMENTS_TOTAL.labels(outcome="settled").inc()
        LOGGER.info(
            "job settled job_id=%s client_id=%s contractor_id=%s amount=%s",
            receipt.job_id,
            receipt.client_id,
            receipt.contractor_id,
            receipt.amount,
        )
        return receipt

    def _settle(self, *, job_id: int, client_id: int) -> SettlementReceipt:
        with self.db.transaction() as connection:
            job = self.jobs.find_for_client(
                connection, job_id=job_id, client_id=client_id, for_update=True
            )
            if job is None or job.contract is None:
                raise NotFoundError(f"job {job_id} not found")
            if job.is_paid:
                raise UnprocessableError(error_code="JOB_ALREADY_PAID", message=ALREADY_PAID_MESSAGE)

            contractor_id = job.contract.contractor_id
            locked = self.profiles.lock_many(connection, [client_id, contractor_id])
            client = locked.get(client_id)
            contractor = locked.get(contractor_id)
            if client is None or contractor is None:
                raise NotFoundError(f"job {job_id} not found")

            if client.balance < job.price:
                raise UnprocessableError(
                    error_code="INSUFFICIENT_BALANCE",
                    message=INSUFFICIENT_BALANCE_MESSAGE,
                    details={"balance": str(client.balance), "price": str(job.price)},
                )

            client_balance = client.balance - job.price
            contractor_balance = contractor.balance + job.price
            paid_at = self.clock()

            self.profiles.set_balance(connection, client.id, client_balance)
            self.profiles.set_balance(connection, contractor.id, contractor_balance)
            if not self.jobs.mark_paid(connection, job_id=job.id, paid_at=paid_at):
                raise UnprocessableError(error_code="JOB_ALREADY_PAID", message=ALREADY_PAID_MESSAGE)

        return SettlementReceipt(
            job_id=job.id,
            client_id=client.id,
            contractor_id=contractor.id,
            amount=job.price,
            client_balance=client_balance,
            contractor_balance=contractor_balance,
            paid_at=paid_at,
        )
