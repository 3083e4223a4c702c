# This file implements balance deposits for client profiles.
# A deposit may not lift the balance above the configured ratio (1.25 by default) of the
# client's outstanding job total.
# The profile row is locked while the cap is computed and the new balance written, so
# concurrent deposits to one profile apply one after another.

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from marketplace.api.api_config import ApiConfig
from marketplace.api.db_access import DatabaseClient
from marketplace.api.entities import to_money
from marketplace.api.error_handlers import APIError, BadRequestError, UnprocessableError
from marketplace.api.metrics import LEDGER_DEPOSITS_TOTAL
from marketplace.api.repositories.job_repository import JobRepository
from marketplace.api.repositories.profile_repository import ProfileRepository

LOGGER = logging.getLogger("deposits")

INVALID_DEPOSIT_MESSAGE = "invalid deposit value"
NOT_A_CLIENT_MESSAGE = "not a client"
CAP_EXCEEDED_MESSAGE = "balance cannot exceed 25% of total pending job value"


@dataclass(frozen=True)
class DepositReceipt:
    profile_id: int
    amount: Decimal
    balance: Decimal
    pending_total: Decimal
    cap: Decimal


def parse_deposit_amount(raw: Any) -> Decimal:
    """Parse a JSON number or numeric string into a cent-quantized Decimal.

    Raises BadRequestError for anything that is not a finite number and
    UnprocessableError for values that are not strictly positive.
    """

    if isinstance(raw, bool) or not isinstance(raw, (int, float, str, Decimal)):
        raise BadRequestError(error_code="INVALID_DEPOSIT_AMOUNT", message="amount must be a number")
    try:
        value = Decimal(raw.strip()) if isinstance(raw, str) else Decimal(str(raw))
    except InvalidOperation as exc:
        raise BadRequestError(
            error_code="INVALID_DEPOSIT_AMOUNT", message="amount must be a number"
        ) from exc
    if not value.is_finite():
        raise BadRequestError(error_code="INVALID_DEPOSIT_AMOUNT", message="amount must be a number")

    amount = to_money(value)
    if amount <= 0:
        raise UnprocessableError(error_code="INVALID_DEPOSIT_VALUE", message=INVALID_DEPOSIT_MESSAGE)
    return amount


class DepositService:
    """Validates and applies balance top-ups."""

    def __init__(
        self,
        *,
        config: ApiConfig,
        db: DatabaseClient,
        profiles: ProfileRepository,
        jobs: JobRepository,
    ) -> None:
        self.config = config
        self.db = db
        self.profiles = profiles
        self.jobs = jobs

    def deposit(self, *, profile_id: int, raw_amount: Any) -> DepositReceipt:
        try:
            amount = parse_deposit_amount(raw_amount)
            receipt = self._apply(profile_id=profile_id, amount=amount)
        except APIError as exc:
            LEDGER_DEPOSITS_TOTAL.labels(outcome=exc.error_code.lower()).inc()
            LOGGER.info("deposit rejected profile_id=%s reason=%s", profile_id, exc.error_code)
            raise

        LEDGER_DEPOSITS_TOTAL.labels(outcome="accepted").inc()
        LOGGER.info(
            "deposit applied profile_id=%s amount=%s balance=%s",
            receipt.profile_id,
            receipt.amount,
            receipt.balance,
        )
        return receipt

    def _apply(self, *, profile_id: int, amount: Decimal) -> DepositReceipt:
        with self.db.transaction() as connection:
            profile = self.profiles.get_for_update(connection, profile_id)
            if profile is None or not profile.is_client:
                raise UnprocessableError(error_code="NOT_A_CLIENT", message=NOT_A_CLIENT_MESSAGE)

            pending_total = self.jobs.pending_total_for_client(
                client_id=profile.id, connection=connection
            )
            cap = pending_total * self.config.deposit_cap_ratio
            balance = profile.balance + amount
            if balance > cap:
                raise UnprocessableError(
                    error_code="DEPOSIT_CAP_EXCEEDED",
                    message=CAP_EXCEEDED_MESSAGE,
                    details={"pending_total": str(pending_total), "cap": str(cap)},
                )

            self.profiles.set_balance(connection, profile.id, balance)

        return DepositReceipt(
            profile_id=profile.id,
            amount=amount,
            balance=balance,
            pending_total=pending_total,
            cap=cap,
        )
