# This file implements the admin earnings reports over paid jobs in a creation-date window.
# `best_profession` ranks contractors by amount received and returns the single top earner.
# `best_clients` ranks clients by amount paid and returns the top few.
# Both windows are inclusive; only `best_profession` rejects a start after the end.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from marketplace.api.api_config import ApiConfig
from marketplace.api.error_handlers import BadRequestError
from marketplace.api.repositories.job_repository import JobRepository

LOGGER = logging.getLogger("reporting")

INVALID_DATE_RANGE_MESSAGE = "invalid date range"


def parse_report_date(raw: str | None) -> datetime:
    """Parse an ISO-8601 date or datetime into naive UTC.

    Raises ValueError when the value is missing or unparseable.
    """

    if raw is None or not raw.strip():
        raise ValueError("date is required")
    parsed = datetime.fromisoformat(raw.strip())
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def parse_report_window(
    start_raw: str | None, end_raw: str | None, *, require_ordered: bool
) -> tuple[datetime, datetime]:
    try:
        start = parse_report_date(start_raw)
        end = parse_report_date(end_raw)
    except ValueError as exc:
        raise BadRequestError(
            error_code="INVALID_DATE_RANGE", message=INVALID_DATE_RANGE_MESSAGE
        ) from exc
    if require_ordered and start > end:
        raise BadRequestError(error_code="INVALID_DATE_RANGE", message=INVALID_DATE_RANGE_MESSAGE)
    return start, end


class ReportingService:
    """Read-only earnings aggregates for admin endpoints."""

    def __init__(self, *, config: ApiConfig, jobs: JobRepository) -> None:
        self.config = config
        self.jobs = jobs

    def best_profession(self, *, start_raw: str | None, end_raw: str | None) -> dict[str, Any] | None:
        start, end = parse_report_window(start_raw, end_raw, require_ordered=True)
        ranked = self.jobs.top_contractors_by_earnings(start=start, end=end, limit=1)
        if not ranked:
            return None
        profile, total = ranked[0]
        LOGGER.debug("best contractor profile_id=%s total=%s", profile.id, total)
        return {**profile.as_dict(), "total_received": total}

    def best_clients(
        self,
        *,
        start_raw: str | None,
        end_raw: str | None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        # A start after the end is accepted here and simply matches nothing.
        start, end = parse_report_window(start_raw, end_raw, require_ordered=False)
        effective_limit = limit or self.config.best_clients_default_limit
        ranked = self.jobs.top_clients_by_payments(start=start, end=end, limit=effective_limit)
        return [{**profile.as_dict(), "total_paid": total} for profile, total in ranked]
