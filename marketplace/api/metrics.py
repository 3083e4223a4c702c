# This file declares Prometheus counters for ledger operations.
# HTTP request metrics live with the middleware in `app.py`; these count domain outcomes.

from __future__ import annotations

from prometheus_client import Counter

LEDGER_SETTLEMENTS_TOTAL = Counter(
    "ledger_settlements_total",
    "Job payment attempts by outcome.",
    ["outcome"],
)
LEDGER_DEPOSITS_TOTAL = Counter(
    "ledger_deposits_total",
    "Balance deposit attempts by outcome.",
    ["outcome"],
)
