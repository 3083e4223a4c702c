"""
Demo data set for local runs and tests.
The rows mirror the marketplace fixture: four clients, four contractors, nine contracts and fourteen jobs.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import delete, insert
from sqlalchemy.engine import Engine

from marketplace.common.ddl import apply_ledger_ddl, contracts, jobs, profiles, utc_now

LOGGER = logging.getLogger("seed")

SEED_PROFILES: list[dict[str, Any]] = [
    {"id": 1, "first_name": "Harry", "last_name": "Potter", "profession": "Wizard", "balance": Decimal("1150"), "type": "client"},
    {"id": 2, "first_name": "Mr", "last_name": "Robot", "profession": "Hacker", "balance": Decimal("231.11"), "type": "client"},
    {"id": 3, "first_name": "John", "last_name": "Snow", "profession": "Knows nothing", "balance": Decimal("451.3"), "type": "client"},
    {"id": 4, "first_name": "Ash", "last_name": "Kethcum", "profession": "Pokemon master", "balance": Decimal("1.3"), "type": "client"},
    {"id": 5, "first_name": "John", "last_name": "Lenon", "profession": "Musician", "balance": Decimal("64"), "type": "contractor"},
    {"id": 6, "first_name": "Linus", "last_name": "Torvalds", "profession": "Programmer", "balance": Decimal("1214"), "type": "contractor"},
    {"id": 7, "first_name": "Alan", "last_name": "Turing", "profession": "Programmer", "balance": Decimal("22"), "type": "contractor"},
    {"id": 8, "first_name": "Aragorn", "last_name": "II Elessar Telcontarion", "profession": "Fighter", "balance": Decimal("314"), "type": "contractor"},
]

SEED_CONTRACTS: list[dict[str, Any]] = [
    {"id": 1, "terms": "bla bla bla", "status": "terminated", "client_id": 1, "contractor_id": 5},
    {"id": 2, "terms": "bla bla bla", "status": "in_progress", "client_id": 1, "contractor_id": 6},
    {"id": 3, "terms": "bla bla bla", "status": "in_progress", "client_id": 2, "contractor_id": 6},
    {"id": 4, "terms": "bla bla bla", "status": "in_progress", "client_id": 2, "contractor_id": 7},
    {"id": 5, "terms": "bla bla bla", "status": "new", "client_id": 3, "contractor_id": 8},
    {"id": 6, "terms": "bla bla bla", "status": "in_progress", "client_id": 3, "contractor_id": 7},
    {"id": 7, "terms": "bla bla bla", "status": "in_progress", "client_id": 4, "contractor_id": 7},
    {"id": 8, "terms": "bla bla bla", "status": "in_progress", "client_id": 4, "contractor_id": 6},
    {"id": 9, "terms": "bla bla bla", "status": "in_progress", "client_id": 4, "contractor_id": 8},
]


def _paid_on(year: int, month: int, day: int, hour: int, minute: int, second: int) -> datetime:
    return datetime(year, month, day, hour, minute, second, 737000)


SEED_JOBS: list[dict[str, Any]] = [
    {"id": 1, "description": "work", "price": Decimal("200"), "paid": None, "payment_date": None, "contract_id": 1},
    {"id": 2, "description": "work", "price": Decimal("201"), "paid": None, "payment_date": None, "contract_id": 2},
    {"id": 3, "description": "work", "price": Decimal("202"), "paid": None, "payment_date": None, "contract_id": 3},
    {"id": 4, "description": "work", "price": Decimal("200"), "paid": None, "payment_date": None, "contract_id": 4},
    {"id": 5, "description": "work", "price": Decimal("200"), "paid": None, "payment_date": None, "contract_id": 7},
    {"id": 6, "description": "work", "price": Decimal("2020"), "paid": True, "payment_date": _paid_on(2020, 8, 15, 19, 11, 26), "contract_id": 7},
    {"id": 7, "description": "work", "price": Decimal("200"), "paid": True, "payment_date": _paid_on(2020, 8, 15, 19, 11, 26), "contract_id": 2},
    {"id": 8, "description": "work", "price": Decimal("200"), "paid": True, "payment_date": _paid_on(2020, 8, 16, 19, 11, 26), "contract_id": 3},
    {"id": 9, "description": "work", "price": Decimal("200"), "paid": True, "payment_date": _paid_on(2020, 8, 17, 19, 11, 26), "contract_id": 1},
    {"id": 10, "description": "work", "price": Decimal("200"), "paid": True, "payment_date": _paid_on(2020, 8, 17, 19, 11, 26), "contract_id": 5},
    {"id": 11, "description": "work", "price": Decimal("21"), "paid": True, "payment_date": _paid_on(2020, 8, 10, 19, 11, 26), "contract_id": 1},
    {"id": 12, "description": "work", "price": Decimal("21"), "paid": True, "payment_date": _paid_on(2020, 8, 15, 19, 11, 26), "contract_id": 2},
    {"id": 13, "description": "work", "price": Decimal("121"), "paid": True, "payment_date": _paid_on(2020, 8, 15, 19, 11, 26), "contract_id": 3},
    {"id": 14, "description": "work", "price": Decimal("121"), "paid": True, "payment_date": _paid_on(2020, 8, 14, 23, 11, 26), "contract_id": 3},
]


def seed_ledger(engine: Engine, *, created_at: datetime | None = None) -> dict[str, int]:
    """Replace all ledger rows with the demo data set.

    `created_at` stamps every seeded row; it defaults to the current UTC time so that
    reporting windows around "now" pick up the seeded paid jobs.
    """

    stamp = created_at or utc_now()
    timestamps = {"created_at": stamp, "updated_at": stamp}

    apply_ledger_ddl(engine)
    with engine.begin() as connection:
        connection.execute(delete(jobs))
        connection.execute(delete(contracts))
        connection.execute(delete(profiles))
        connection.execute(insert(profiles), [{**row, **timestamps} for row in SEED_PROFILES])
        connection.execute(insert(contracts), [{**row, **timestamps} for row in SEED_CONTRACTS])
        connection.execute(insert(jobs), [{**row, **timestamps} for row in SEED_JOBS])

    counts = {
        "profiles": len(SEED_PROFILES),
        "contracts": len(SEED_CONTRACTS),
        "jobs": len(SEED_JOBS),
    }
    LOGGER.info(
        "ledger seeded profiles=%s contracts=%s jobs=%s",
        counts["profiles"],
        counts["contracts"],
        counts["jobs"],
    )
    return counts
