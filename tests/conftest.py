"""
Shared test configuration.
It provides deterministic environment defaults and a seeded SQLite ledger for service and endpoint tests.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
import tempfile
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# The app module builds its FastAPI instance at import time, so these must exist before collection.
TEST_ENV_DEFAULTS = {
    "PROJECT_NAME": "marketplace-ledger-test",
    "ENV": "test",
    "LOG_LEVEL": "INFO",
    "DATABASE_URL": f"sqlite+pysqlite:///{Path(tempfile.gettempdir()) / 'marketplace-ledger-test.sqlite3'}",
    "API_HOST": "0.0.0.0",
    "API_PORT": "8000",
}
for _key, _value in TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _value)

from marketplace.api.db_access import DatabaseClient  # noqa: E402
from marketplace.common.seed import seed_ledger  # noqa: E402

SEED_CREATED_AT = datetime(2024, 1, 10, 12, 0, 0)


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    for key, value in TEST_ENV_DEFAULTS.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)


@pytest.fixture
def ledger_db(tmp_path: Path) -> Iterator[DatabaseClient]:
    """File-backed SQLite ledger loaded with the demo data set, created at `SEED_CREATED_AT`."""

    db = DatabaseClient(database_url=f"sqlite+pysqlite:///{tmp_path / 'ledger.sqlite3'}")
    seed_ledger(db.engine, created_at=SEED_CREATED_AT)
    try:
        yield db
    finally:
        db.dispose()
