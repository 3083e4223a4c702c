import os

import pytest

from marketplace.api.db_access import DatabaseClient
from marketplace.api.entities import Profile
from marketplace.api.repositories.job_repository import JobRepository
from marketplace.api.repositories.profile_repository import ProfileRepository
from marketplace.api.services.settlement_service import SettlementService
from marketplace.common.ddl import drop_ledger_tables
from marketplace.common.seed import seed_ledger

if os.getenv("RUN_LEDGER_INTEGRATION") != "1":
    pytest.skip("Set RUN_LEDGER_INTEGRATION=1 to run ledger integration tests", allow_module_level=True)


@pytest.fixture
def postgres_db():
    db = DatabaseClient(database_url=os.environ["DATABASE_URL"])
    if not db.can_connect():
        db.dispose()
        pytest.skip("Postgres unavailable in local test environment")
    seed_ledger(db.engine)
    try:
        yield db
    finally:
        drop_ledger_tables(db.engine)
        db.dispose()


@pytest.mark.integration
def test_db_connection_optional(postgres_db: DatabaseClient) -> None:
    assert postgres_db.can_connect() is True
    assert postgres_db.table_exists("jobs")


@pytest.mark.integration
def test_settlement_with_row_locks(postgres_db: DatabaseClient) -> None:
    profiles = ProfileRepository(db=postgres_db)
    service = SettlementService(db=postgres_db, profiles=profiles, jobs=JobRepository(db=postgres_db))
    caller = profiles.get(1)
    assert isinstance(caller, Profile)

    receipt = service.pay_for_job(job_id=2, caller=caller)

    assert str(receipt.client_balance) == "949.00"
    assert str(profiles.get(6).balance) == "1415.00"
