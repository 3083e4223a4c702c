"""
Unit tests for ledger repositories.
It asserts the paid flag semantics, contract visibility, and row locking order.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from marketplace.api.db_access import DatabaseClient
from marketplace.api.repositories.contract_repository import ContractRepository
from marketplace.api.repositories.job_repository import JobRepository
from marketplace.api.repositories.profile_repository import ProfileRepository


def test_profile_rows_become_money_decimals(ledger_db: DatabaseClient) -> None:
    profile = ProfileRepository(db=ledger_db).get(2)

    assert profile is not None
    assert profile.balance == Decimal("231.11")
    assert profile.is_client


def test_missing_profile_returns_none(ledger_db: DatabaseClient) -> None:
    assert ProfileRepository(db=ledger_db).get(999) is None


def test_lock_many_returns_requested_profiles(ledger_db: DatabaseClient) -> None:
    repository = ProfileRepository(db=ledger_db)

    with ledger_db.transaction() as connection:
        locked = repository.lock_many(connection, [6, 1, 6, 999])

    assert list(locked) == [1, 6]


def test_contract_lookup_is_limited_to_the_client(ledger_db: DatabaseClient) -> None:
    repository = ContractRepository(db=ledger_db)

    assert repository.get_for_client(contract_id=2, client_id=1) is not None
    # Profile 6 is the contractor on contract 2 and does not see it through this lookup.
    assert repository.get_for_client(contract_id=2, client_id=6) is None
    assert repository.get_for_client(contract_id=2, client_id=2) is None


def test_active_contracts_exclude_terminated(ledger_db: DatabaseClient) -> None:
    contracts = ContractRepository(db=ledger_db).list_active_for_profile(profile_id=1)

    assert [contract.id for contract in contracts] == [2]


def test_false_and_null_paid_are_both_outstanding(ledger_db: DatabaseClient) -> None:
    ledger_db.execute("UPDATE jobs SET paid = :paid WHERE id = 3", {"paid": False})
    repository = JobRepository(db=ledger_db)

    unpaid_ids = [job.id for job in repository.list_unpaid_for_profile(profile_id=2)]

    assert unpaid_ids == [3, 4]
    assert repository.pending_total_for_client(client_id=2) == Decimal("402.00")


def test_mark_paid_only_flips_outstanding_jobs(ledger_db: DatabaseClient) -> None:
    repository = JobRepository(db=ledger_db)
    paid_at = datetime(2024, 3, 1)

    with ledger_db.transaction() as connection:
        first = repository.mark_paid(connection, job_id=2, paid_at=paid_at)
    with ledger_db.transaction() as connection:
        second = repository.mark_paid(connection, job_id=2, paid_at=paid_at)

    assert first is True
    assert second is False


def test_find_for_client_joins_contract(ledger_db: DatabaseClient) -> None:
    repository = JobRepository(db=ledger_db)

    with ledger_db.transaction() as connection:
        job = repository.find_for_client(connection, job_id=5, client_id=4, for_update=True)
        other = repository.find_for_client(connection, job_id=5, client_id=1)

    assert job is not None
    assert job.contract is not None
    assert job.contract.contractor_id == 7
    assert job.price == Decimal("200.00")
    assert other is None


def test_pending_total_is_zero_without_unpaid_jobs(ledger_db: DatabaseClient) -> None:
    assert JobRepository(db=ledger_db).pending_total_for_client(client_id=3) == Decimal("0.00")
