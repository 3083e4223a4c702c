# This file tests the deposit endpoint against the seeded ledger.
# Client 4 owes one unpaid job of 200.00, so its balance may not exceed 250.00.

from __future__ import annotations

from decimal import Decimal

import pytest

from marketplace.api.db_access import DatabaseClient
from marketplace.api.repositories.profile_repository import ProfileRepository
from tests.api.support import ledger_test_client


def _balance(db: DatabaseClient, profile_id: int) -> Decimal:
    profile = ProfileRepository(db=db).get(profile_id)
    assert profile is not None
    return profile.balance


def test_negative_deposit_is_invalid(ledger_db: DatabaseClient) -> None:
    with ledger_test_client(ledger_db) as client:
        response = client.post("/balances/deposit/2", json={"amount": -1})

    assert response.status_code == 422
    assert response.json()["message"] == "invalid deposit value"


@pytest.mark.parametrize("amount", ["abc", None, True, [1], "NaN"])
def test_non_numeric_deposit_is_bad_request(ledger_db: DatabaseClient, amount: object) -> None:
    with ledger_test_client(ledger_db) as client:
        response = client.post("/balances/deposit/4", json={"amount": amount})

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_DEPOSIT_AMOUNT"


def test_missing_body_is_bad_request(ledger_db: DatabaseClient) -> None:
    with ledger_test_client(ledger_db) as client:
        response = client.post("/balances/deposit/4")

    assert response.status_code == 400


def test_deposit_to_contractor_is_rejected(ledger_db: DatabaseClient) -> None:
    with ledger_test_client(ledger_db) as client:
        response = client.post("/balances/deposit/7", json={"amount": 1})

    assert response.status_code == 422
    assert response.json()["message"] == "not a client"
    assert _balance(ledger_db, 7) == Decimal("22.00")


def test_deposit_to_unknown_profile_is_rejected(ledger_db: DatabaseClient) -> None:
    with ledger_test_client(ledger_db) as client:
        response = client.post("/balances/deposit/999", json={"amount": 1})

    assert response.status_code == 422
    assert response.json()["message"] == "not a client"


def test_deposit_above_cap_is_rejected(ledger_db: DatabaseClient) -> None:
    with ledger_test_client(ledger_db) as client:
        response = client.post("/balances/deposit/4", json={"amount": 1000})

    assert response.status_code == 422
    assert response.json()["message"] == "balance cannot exceed 25% of total pending job value"
    assert _balance(ledger_db, 4) == Decimal("1.30")


def test_deposit_credits_client_balance(ledger_db: DatabaseClient) -> None:
    with ledger_test_client(ledger_db) as client:
        response = client.post("/balances/deposit/4", json={"amount": 100})

    assert response.status_code == 204
    assert _balance(ledger_db, 4) == Decimal("101.30")


def test_numeric_string_amount_is_accepted(ledger_db: DatabaseClient) -> None:
    with ledger_test_client(ledger_db) as client:
        response = client.post("/balances/deposit/4", json={"amount": "10.50"})

    assert response.status_code == 204
    assert _balance(ledger_db, 4) == Decimal("11.80")


def test_deposit_up_to_exact_cap_succeeds_and_one_cent_more_fails(ledger_db: DatabaseClient) -> None:
    with ledger_test_client(ledger_db) as client:
        over = client.post("/balances/deposit/4", json={"amount": "248.71"})
        exact = client.post("/balances/deposit/4", json={"amount": "248.70"})

    assert over.status_code == 422
    assert exact.status_code == 204
    assert _balance(ledger_db, 4) == Decimal("250.00")
