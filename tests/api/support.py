# This file provides shared helpers for API endpoint tests.
# It exists so tests can override service dependencies with fakes or with services
# bound to a seeded SQLite ledger.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import Any

from fastapi.testclient import TestClient

from marketplace.api.api_config import ApiConfig
from marketplace.api.app import app
from marketplace.api.db_access import DatabaseClient
from marketplace.api.dependencies import (
    get_config,
    get_contract_service,
    get_database_client,
    get_deposit_service,
    get_identity_resolver,
    get_job_service,
    get_reporting_service,
    get_settlement_service,
)
from marketplace.api.entities import Profile
from marketplace.api.identity import IdentityResolver
from marketplace.api.repositories.contract_repository import ContractRepository
from marketplace.api.repositories.job_repository import JobRepository
from marketplace.api.repositories.profile_repository import ProfileRepository
from marketplace.api.services.contract_service import ContractService
from marketplace.api.services.deposit_service import DepositService
from marketplace.api.services.job_service import JobService
from marketplace.api.services.reporting_service import ReportingService
from marketplace.api.services.settlement_service import SettlementService

PROFILE_HEADER = "profile_id"


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Ledger API",
        "api_version_path": "/api/v1",
        "schema_version": "1.0.0",
        "host": "0.0.0.0",
        "port": 8000,
        "environment": "test",
        "database_url": "sqlite+pysqlite:///:memory:",
        "profile_header_name": PROFILE_HEADER,
        "deposit_cap_ratio": Decimal("1.25"),
        "best_clients_default_limit": 2,
        "create_schema_on_startup": False,
        "enable_request_logging": False,
        "allowed_origins": [],
        "app_version": "0.1.0",
    }
    values.update(overrides)
    return ApiConfig(**values)


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables if existing_tables is not None else {"profiles", "contracts", "jobs"}

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables


class FakeProfileRepository:
    """In-memory stand-in for identity lookups."""

    def __init__(self, profiles: list[Profile] | None = None) -> None:
        self._profiles = {profile.id: profile for profile in profiles or []}

    def get(self, profile_id: int, **_: object) -> Profile | None:
        return self._profiles.get(profile_id)


def make_profile(profile_id: int, *, type_: str = "client", balance: str = "100") -> Profile:
    return Profile(
        id=profile_id,
        first_name="Test",
        last_name=f"Profile{profile_id}",
        profession="Tester",
        balance=Decimal(balance),
        type=type_,
    )


def build_ledger_services(db: DatabaseClient, config: ApiConfig | None = None) -> dict[str, Any]:
    """Real repositories and services bound to one database client."""

    resolved_config = config or build_test_config()
    profiles = ProfileRepository(db=db)
    contracts = ContractRepository(db=db)
    jobs = JobRepository(db=db)
    return {
        "identity_resolver": IdentityResolver(profiles=profiles),
        "contract_service": ContractService(contracts=contracts),
        "job_service": JobService(jobs=jobs),
        "settlement_service": SettlementService(db=db, profiles=profiles, jobs=jobs),
        "deposit_service": DepositService(
            config=resolved_config, db=db, profiles=profiles, jobs=jobs
        ),
        "reporting_service": ReportingService(config=resolved_config, jobs=jobs),
    }


def _provide(value: Any) -> Callable[[], Any]:
    return lambda: value


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    identity_resolver: Any | None = None,
    contract_service: Any | None = None,
    job_service: Any | None = None,
    settlement_service: Any | None = None,
    deposit_service: Any | None = None,
    reporting_service: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    overrides = {
        get_database_client: db_client,
        get_identity_resolver: identity_resolver,
        get_contract_service: contract_service,
        get_job_service: job_service,
        get_settlement_service: settlement_service,
        get_deposit_service: deposit_service,
        get_reporting_service: reporting_service,
    }
    for dependency, replacement in overrides.items():
        if replacement is not None:
            app.dependency_overrides[dependency] = _provide(replacement)

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@contextmanager
def ledger_test_client(db: DatabaseClient, *, config: ApiConfig | None = None) -> Iterator[TestClient]:
    """TestClient whose services all run against the given (seeded) ledger database."""

    resolved_config = config or build_test_config()
    services = build_ledger_services(db, resolved_config)
    with api_test_client(config=resolved_config, db_client=db, **services) as client:
        yield client


def as_caller(profile_id: int) -> dict[str, str]:
    return {PROFILE_HEADER: str(profile_id)}
