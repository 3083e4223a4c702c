# This file provides dependency factories for FastAPI routes and the app lifecycle.
# It exists so the database client, repositories, and services are created once and shared
# through dependency injection.
# The app's shutdown hook calls `close_database_client` so the pool is released with the process.

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from marketplace.api.api_config import ApiConfig, get_api_config
from marketplace.api.db_access import DatabaseClient
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


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


def close_database_client() -> None:
    if get_database_client.cache_info().currsize:
        get_database_client().dispose()
    for factory in (
        get_database_client,
        get_profile_repository,
        get_contract_repository,
        get_job_repository,
        get_identity_resolver,
        get_contract_service,
        get_job_service,
        get_settlement_service,
        get_deposit_service,
        get_reporting_service,
    ):
        factory.cache_clear()


@lru_cache(maxsize=1)
def get_profile_repository() -> ProfileRepository:
    return ProfileRepository(db=get_database_client())


@lru_cache(maxsize=1)
def get_contract_repository() -> ContractRepository:
    return ContractRepository(db=get_database_client())


@lru_cache(maxsize=1)
def get_job_repository() -> JobRepository:
    return JobRepository(db=get_database_client())


@lru_cache(maxsize=1)
def get_identity_resolver() -> IdentityResolver:
    return IdentityResolver(profiles=get_profile_repository())


@lru_cache(maxsize=1)
def get_contract_service() -> ContractService:
    return ContractService(contracts=get_contract_repository())


@lru_cache(maxsize=1)
def get_job_service() -> JobService:
    return JobService(jobs=get_job_repository())


@lru_cache(maxsize=1)
def get_settlement_service() -> SettlementService:
    return SettlementService(
        db=get_database_client(),
        profiles=get_profile_repository(),
        jobs=get_job_repository(),
    )


@lru_cache(maxsize=1)
def get_deposit_service() -> DepositService:
    return DepositService(
        config=get_api_config(),
        db=get_database_client(),
        profiles=get_profile_repository(),
        jobs=get_job_repository(),
    )


@lru_cache(maxsize=1)
def get_reporting_service() -> ReportingService:
    return ReportingService(config=get_api_config(), jobs=get_job_repository())


def get_config() -> ApiConfig:
    return get_api_config()


def get_current_profile(
    request: Request,
    config: Annotated[ApiConfig, Depends(get_config)],
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> Profile:
    """Resolve the caller from the profile header; raises a 401 error when that fails."""

    return resolver.resolve(request.headers.get(config.profile_header_name))


CurrentProfileDep = Annotated[Profile, Depends(get_current_profile)]
