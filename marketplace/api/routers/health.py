# This file defines liveness, readiness, and version endpoints for API operations.
# It exists so orchestration and monitoring systems can verify service health quickly.
# The readiness check confirms database connectivity and that the ledger tables exist.

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from marketplace.api.api_config import ApiConfig
from marketplace.api.db_access import DatabaseClient
from marketplace.api.dependencies import get_config, get_database_client
from marketplace.api.schema_versions import build_version_fields
from marketplace.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse
from marketplace.common.ddl import LEDGER_TABLE_NAMES

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        **build_version_fields(
            api_version_path=config.api_version_path,
            schema_version=config.schema_version,
        ),
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(
    request: Request,
    config: ConfigDep,
    db: DBDep,
) -> dict[str, object]:
    db_connected = db.can_connect()
    missing_tables = (
        [name for name in LEDGER_TABLE_NAMES if not db.table_exists(name)]
        if db_connected
        else list(LEDGER_TABLE_NAMES)
    )
    ledger_tables_ready = db_connected and not missing_tables

    return {
        **build_version_fields(
            api_version_path=config.api_version_path,
            schema_version=config.schema_version,
        ),
        "request_id": request.state.request_id,
        "db_connected": db_connected,
        "ledger_tables_ready": ledger_tables_ready,
        "missing_tables": missing_tables,
        "ready": ledger_tables_ready,
        "database": "reachable" if db_connected else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        **build_version_fields(
            api_version_path=config.api_version_path,
            schema_version=config.schema_version,
        ),
        "request_id": request.state.request_id,
        "api_version_path": config.api_version_path,
        "app_version": config.app_version,
        "git_commit": _git_commit(),
        "project": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }
