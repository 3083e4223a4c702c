# This file defines runtime settings for the API layer in one place.
# It exists so caller identification, deposit limits, reporting defaults, and version labels
# can be configured without code edits.
# The config loader reads environment variables and applies safe defaults for local development.

from __future__ import annotations

import os
import re
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

_HEADER_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Freelance Marketplace Ledger API"
    api_version_path: str = "/api/v1"
    schema_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "local"
    database_url: str
    profile_header_name: str = "profile_id"
    deposit_cap_ratio: Decimal = Decimal("1.25")
    best_clients_default_limit: int = 2
    create_schema_on_startup: bool = True
    enable_request_logging: bool = False
    allowed_origins: list[str] = Field(default_factory=list)
    app_version: str = "0.1.0"

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_version_path must start with '/'.")
        parts = [part for part in value.split("/") if part]
        if len(parts) < 2 or parts[-1].startswith("v") is False:
            raise ValueError("api_version_path must look like '/api/v1'.")
        return value.rstrip("/")

    @field_validator("profile_header_name")
    @classmethod
    def validate_header_name(cls, value: str) -> str:
        if not _HEADER_NAME_RE.match(value):
            raise ValueError(f"Invalid header name: {value!r}")
        return value.lower()

    @field_validator("deposit_cap_ratio")
    @classmethod
    def validate_cap_ratio(cls, value: Decimal) -> Decimal:
        if value < 1:
            raise ValueError("deposit_cap_ratio must be at least 1.")
        return value

    @field_validator("best_clients_default_limit", "port")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    def api_version_label(self) -> str:
        return self.api_version_path.rstrip("/").split("/")[-1]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Freelance Marketplace Ledger API"),
        "api_version_path": os.getenv("API_VERSION_PATH", "/api/v1"),
        "schema_version": os.getenv("API_SCHEMA_VERSION", "1.0.0"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8000),
        "environment": os.getenv("ENV", "local"),
        "database_url": os.getenv("DATABASE_URL", ""),
        "profile_header_name": os.getenv("API_PROFILE_HEADER", "profile_id"),
        "deposit_cap_ratio": os.getenv("LEDGER_DEPOSIT_CAP_RATIO", "1.25"),
        "best_clients_default_limit": _env_int("API_BEST_CLIENTS_LIMIT", 2),
        "create_schema_on_startup": _env_bool("API_CREATE_SCHEMA_ON_STARTUP", True),
        "enable_request_logging": _env_bool("API_ENABLE_REQUEST_LOGGING", False),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    if not config_values["database_url"]:
        raise RuntimeError("DATABASE_URL is required for API startup.")

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
