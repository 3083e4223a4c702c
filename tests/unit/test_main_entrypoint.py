"""
Unit tests for the API process entrypoint.
It asserts the server is started with the configured bind address.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

from typing import Any

import pytest

from marketplace.api import main as main_module
from marketplace.api.api_config import get_api_config


def test_main_serves_app_on_configured_address(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setenv("API_HOST", "127.0.0.1")
    monkeypatch.setenv("API_PORT", "9123")
    monkeypatch.setattr(
        main_module.uvicorn,
        "run",
        lambda app, **kwargs: calls.append({"app": app, **kwargs}),
    )
    get_api_config.cache_clear()
    try:
        main_module.main()
    finally:
        get_api_config.cache_clear()

    assert calls == [{"app": main_module.app, "host": "127.0.0.1", "port": 9123}]
