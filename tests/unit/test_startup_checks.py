"""Tests for startup validation checks."""

from __future__ import annotations

import logging

import pytest

from wellness_report.core.config import APIConfig, AppSettings, LLMConfig, PersistenceConfig
from wellness_report.core.startup_checks import validate_settings


def _settings(**overrides) -> AppSettings:
    defaults = {
        "llm": LLMConfig(api_key="sk-test"),
        "persistence": PersistenceConfig(backend="supabase", supabase_url="https://x.supabase.co", supabase_key="k"),
    }
    defaults.update(overrides)
    return AppSettings(**defaults)


class TestLLMCheck:
    def test_missing_key_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            validate_settings(_settings(llm=LLMConfig(api_key="")))
        assert "demo analysis" in caplog.text

    def test_configured_is_quiet(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            validate_settings(_settings())
        assert caplog.text == ""


class TestPersistenceCheck:
    def test_unconfigured_supabase_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            validate_settings(_settings(persistence=PersistenceConfig(supabase_url="", supabase_key="")))
        assert "SUPABASE_URL" in caplog.text

    def test_memory_backend_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            validate_settings(_settings(persistence=PersistenceConfig(backend="memory")))
        assert "lost on restart" in caplog.text


class TestRateLimitCheck:
    def test_zero_budget_raises(self) -> None:
        api = APIConfig.model_construct(rate_limit_max_requests=0)
        with pytest.raises(ValueError, match="at least 1"):
            validate_settings(_settings(api=api))
