"""Nested pydantic-settings configuration for the application.

Each group reads its own ``WELLNESS_<GROUP>_*`` env vars.  The variable names
used by earlier deployments (``OPENAI_API_KEY``, ``SUPABASE_URL`` ...) are
accepted as aliases so existing environments keep working.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseSettings):
    """Analysis provider configuration.

    Env vars use ``WELLNESS_LLM_`` prefix::

        export WELLNESS_LLM_MODEL=gpt-4o-mini
        export WELLNESS_LLM_API_KEY=sk-...
    """

    model_config = SettingsConfigDict(env_prefix="WELLNESS_LLM_", populate_by_name=True)

    model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("WELLNESS_LLM_MODEL", "OPENAI_MODEL", "model"),
    )
    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("WELLNESS_LLM_API_KEY", "OPENAI_API_KEY", "api_key"),
    )
    base_url: str = ""
    temperature: float = 0.7
    max_tokens: int = 900
    timeout: float = 60.0
    max_attempts: int = Field(default=1, ge=1, le=10)
    retry_max_delay: float = 10.0
    retry_jitter_factor: float = 0.5


class PersistenceConfig(BaseSettings):
    """Report sink configuration.

    Env vars use ``WELLNESS_PERSISTENCE_`` prefix.
    """

    model_config = SettingsConfigDict(env_prefix="WELLNESS_PERSISTENCE_", populate_by_name=True)

    backend: Literal["supabase", "memory"] = "supabase"
    supabase_url: str = Field(
        default="",
        validation_alias=AliasChoices("WELLNESS_PERSISTENCE_SUPABASE_URL", "SUPABASE_URL", "supabase_url"),
    )
    supabase_key: str = Field(
        default="",
        validation_alias=AliasChoices("WELLNESS_PERSISTENCE_SUPABASE_KEY", "SUPABASE_KEY", "supabase_key"),
    )
    table: str = "reports"

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


class ReportConfig(BaseSettings):
    """PDF report layout configuration.

    Env vars use ``WELLNESS_REPORT_`` prefix::

        export WELLNESS_REPORT_PRODUCT_NAME="Assistente de Bem-Estar"
        export WELLNESS_REPORT_PRIMARY_COLOR="#2E86C1"
    """

    model_config = SettingsConfigDict(env_prefix="WELLNESS_REPORT_")

    product_name: str = "Assistente de Bem-Estar"
    margin: float = Field(default=50.0, gt=0.0, le=150.0)
    primary_color: str = "#2E86C1"
    text_color: str = "#222222"
    muted_color: str = "#555555"
    logo_width: float = Field(default=60.0, gt=0.0, le=200.0)
    timestamp_format: str = "%d/%m/%Y %H:%M:%S"


class APIConfig(BaseSettings):
    """HTTP surface configuration.

    Env vars use ``WELLNESS_API_`` prefix.
    """

    model_config = SettingsConfigDict(env_prefix="WELLNESS_API_", populate_by_name=True)

    title: str = "Wellness Report API"
    description: str = "Questionnaire analysis delivered as a PDF report"
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "https://assistente-saude-frontend.vercel.app",
            "http://localhost:5173",
        ]
    )
    rate_limit_window_seconds: float = Field(default=15 * 60, gt=0.0)
    rate_limit_max_requests: int = Field(default=100, ge=1)
    trust_proxy: bool = True
    max_body_bytes: int = 10 * 1024 * 1024
    port: int = Field(
        default=3333,
        validation_alias=AliasChoices("WELLNESS_API_PORT", "PORT", "port"),
    )


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``WELLNESS_OBSERVABILITY_`` prefix.
    """

    model_config = SettingsConfigDict(env_prefix="WELLNESS_OBSERVABILITY_")

    log_level: str = "INFO"
    service_name: str = "wellness-report"


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
