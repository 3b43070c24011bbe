# citenet/config/settings.py

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
        env_prefix="CITENET_"
    )

    # ------------------------------------------------------------------
    # Core paths / services
    # ------------------------------------------------------------------
    DATA_DIR: Path = Field(
        default=Path("data"),
        description="Base directory for saved networks.",
    )

    VERITUS_BASE_URL: str = Field(
        default="https://discover.veritus.ai/api",
        description="Base URL of the Veritus paper-search API.",
    )

    VERITUS_API_KEY: Optional[SecretStr] = Field(
        default=None,
        description="Bearer token for the Veritus API. Live calls fail without it.",
    )

    HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Per-request timeout for calls to the search provider.",
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level used by the web app and the CLI.",
    )

    # ------------------------------------------------------------------
    # Job polling
    # ------------------------------------------------------------------
    poll_interval_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Seconds to wait between two job status checks.",
    )

    max_poll_attempts: int = Field(
        default=30,
        ge=1,
        description=(
            "Maximum number of status checks before a job is reported as timed out. "
            "Worst-case latency is roughly poll_interval_seconds * max_poll_attempts."
        ),
    )

    default_search_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Number of related papers requested when the caller gives no limit.",
    )

    # ------------------------------------------------------------------
    # Runtime switches
    # ------------------------------------------------------------------
    mock_mode: bool = Field(
        default=False,
        description=(
            "If True, serve canned fixtures instead of calling the Veritus API. "
            "A per-request mock flag still wins."
        ),
    )

    # ------------------------------------------------------------------
    # Web
    # ------------------------------------------------------------------
    API_KEY: Optional[SecretStr] = Field(
        default=None,
        description="API key for header-based auth. If None, auth is disabled.",
    )

    RATE_LIMIT_MAX_REQUESTS: int = Field(
        default=60,
        ge=1,
        description="Requests allowed per client within one rate-limit window.",
    )

    RATE_LIMIT_WINDOW_SECONDS: float = Field(
        default=60.0,
        gt=0,
        description="Length of the rate-limit window.",
    )

    @property
    def networks_dir(self) -> Path:
        return self.DATA_DIR / "networks"

    @property
    def poll_timeout_seconds(self) -> float:
        return self.poll_interval_seconds * self.max_poll_attempts


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Singleton-style accessor so we only construct Settings once.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


settings = get_settings()
