"""
Application configuration via environment variables.
"""

import json
import os
from functools import lru_cache
from typing import Any, List, Optional, Tuple

from pydantic import Field, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jobsweep.fetchers.browser import RenderConfig

_CORS_ENV = "JOBSWEEP_CORS_ORIGINS"
_DEFAULT_CORS = ["http://localhost:3000"]


def _parse_cors_origins(v: str) -> List[str]:
    """Parse CORS origins from env string (JSON or comma-separated). Never raises."""
    if not v or not isinstance(v, str) or not v.strip():
        return list(_DEFAULT_CORS)
    v = v.strip()
    try:
        parsed = json.loads(v)
        if isinstance(parsed, list):
            return [x.strip() for x in parsed if isinstance(x, str) and x.strip()]
    except (json.JSONDecodeError, TypeError):
        pass
    return [origin.strip() for origin in v.split(",") if origin.strip()]


class Settings(BaseSettings):
    """Application settings loaded from JOBSWEEP_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="JOBSWEEP_", env_file=".env", extra="ignore")

    # App
    app_name: str = "Universal Job Scraper API"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # Set from JOBSWEEP_CORS_ORIGINS by the validator below; a raw string so
    # pydantic-settings never JSON-decodes it
    cors_origins_raw: str = Field(
        default=json.dumps(_DEFAULT_CORS),
        description="JSON array or comma-separated origins",
    )

    @model_validator(mode="before")
    @classmethod
    def inject_cors_from_env(cls, data: Any) -> Any:
        env_val = os.environ.get(_CORS_ENV)
        if env_val is not None and isinstance(data, dict):
            data["cors_origins_raw"] = env_val
        return data

    @computed_field
    @property
    def cors_origins(self) -> List[str]:
        return _parse_cors_origins(self.cors_origins_raw)

    # Browser
    chromium_path: Optional[str] = None
    headless: bool = True
    launch_timeout_ms: int = 60000
    navigation_timeout_ms: int = 45000

    # Scrape defaults for fields the request leaves out
    default_limit: int = 20
    default_wait_time_ms: int = 3000
    default_scroll_pages: int = 1
    max_limit: int = 200
    max_scroll_pages: int = 10

    # Bulk scraping
    bulk_max_websites: int = 25
    bulk_delay_min_ms: int = 2000
    bulk_delay_max_ms: int = 5000

    @field_validator("bulk_delay_max_ms")
    @classmethod
    def delay_bounds(cls, v: int, info: Any) -> int:
        low = info.data.get("bulk_delay_min_ms", 0)
        return max(v, low)

    @property
    def bulk_delay_ms(self) -> Tuple[int, int]:
        return (self.bulk_delay_min_ms, self.bulk_delay_max_ms)

    def render_config(self) -> RenderConfig:
        """Browser settings for the renderer."""
        config = RenderConfig(
            headless=self.headless,
            launch_timeout_ms=self.launch_timeout_ms,
            navigation_timeout_ms=self.navigation_timeout_ms,
        )
        if self.chromium_path:
            config.executable_path = self.chromium_path
        return config


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
