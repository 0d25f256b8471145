"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), one instance per process
    - Core modules never read settings; the lifespan passes values into SessionEngine

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box for a classroom laptop
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Session
    max_participants: int = Field(20, ge=1)
    auto_advance_delay_seconds: float = Field(5.0, gt=0)

    # Per-connection outbound buffer; a client that falls this far behind is dropped
    send_queue_size: int = Field(256, ge=1)

    # Join links: request base URL is used when unset
    public_base_url: str | None = None

    # API
    cors_origins: list[str] = ["*"]
    static_dir: str = "client/dist"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
