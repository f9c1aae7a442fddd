"""Runtime configuration for the API.

Uses Pydantic BaseSettings to read environment variables with the
`ALGO_LAB_API_` prefix. Generator settings (API key, model, timeouts) are
read separately with the `ALGO_LAB_` prefix; see `algo_lab.core.settings`.

Example:
    export ALGO_LAB_API_CORS_ALLOW_ALL=false
    export ALGO_LAB_API_MAX_SESSIONS=64
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings read from environment variables.

    Attributes:
        host (str): Default bind address for `scripts/run_api.py`.
        port (int): Default bind port for `scripts/run_api.py`.
        cors_allow_all (bool): Whether to allow all CORS origins. Useful in dev.
        max_sessions (int): Oldest sessions are evicted beyond this count.
    """

    model_config = SettingsConfigDict(env_prefix="ALGO_LAB_API_", extra="ignore")

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    cors_allow_all: bool = True
    max_sessions: int = Field(default=256, ge=1)


settings = Settings()
