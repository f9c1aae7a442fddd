"""Runtime configuration for the generator and player.

Uses Pydantic BaseSettings to read environment variables with the
`ALGO_LAB_` prefix. A `.env` file in the working directory is honored.

Example:
    export GEMINI_API_KEY=...
    export ALGO_LAB_MODEL=gemini-2.5-flash
    export ALGO_LAB_READY_TIMEOUT=0  # wait forever for VIZ_READY
"""

from __future__ import annotations

from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from algo_lab.core.constants import (
    DEFAULT_MODEL,
    DEFAULT_READY_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    GEMINI_BASE_URL,
)

load_dotenv()  # Load environment variables from a .env file if present


class GeneratorSettings(BaseSettings):
    """Settings read from environment variables.

    Attributes:
        api_key (Optional[SecretStr]): Gemini API key. Hidden when printed.
        model (str): Model name used in the generateContent path.
        base_url (str): Base URL of the generative language API.
        request_timeout (float): Seconds before the HTTP call is abandoned.
        ready_timeout (float): Seconds to wait for VIZ_READY; 0 disables.
    """

    model_config = SettingsConfigDict(
        env_prefix="ALGO_LAB_", extra="ignore", populate_by_name=True
    )

    # SecretStr keeps the key out of reprs, logs and tracebacks
    api_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("ALGO_LAB_API_KEY", "GEMINI_API_KEY"),
    )
    model: str = DEFAULT_MODEL
    base_url: str = GEMINI_BASE_URL
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    ready_timeout: float = Field(default=DEFAULT_READY_TIMEOUT, ge=0)

    @property
    def endpoint(self) -> str:
        """Full generateContent URL for the configured model."""
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"
