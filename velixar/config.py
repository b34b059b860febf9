from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import VelixarConfigError


DEFAULT_BASE_URL = "https://api.velixarai.com"

# Beacons are best-effort; never let one linger past this many seconds
TELEMETRY_TIMEOUT = 2.0


class VelixarSettings(BaseSettings):
    """Client settings read from ``VELIXAR_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="VELIXAR_", env_file=".env", extra="ignore"
    )

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    telemetry: bool = False


class VelixarConfig(BaseModel):
    """Immutable configuration for the Velixar client"""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1, repr=False)
    base_url: str = DEFAULT_BASE_URL
    telemetry: bool = False

    @field_validator("api_key")
    @classmethod
    def api_key_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("api_key must not be blank")
        return v

    @field_validator("base_url", mode="before")
    @classmethod
    def default_empty_base_url(cls, v: Any) -> Any:
        return v or DEFAULT_BASE_URL

    @classmethod
    def from_settings(
        cls, settings: VelixarSettings | None = None, **overrides: Any
    ) -> "VelixarConfig":
        """
        Build a config from environment settings.

        Args:
            settings: Settings to read from (default: a fresh ``VelixarSettings()``)
            **overrides: Explicit values; ``None`` means "use the setting"

        Raises:
            VelixarConfigError: If no API key is configured anywhere
        """
        settings = settings or VelixarSettings()
        values = settings.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})

        if not (values.get("api_key") or "").strip():
            raise VelixarConfigError(
                "No API key configured: pass api_key or set VELIXAR_API_KEY"
            )
        return cls(**values)
