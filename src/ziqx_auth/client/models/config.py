"""Gateway configuration loaded from the environment."""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ValidationEndpoint(str, Enum):
    """Token introspection endpoint version."""

    V1 = "v1"
    V2 = "v2"


class ZAuthSettings(BaseSettings):
    """ZIQX gateway endpoints, overridable with ``ZAUTH_*`` variables."""

    # Authorization (redirect) endpoints
    base_url: str = "https://auth.ziqx.cc"
    dev_base_url: str = Field(
        default="http://localhost:3000",
        description="Development gateway used when logging in with dev mode",
    )

    # Token endpoints
    token_url: str = "https://api.ziqx.cc/auth/token"
    validation_url: str = "https://api.ziqx.cc/auth/validate"
    validation_url_v2: str = "https://api.ziqx.cc/auth/v2/validate"
    validation_endpoint: ValidationEndpoint = ValidationEndpoint.V2

    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="ZAUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validation_url_for(self, endpoint: ValidationEndpoint) -> str:
        urls = {
            ValidationEndpoint.V1: self.validation_url,
            ValidationEndpoint.V2: self.validation_url_v2,
        }
        return urls[endpoint]


# Singleton instance
settings = ZAuthSettings()
