"""Connector settings.

Settings can be provided via:
1. Environment variables (BATON_*)
2. A local .env file
3. CLI arguments (--account-id, --client-id, --client-secret)
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.zoom.us/v2"
DEFAULT_AUTH_URL = "https://zoom.us/oauth/token"


class ZoomSettings(BaseSettings):
    """Zoom connection and authentication settings."""

    model_config = SettingsConfigDict(
        env_prefix="BATON_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server-to-server OAuth app credentials
    account_id: str | None = Field(
        default=None,
        description="Account ID used to generate token providing access to Zoom API",
    )
    client_id: str | None = Field(
        default=None,
        description="Client ID used to generate token providing access to Zoom API",
    )
    client_secret: str | None = Field(
        default=None,
        description="Client Secret used to generate token providing access to Zoom API",
    )

    # Connection
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Zoom REST API base URL")
    auth_url: str = Field(default=DEFAULT_AUTH_URL, description="Zoom OAuth token URL")
    page_size: int = Field(default=50, description="Page size for list endpoints")
    timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False

    @property
    def has_credentials(self) -> bool:
        """Check if all OAuth credentials are available."""
        return not self.missing_credentials()

    def missing_credentials(self) -> list[str]:
        """Return the names of credentials that are not set."""
        missing = []
        if not self.account_id:
            missing.append("account id")
        if not self.client_id:
            missing.append("client id")
        if not self.client_secret:
            missing.append("client secret")
        return missing

    def with_overrides(
        self,
        *,
        account_id: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        base_url: str | None = None,
    ) -> "ZoomSettings":
        """Create a new settings instance with CLI overrides applied."""
        return self.model_copy(
            update={
                "account_id": account_id or self.account_id,
                "client_id": client_id or self.client_id,
                "client_secret": client_secret or self.client_secret,
                "base_url": base_url or self.base_url,
            }
        )
