"""Application configuration using Pydantic Settings."""

import json
import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import List, Optional

from googleauth.auth_url import GOOGLE_AUTH_URI
from googleauth.scope_registry import ScopeRegistry
from googleauth.service_types import Service

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class Settings(BaseSettings):
    """Application configuration using Pydantic Settings"""

    # OAuth Configuration (either use JSON file OR individual credentials)
    google_client_secrets_file: str = ""  # Path to client_secret.json file
    google_client_id: str = ""
    google_client_secret: str = ""
    oauth_redirect_uri: str = "http://localhost:8002/oauth2callback"
    oauth_auth_uri: str = GOOGLE_AUTH_URI

    # Services to request (comma-separated); empty means all user services
    oauth_services: str = ""
    oauth_manage: bool = Field(
        default=False,
        description="Also request openid/email identity scopes",
    )

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    log_path: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def get_oauth_services(self) -> List[Service]:
        """
        Parse the configured service list.

        Returns:
            List[Service]: Services in configured order, or the default
                           user services when nothing is configured.

        Raises:
            UnknownServiceError: If an entry is not a known service
        """
        if not self.oauth_services or self.oauth_services.strip() == "":
            return ScopeRegistry.user_services()

        services = ScopeRegistry.parse_services(self.oauth_services)
        logging.debug(f"Configured OAuth services: {[svc.value for svc in services]}")
        return services

    def get_oauth_scopes(self) -> List[str]:
        """Resolve the scopes for the configured services."""
        services = self.get_oauth_services()
        if self.oauth_manage:
            return ScopeRegistry.scopes_for_manage(services)
        return ScopeRegistry.scopes_for_services(services)

    def is_oauth_configured(self) -> bool:
        """Check if OAuth credentials are properly configured."""
        if self.google_client_secrets_file:
            return Path(self.google_client_secrets_file).exists()

        return bool(self.google_client_id and self.google_client_secret)

    def validate_oauth_config(self) -> None:
        """Validate that OAuth configuration is complete."""
        if not self.is_oauth_configured():
            if self.google_client_secrets_file:
                raise ValueError(
                    f"OAuth client secrets file not found: {self.google_client_secrets_file}. "
                    "Please check the path to your Google OAuth JSON file."
                )
            else:
                raise ValueError(
                    "OAuth configuration is incomplete. Please either:\n"
                    "1. Set GOOGLE_CLIENT_SECRETS_FILE environment variable to point to your OAuth JSON file, OR\n"
                    "2. Set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET environment variables"
                )

    def get_oauth_client_config(self) -> dict:
        """Get OAuth client configuration from JSON file or environment variables."""
        if self.google_client_secrets_file:
            secrets_path = Path(self.google_client_secrets_file)
            if not secrets_path.exists():
                logging.error(f"OAuth client secrets file not found at: {secrets_path.absolute()}")
                raise FileNotFoundError(f"OAuth client secrets file not found: {self.google_client_secrets_file}")

            try:
                with open(secrets_path, "r") as f:
                    config = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in OAuth client secrets file: {e}")

            # Google ships either a "web" or an "installed" client block
            for client_type in ("web", "installed"):
                if client_type in config:
                    client = config[client_type]
                    return {
                        "client_id": client.get("client_id"),
                        "client_secret": client.get("client_secret"),
                        "auth_uri": client.get("auth_uri", self.oauth_auth_uri),
                        "token_uri": client.get("token_uri", GOOGLE_TOKEN_URI),
                        "redirect_uris": client.get("redirect_uris", [self.oauth_redirect_uri]),
                    }
            raise ValueError("OAuth client secrets JSON must contain either 'web' or 'installed' configuration")

        if not self.google_client_id or not self.google_client_secret:
            raise ValueError("OAuth configuration incomplete: Please set either GOOGLE_CLIENT_SECRETS_FILE or both GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET")

        return {
            "client_id": self.google_client_id,
            "client_secret": self.google_client_secret,
            "auth_uri": self.oauth_auth_uri,
            "token_uri": GOOGLE_TOKEN_URI,
            "redirect_uris": [self.oauth_redirect_uri],
        }


# Global settings instance
settings = Settings()
