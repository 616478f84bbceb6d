"""Configuration Settings for Auth Providers

Manages environment variables and provider configuration.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings

from auth_providers.domain.models import ProviderUserConfig


class Settings(BaseSettings):
    """Application settings"""

    # Keyp API domain for the discovery document (unset: production API)
    keyp_api_domain: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "keyp_api_domain", "KEYP_API_DOMAIN", "NEXT_PUBLIC_KEYP_API_DOMAIN"
        ),
    )

    # Keyp client registration (provider is skipped when no client ID is set)
    keyp_client_id: Optional[str] = None
    keyp_client_secret: Optional[SecretStr] = None
    keyp_scope: Optional[str] = None
    keyp_redirect_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "keyp_redirect_url", "KEYP_REDIRECT_URL", "KEYP_CLIENT_REDIRECT_URI"
        ),
    )

    def keyp_provider_config(self) -> Optional[ProviderUserConfig]:
        """Build Keyp provider configuration from settings

        Returns:
            ProviderUserConfig, or None if KEYP_CLIENT_ID is not set
        """
        if not self.keyp_client_id:
            return None
        return ProviderUserConfig(
            client_id=self.keyp_client_id,
            client_secret=self.keyp_client_secret,
            scope=self.keyp_scope,
            redirect_url=self.keyp_redirect_url,
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance

    Returns:
        Settings instance
    """
    return Settings()
