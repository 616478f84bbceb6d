"""Keyp identity provider.

Keyp (https://usekeyp.com) is an OIDC provider for wallet-backed accounts.
Clients are public: tokens are exchanged with PKCE and no client secret.

Example Configuration:
    KEYP_CLIENT_ID=xxx
    KEYP_CLIENT_REDIRECT_URI=https://example.com/api/auth/callback/keyp

    # Local Keyp API for testing (discovery document only)
    KEYP_API_DOMAIN=http://localhost:4001

The redirect URL must be registered for the client in the Keyp Developer
Portal (https://dev.usekeyp.com).
"""

import logging
from typing import Any, Mapping, Optional, Union

from auth_providers.config.settings import Settings
from auth_providers.core.providers.provider import ProfileNormalizer, ProviderKind
from auth_providers.domain.models import (
    ClientAuthMethod,
    ProtocolFamily,
    ProviderDescriptor,
    ProviderStyle,
    ProviderUserConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_KEYP_API_DOMAIN = "https://api.usekeyp.com"


KEYP_PROFILE_NORMALIZER = ProfileNormalizer(
    subject_claim="sub",
    name_claim="username",
    email_claim="email",
    image_claim="imageSrc",
    extension_claims=("address",),
)


class KeypProvider(ProviderKind):
    """Keyp OIDC provider.

    Only the discovery document location depends on the deployment: it is
    served from ``api_domain``, which can point at a local Keyp API. All other
    endpoints are fixed.
    """

    id = "keyp"
    name = "Keyp"
    type = ProtocolFamily.OIDC
    issuer = "https://api.usekeyp.com"
    default_scope = "openid email"
    client_auth_method = ClientAuthMethod.NONE
    style = ProviderStyle(
        logo="/keyp.svg",
        logo_dark="/keyp-dark.svg",
        bg="#fff",
        text="#005285",
        bg_dark="#005285",
        text_dark="#fff",
    )
    profile_normalizer = KEYP_PROFILE_NORMALIZER

    def __init__(self, api_domain: Optional[str] = None):
        """Initialize Keyp provider.

        Args:
            api_domain: Keyp API base URL for discovery (default: production API)
        """
        if api_domain and api_domain.strip():
            self.api_domain = api_domain.strip().rstrip("/")
        else:
            self.api_domain = DEFAULT_KEYP_API_DOMAIN

        if self.api_domain != DEFAULT_KEYP_API_DOMAIN:
            logger.info(f"Using Keyp API domain override: {self.api_domain}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "KeypProvider":
        return cls(api_domain=settings.keyp_api_domain)

    @property
    def well_known_url(self) -> str:
        return f"{self.api_domain}/oauth/.well-known/openid-configuration"

    @property
    def authorization_url(self) -> str:
        return "https://app.usekeyp.com/oauth/auth"

    @property
    def token_url(self) -> str:
        return "https://api.usekeyp.com/oauth/token"

    @property
    def userinfo_url(self) -> str:
        return "https://api.usekeyp.com/oauth/me"


def keyp(
    config: Union[ProviderUserConfig, Mapping[str, Any]],
    api_domain: Optional[str] = None,
) -> ProviderDescriptor:
    """Build a Keyp provider descriptor in one call."""
    return KeypProvider(api_domain=api_domain).build(config)
