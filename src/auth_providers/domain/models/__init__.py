"""Domain models for auth providers"""

from auth_providers.domain.models.identity import (
    CanonicalIdentity,
    ClaimSource,
    KeypProfile,
    RawClaims,
)
from auth_providers.domain.models.provider import (
    AuthorizationEndpoint,
    ClientAuthMethod,
    ClientConfig,
    EndpointConfig,
    ProtocolFamily,
    ProviderDescriptor,
    ProviderStyle,
    ProviderUserConfig,
)

__all__ = [
    # Identity models
    "CanonicalIdentity",
    "ClaimSource",
    "KeypProfile",
    "RawClaims",
    # Provider models
    "AuthorizationEndpoint",
    "ClientAuthMethod",
    "ClientConfig",
    "EndpointConfig",
    "ProtocolFamily",
    "ProviderDescriptor",
    "ProviderStyle",
    "ProviderUserConfig",
]
