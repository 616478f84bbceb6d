"""Identity provider descriptors.

Each built-in provider kind turns integrator configuration into an immutable
descriptor for the OAuth engine and maps the provider's userinfo claims to a
canonical identity:
- keyp: Keyp OIDC (public client, PKCE)
"""

from .errors import ConfigurationError, ProtocolComplianceError, ProviderError
from .factory import (
    build_providers,
    get_configured_providers,
    get_provider_kind,
    register_provider_kind,
)
from .keyp import KeypProvider, keyp
from .provider import ProfileNormalizer, ProviderKind

__all__ = [
    "ConfigurationError",
    "ProtocolComplianceError",
    "ProviderError",
    "KeypProvider",
    "ProfileNormalizer",
    "ProviderKind",
    "build_providers",
    "get_configured_providers",
    "get_provider_kind",
    "keyp",
    "register_provider_kind",
]
