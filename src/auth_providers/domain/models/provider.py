"""Provider Descriptor Models

Purpose: Define the caller-supplied provider configuration and the descriptor
handed to the external OAuth engine.

A descriptor is built once at startup and treated as read-only afterwards,
so every model here is frozen.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from auth_providers.domain.models.identity import CanonicalIdentity, ClaimSource, FrozenMapping


class ProtocolFamily(str, Enum):
    """Protocol the external engine speaks with the provider"""
    OAUTH2 = "oauth"
    OIDC = "oidc"


class ClientAuthMethod(str, Enum):
    """Token endpoint client authentication method (RFC 7591 names)"""
    NONE = "none"
    CLIENT_SECRET_BASIC = "client_secret_basic"
    CLIENT_SECRET_POST = "client_secret_post"
    CLIENT_SECRET_JWT = "client_secret_jwt"
    PRIVATE_KEY_JWT = "private_key_jwt"


class ProviderUserConfig(BaseModel):
    """Provider configuration supplied by the integrator.

    ``client_id`` is optional at the model level so that a missing value
    surfaces as a ConfigurationError from the builder rather than a
    validation error at construction.

    Attributes:
        client_id: OAuth 2.0 client ID registered with the provider
        scope: Space-separated scope string replacing the provider default
        redirect_url: Callback URL pre-registered with the provider
        client_secret: Client secret (unused by public clients)
        name: Display name override
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    client_id: Optional[str] = None
    scope: Optional[str] = None
    redirect_url: Optional[str] = None
    client_secret: Optional[SecretStr] = None
    name: Optional[str] = None


class AuthorizationEndpoint(BaseModel):
    """Authorization endpoint plus its default query parameters"""
    model_config = ConfigDict(frozen=True)

    url: str
    params: FrozenMapping = Field(default_factory=dict, validate_default=True)

    @property
    def full_url(self) -> str:
        """Authorization URL with the default parameters encoded in the query"""
        if not self.params:
            return self.url
        return f"{self.url}?{urlencode(self.params)}"


class EndpointConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    token_endpoint_auth_method: ClientAuthMethod


class ProviderStyle(BaseModel):
    """Branding used by sign-in pages. Not interpreted by the auth core."""
    model_config = ConfigDict(frozen=True)

    logo: Optional[str] = None
    logo_dark: Optional[str] = None
    bg: Optional[str] = None
    text: Optional[str] = None
    bg_dark: Optional[str] = None
    text_dark: Optional[str] = None


class ProviderDescriptor(BaseModel):
    """Immutable provider record consumed by the external OAuth engine.

    Attributes:
        id: Provider kind constant (e.g. 'keyp'), never taken from caller input
        name: Display name
        type: Protocol family
        client_id: OAuth 2.0 client ID
        issuer: Expected ``iss`` of tokens
        well_known: Discovery document URL
        authorization: Authorization endpoint and default params (incl. scope)
        token: Token endpoint
        userinfo: Userinfo endpoint
        client: Client authentication policy
        normalize_profile: Maps raw claims to a CanonicalIdentity
        style: Branding metadata
        options: The configuration the descriptor was built from
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    name: str
    type: ProtocolFamily
    client_id: str
    issuer: str
    well_known: str
    authorization: AuthorizationEndpoint
    token: EndpointConfig
    userinfo: EndpointConfig
    client: ClientConfig
    normalize_profile: Callable[[ClaimSource], CanonicalIdentity]
    style: ProviderStyle = Field(default_factory=ProviderStyle)
    options: ProviderUserConfig

    @property
    def client_auth_method(self) -> ClientAuthMethod:
        return self.client.token_endpoint_auth_method

    @property
    def scope(self) -> str:
        """Negotiated scope sent with the authorization request"""
        return self.authorization.params["scope"]

    @property
    def redirect_url(self) -> Optional[str]:
        return self.options.redirect_url

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary.

        The profile normalizer is not serializable and is left out; the
        client secret stays masked.
        """
        return self.model_dump(mode="json", exclude={"normalize_profile"})
