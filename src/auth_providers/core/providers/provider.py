"""Abstract provider kind and profile normalization.

This module defines the contract every built-in provider implements. A
provider kind knows its fixed endpoints, default scope and claim mapping; the
caller only supplies client credentials and optional overrides.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from auth_providers.config.settings import Settings
from auth_providers.core.providers.errors import ConfigurationError, ProtocolComplianceError
from auth_providers.domain.models import (
    AuthorizationEndpoint,
    CanonicalIdentity,
    ClaimSource,
    ClientAuthMethod,
    ClientConfig,
    EndpointConfig,
    ProtocolFamily,
    ProviderDescriptor,
    ProviderStyle,
    ProviderUserConfig,
)

logger = logging.getLogger(__name__)


def _present(value: Any) -> Any:
    """Treat None and empty strings as absent claims."""
    if value is None or value == "":
        return None
    return value


def _string_claim(value: Any) -> Optional[str]:
    """Render scalar claims as strings; other values count as absent."""
    value = _present(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


@dataclass(frozen=True)
class ProfileNormalizer:
    """Declarative claim mapping from a provider's userinfo to CanonicalIdentity.

    Instances are immutable and hold no other state, so a single instance can
    be shared by every login attempt.

    Attributes:
        subject_claim: Claim holding the stable user ID (required)
        name_claim: Claim used as display name
        email_claim: Claim holding the email address
        image_claim: Claim holding the avatar URL
        email_verified_claim: When set, an explicit False drops the email
        extension_claims: Provider-specific claims passed through as extensions
    """
    subject_claim: str = "sub"
    name_claim: str = "name"
    email_claim: str = "email"
    image_claim: str = "picture"
    email_verified_claim: Optional[str] = None
    extension_claims: Tuple[str, ...] = ()

    def __call__(self, claims: ClaimSource) -> CanonicalIdentity:
        return self.normalize(claims)

    def normalize(self, claims: ClaimSource) -> CanonicalIdentity:
        """Map raw claims to a canonical identity.

        Args:
            claims: Userinfo response or any object exposing ``get``

        Returns:
            CanonicalIdentity with absent or non-scalar optional claims set to None

        Raises:
            ProtocolComplianceError: If the subject claim is missing or empty
        """
        subject = _present(claims.get(self.subject_claim))
        if subject is None:
            raise ProtocolComplianceError(
                f"Provider claims are missing the '{self.subject_claim}' claim"
            )
        if isinstance(subject, bool) or not isinstance(subject, (str, int)):
            raise ProtocolComplianceError(
                f"Claim '{self.subject_claim}' must be a string, got {type(subject).__name__}"
            )

        email = _string_claim(claims.get(self.email_claim))
        if self.email_verified_claim and claims.get(self.email_verified_claim) is False:
            email = None

        extensions = {}
        for claim in self.extension_claims:
            value = _present(claims.get(claim))
            if value is not None:
                extensions[claim] = value

        return CanonicalIdentity(
            id=str(subject),
            name=_string_claim(claims.get(self.name_claim)),
            email=email,
            image=_string_claim(claims.get(self.image_claim)),
            extensions=extensions,
        )


class ProviderKind(ABC):
    """Abstract interface for built-in identity providers.

    Subclasses declare the provider's fixed metadata as class attributes and
    implement the endpoint hooks. ``build`` then turns caller configuration
    into a ProviderDescriptor without any network I/O.

    Example:
        provider = KeypProvider(api_domain="http://localhost:4001")
        descriptor = provider.build({"client_id": "abc123"})
        identity = descriptor.normalize_profile(userinfo)
    """

    id: ClassVar[str]
    name: ClassVar[str]
    type: ClassVar[ProtocolFamily] = ProtocolFamily.OIDC
    issuer: ClassVar[str]
    default_scope: ClassVar[str] = "openid email profile"
    client_auth_method: ClassVar[ClientAuthMethod] = ClientAuthMethod.CLIENT_SECRET_BASIC
    style: ClassVar[ProviderStyle] = ProviderStyle()
    profile_normalizer: ClassVar[ProfileNormalizer] = ProfileNormalizer()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderKind":
        """Create the provider kind with its deployment overrides.

        Kinds without deployment-specific values ignore ``settings``.
        """
        return cls()

    @property
    @abstractmethod
    def well_known_url(self) -> str:
        """Discovery document URL."""
        pass

    @property
    @abstractmethod
    def authorization_url(self) -> str:
        pass

    @property
    @abstractmethod
    def token_url(self) -> str:
        pass

    @property
    @abstractmethod
    def userinfo_url(self) -> str:
        pass

    def negotiate_scope(self, scope: Optional[str]) -> str:
        """Return the caller's scope verbatim, or the default when it is absent or empty.

        The two are never merged.
        """
        if scope:
            return scope
        return self.default_scope

    def build(
        self, config: Union[ProviderUserConfig, Mapping[str, Any]]
    ) -> ProviderDescriptor:
        """Build the provider descriptor.

        Args:
            config: Integrator configuration (model or plain mapping)

        Returns:
            Fully formed, immutable ProviderDescriptor

        Raises:
            ConfigurationError: If config is invalid or client_id is missing
        """
        config = self._coerce_config(config)

        if not config.client_id or not config.client_id.strip():
            raise ConfigurationError(f"{self.name} provider requires: client_id")

        if config.client_secret is not None and self.client_auth_method is ClientAuthMethod.NONE:
            logger.warning(
                f"{self.name} is a public client (token_endpoint_auth_method=none); "
                f"client_secret will not be used"
            )

        params = {"scope": self.negotiate_scope(config.scope)}
        if config.redirect_url:
            params["redirect_uri"] = config.redirect_url

        descriptor = ProviderDescriptor(
            id=self.id,
            name=config.name or self.name,
            type=self.type,
            client_id=config.client_id,
            issuer=self.issuer,
            well_known=self.well_known_url,
            authorization=AuthorizationEndpoint(url=self.authorization_url, params=params),
            token=EndpointConfig(url=self.token_url),
            userinfo=EndpointConfig(url=self.userinfo_url),
            client=ClientConfig(token_endpoint_auth_method=self.client_auth_method),
            normalize_profile=self.profile_normalizer,
            style=self.style,
            options=config,
        )
        logger.info(f"Provider descriptor built: {self.id} (discovery: {descriptor.well_known})")
        return descriptor

    def normalize(self, claims: ClaimSource) -> CanonicalIdentity:
        """Map raw claims to a canonical identity using this kind's normalizer."""
        return self.profile_normalizer(claims)

    @staticmethod
    def _coerce_config(
        config: Union[ProviderUserConfig, Mapping[str, Any], None]
    ) -> ProviderUserConfig:
        if isinstance(config, ProviderUserConfig):
            return config
        if config is None:
            raise ConfigurationError("Provider configuration is required")
        try:
            return ProviderUserConfig.model_validate(dict(config))
        except (TypeError, ValueError, ValidationError) as e:
            raise ConfigurationError(f"Invalid provider configuration: {e}") from e
