"""Identity Data Models

Purpose: Define the claim input and the canonical identity output of profile
normalization.

Key Components:
- ClaimSource: Anything a normalizer can read claims from
- CanonicalIdentity: Provider-agnostic identity handed to the session layer
- KeypProfile: Typed view of Keyp's /oauth/me response
"""

from types import MappingProxyType
from typing import Annotated, Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

# Open, provider-defined claim set (userinfo response or ID token claims)
RawClaims = Mapping[str, Any]


def _freeze(value: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(value))


def _thaw(value: Mapping[str, Any]) -> Dict[str, Any]:
    return dict(value)


# Mapping field that cannot be changed in place; serialized as a plain dict
FrozenMapping = Annotated[Mapping[str, Any], AfterValidator(_freeze), PlainSerializer(_thaw)]


@runtime_checkable
class ClaimSource(Protocol):
    """Read-only claim lookup.

    Plain mappings satisfy this protocol, so raw userinfo JSON can be
    normalized directly. Provider-specific profile models implement ``get``
    to expose their typed fields under the provider's claim names.
    """

    def get(self, key: str, default: Any = None) -> Any:
        ...


class CanonicalIdentity(BaseModel):
    """User identity produced by a provider's profile normalizer.

    Attributes:
        id: Stable subject identifier, copied verbatim from the provider
        name: Display name (None when the provider sent none)
        email: Email address (None when absent or unverified)
        image: Avatar URL (None when absent)
        extensions: Provider-specific fields passed through under stable keys
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    extensions: FrozenMapping = Field(default_factory=dict, validate_default=True)


class KeypProfile(BaseModel):
    """Keyp userinfo response.

    ``imageSrc`` is exposed as ``image_src``; unknown claims are kept.
    """
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    sub: str
    username: Optional[str] = None
    email: Optional[str] = None
    image_src: Optional[str] = Field(default=None, alias="imageSrc")
    address: Optional[str] = None

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a claim by its wire name."""
        for name, field in type(self).model_fields.items():
            if key in (name, field.alias):
                value = getattr(self, name)
                return default if value is None else value
        return (self.model_extra or {}).get(key, default)
