"""Identity provider factory.

Builds provider descriptors from integrator configuration. Descriptors are
built once per process and shared read-only afterwards.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Type, Union

from auth_providers.config.settings import Settings, get_settings
from auth_providers.core.providers.errors import ConfigurationError
from auth_providers.core.providers.keyp import KeypProvider
from auth_providers.core.providers.provider import ProviderKind
from auth_providers.domain.models import ProviderDescriptor, ProviderUserConfig

logger = logging.getLogger(__name__)

_PROVIDER_KINDS: Dict[str, Type[ProviderKind]] = {
    KeypProvider.id: KeypProvider,
}

# Global descriptors built from settings (initialized on first call)
_configured_providers: Optional[Dict[str, ProviderDescriptor]] = None


def register_provider_kind(kind: Type[ProviderKind]) -> Type[ProviderKind]:
    """Register a provider kind under its ``id``. Usable as a class decorator."""
    if kind.id in _PROVIDER_KINDS and _PROVIDER_KINDS[kind.id] is not kind:
        raise ValueError(f"Provider kind already registered: {kind.id}")
    _PROVIDER_KINDS[kind.id] = kind
    return kind


def available_provider_kinds() -> list[str]:
    return sorted(_PROVIDER_KINDS)


def get_provider_kind(kind_id: str, settings: Optional[Settings] = None) -> ProviderKind:
    """Instantiate a provider kind with its deployment overrides.

    Args:
        kind_id: Provider kind identifier (e.g. 'keyp')
        settings: Settings to read overrides from (default: environment)

    Returns:
        Configured ProviderKind instance

    Raises:
        ConfigurationError: If kind_id is unknown
    """
    kind = _PROVIDER_KINDS.get(kind_id)
    if kind is None:
        raise ConfigurationError(
            f"Unknown provider: {kind_id}. "
            f"Valid options: {', '.join(available_provider_kinds())}"
        )

    return kind.from_settings(settings or get_settings())


def build_providers(
    configs: Mapping[str, Union[ProviderUserConfig, Mapping[str, Any]]],
    settings: Optional[Settings] = None,
) -> Dict[str, ProviderDescriptor]:
    """Build descriptors for several providers.

    A provider with invalid configuration is logged and skipped; the others
    are still returned.

    Args:
        configs: Provider configuration keyed by provider kind id
        settings: Settings to read overrides from (default: environment)

    Returns:
        Descriptors keyed by provider id
    """
    settings = settings or get_settings()
    descriptors: Dict[str, ProviderDescriptor] = {}

    for kind_id, config in configs.items():
        try:
            descriptors[kind_id] = get_provider_kind(kind_id, settings).build(config)
        except ConfigurationError as e:
            logger.error(f"Skipping provider {kind_id}: {e}")

    logger.info(f"Providers registered: {', '.join(descriptors) or 'none'}")
    return descriptors


def get_configured_providers() -> Dict[str, ProviderDescriptor]:
    """Get the descriptors for providers configured in the environment.

    Returns:
        Descriptors keyed by provider id (empty if none are configured)
    """
    global _configured_providers

    # Return cached descriptors
    if _configured_providers is not None:
        return _configured_providers

    settings = get_settings()
    configs: Dict[str, ProviderUserConfig] = {}

    keyp_config = settings.keyp_provider_config()
    if keyp_config is not None:
        configs[KeypProvider.id] = keyp_config

    _configured_providers = build_providers(configs, settings)
    return _configured_providers


def reset_providers() -> None:
    """Reset the global provider descriptors (for testing)."""
    global _configured_providers
    _configured_providers = None
