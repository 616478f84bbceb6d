"""Provider error taxonomy.

Transport, discovery and token exchange failures belong to the OAuth engine
that consumes the descriptors and are not modelled here.
"""


class ProviderError(Exception):
    """Base class for provider configuration and normalization errors."""
    pass


class ConfigurationError(ProviderError):
    """Provider configuration is missing or invalid.

    Raised while building a descriptor at startup. Fatal for that provider's
    registration only.
    """
    pass


class ProtocolComplianceError(ProviderError):
    """Provider returned claims that violate the OIDC contract (e.g. no ``sub``)."""
    pass
