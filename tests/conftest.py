"""
Pytest configuration and fixtures for auth provider tests.

Provides fixtures for:
- Isolated settings (no .env, no KEYP_* environment)
- Keyp provider kind and descriptor
- Keyp userinfo claims
"""

import pytest

from auth_providers.config.settings import Settings, get_settings
from auth_providers.core.providers.factory import reset_providers
from auth_providers.core.providers.keyp import KeypProvider

KEYP_ENV_VARS = (
    "KEYP_API_DOMAIN",
    "NEXT_PUBLIC_KEYP_API_DOMAIN",
    "KEYP_CLIENT_ID",
    "KEYP_CLIENT_SECRET",
    "KEYP_SCOPE",
    "KEYP_REDIRECT_URL",
    "KEYP_CLIENT_REDIRECT_URI",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove Keyp environment overrides and cached state between tests."""
    for name in KEYP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_providers()
    yield
    get_settings.cache_clear()
    reset_providers()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only."""
    return Settings(_env_file=None)


@pytest.fixture
def keyp_provider() -> KeypProvider:
    """Keyp provider kind using the production API domain."""
    return KeypProvider()


@pytest.fixture
def keyp_descriptor(keyp_provider):
    return keyp_provider.build({"client_id": "abc123"})


@pytest.fixture
def keyp_claims() -> dict:
    """Full Keyp userinfo response."""
    return {
        "sub": "u1",
        "username": "alice",
        "email": "a@x.com",
        "imageSrc": "https://x/img.png",
        "address": "0xabc",
    }
