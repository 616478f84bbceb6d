"""Unit tests for the provider factory"""

import pytest

from auth_providers.config.settings import Settings
from auth_providers.core.providers import factory
from auth_providers.core.providers.errors import ConfigurationError
from auth_providers.core.providers.factory import (
    available_provider_kinds,
    build_providers,
    get_configured_providers,
    get_provider_kind,
    register_provider_kind,
    reset_providers,
)
from auth_providers.core.providers.keyp import KeypProvider
from auth_providers.core.providers.provider import ProviderKind

pytestmark = pytest.mark.unit


class ExampleProvider(ProviderKind):
    id = "example"
    name = "Example"
    issuer = "https://id.example.com"

    @property
    def well_known_url(self) -> str:
        return "https://id.example.com/.well-known/openid-configuration"

    @property
    def authorization_url(self) -> str:
        return "https://id.example.com/authorize"

    @property
    def token_url(self) -> str:
        return "https://id.example.com/token"

    @property
    def userinfo_url(self) -> str:
        return "https://id.example.com/userinfo"


@pytest.fixture
def example_kind(monkeypatch):
    """Register ExampleProvider for the duration of a test."""
    monkeypatch.setattr(factory, "_PROVIDER_KINDS", dict(factory._PROVIDER_KINDS))
    register_provider_kind(ExampleProvider)
    return ExampleProvider


class TestGetProviderKind:
    """Test provider kind lookup"""

    def test_keyp(self, settings):
        provider = get_provider_kind("keyp", settings)

        assert isinstance(provider, KeypProvider)
        assert provider.api_domain == "https://api.usekeyp.com"

    def test_keyp_uses_settings_override(self):
        settings = Settings(_env_file=None, keyp_api_domain="http://localhost:4001")

        provider = get_provider_kind("keyp", settings)

        assert provider.api_domain == "http://localhost:4001"

    def test_unknown_kind(self, settings):
        with pytest.raises(ConfigurationError, match="Unknown provider: github"):
            get_provider_kind("github", settings)

    def test_available_kinds(self):
        assert "keyp" in available_provider_kinds()


class TestRegisterProviderKind:
    """Test provider kind registration"""

    def test_register(self, example_kind, settings):
        provider = get_provider_kind("example", settings)

        assert isinstance(provider, ExampleProvider)
        assert "example" in available_provider_kinds()

    def test_defaults_for_new_kind(self, example_kind, settings):
        descriptor = get_provider_kind("example", settings).build({"client_id": "c1"})

        assert descriptor.scope == "openid email profile"
        assert descriptor.client_auth_method.value == "client_secret_basic"

    def test_duplicate_id_rejected(self, example_kind):
        class OtherExample(ExampleProvider):
            pass

        with pytest.raises(ValueError, match="already registered"):
            register_provider_kind(OtherExample)

    def test_reregister_same_class(self, example_kind):
        assert register_provider_kind(ExampleProvider) is ExampleProvider

    def test_registered_kind_receives_settings(self, monkeypatch):
        monkeypatch.setattr(factory, "_PROVIDER_KINDS", dict(factory._PROVIDER_KINDS))

        class ConfigurableExample(ExampleProvider):
            id = "configurable"

            def __init__(self, api_domain=None):
                self.api_domain = api_domain

            @classmethod
            def from_settings(cls, settings):
                return cls(api_domain=settings.keyp_api_domain)

        register_provider_kind(ConfigurableExample)
        settings = Settings(_env_file=None, keyp_api_domain="http://localhost:4001")

        provider = get_provider_kind("configurable", settings)

        assert isinstance(provider, ConfigurableExample)
        assert provider.api_domain == "http://localhost:4001"


class TestBuildProviders:
    """Test building several providers"""

    def test_build_keyp(self, settings):
        descriptors = build_providers({"keyp": {"client_id": "abc123"}}, settings)

        assert list(descriptors) == ["keyp"]
        assert descriptors["keyp"].client_id == "abc123"

    def test_misconfigured_provider_skipped(self, example_kind, settings, caplog):
        descriptors = build_providers(
            {"keyp": {"scope": "openid"}, "example": {"client_id": "c1"}}, settings
        )

        assert list(descriptors) == ["example"]
        assert "Skipping provider keyp" in caplog.text

    def test_unknown_provider_skipped(self, settings):
        descriptors = build_providers(
            {"github": {"client_id": "x"}, "keyp": {"client_id": "abc123"}}, settings
        )

        assert list(descriptors) == ["keyp"]

    def test_empty(self, settings):
        assert build_providers({}, settings) == {}


class TestConfiguredProviders:
    """Test providers configured from the environment"""

    def test_no_client_id_configured(self, monkeypatch):
        monkeypatch.setattr(factory, "get_settings", lambda: Settings(_env_file=None))

        assert get_configured_providers() == {}

    def test_keyp_from_environment(self, monkeypatch):
        monkeypatch.setenv("KEYP_CLIENT_ID", "env-client")
        monkeypatch.setenv("KEYP_CLIENT_REDIRECT_URI", "https://example.com/api/auth/callback/keyp")
        monkeypatch.setenv("NEXT_PUBLIC_KEYP_API_DOMAIN", "http://localhost:4001")
        monkeypatch.setattr(factory, "get_settings", lambda: Settings(_env_file=None))

        descriptors = get_configured_providers()

        keyp = descriptors["keyp"]
        assert keyp.client_id == "env-client"
        assert keyp.redirect_url == "https://example.com/api/auth/callback/keyp"
        assert keyp.well_known == "http://localhost:4001/oauth/.well-known/openid-configuration"
        assert keyp.scope == "openid email"

    def test_cached_until_reset(self, monkeypatch):
        monkeypatch.setenv("KEYP_CLIENT_ID", "first")
        monkeypatch.setattr(factory, "get_settings", lambda: Settings(_env_file=None))

        first = get_configured_providers()
        monkeypatch.setenv("KEYP_CLIENT_ID", "second")

        assert get_configured_providers() is first

        reset_providers()

        assert get_configured_providers()["keyp"].client_id == "second"
