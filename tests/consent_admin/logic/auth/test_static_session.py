"""Tests for the static authentication source."""

import pytest

from consent_admin.logic.auth.static_session import StaticSession, StaticSessionProvider
from consent_admin.logic.exceptions import AuthenticationRequiredError, ConfigurationError


class TestStaticSession:
    def test_attributes_are_copies(self):
        session = StaticSession(attributes={"mail": ["a@x"]})
        session.get_attributes()["mail"].append("b@x")
        assert session.get_attributes() == {"mail": ["a@x"]}

    def test_auth_context(self):
        session = StaticSession(attributes={}, auth_context={"saml:sp:IdP": "remote"})
        assert session.get_auth_context_value("saml:sp:IdP") == "remote"
        assert session.get_auth_context_value("other") is None

    def test_logout(self):
        session = StaticSession(attributes={})
        session.logout("/bye")

        assert session.logged_out_to == "/bye"
        with pytest.raises(AuthenticationRequiredError):
            session.require_authentication()


class TestStaticSessionProvider:
    def test_fresh_session_per_call(self, consent_admin_config):
        provider = StaticSessionProvider(consent_admin_config)
        first = provider()
        first.logout("/")

        assert provider().is_authenticated()

    def test_session_from_configured_source(self, consent_admin_config):
        session = StaticSessionProvider(consent_admin_config)()
        assert session.get_attributes() == {"eduPersonPrincipalName": ["u1@example.org"]}

    def test_authority_without_source(self, consent_admin_config):
        config = consent_admin_config.model_copy(update={"auth_sources": {}})
        with pytest.raises(ConfigurationError):
            StaticSessionProvider(config)
