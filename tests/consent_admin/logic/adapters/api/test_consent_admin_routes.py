"""Tests for the consent administration HTTP endpoints."""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from consent_admin.logic.adapters.api.app import create_app
from consent_admin.logic.adapters.api.routes.navigation import LINK_TEXT, hook_configpage, hook_frontpage
from consent_admin.logic.auth.static_session import StaticSession
from consent_admin.logic.exceptions import PipelineExecutionError
from consent_admin.logic.persistence.consent_store import InMemoryConsentStore
from tests.fixtures.consent_admin import TEST_USER, make_session


@pytest.fixture
def client(consent_admin_config, consent_store):
    app = create_app(consent_admin_config, store=consent_store)
    return TestClient(app)


class TestListingEndpoint:
    def test_listing(self, client):
        response = client.get("/consentAdmin")

        assert response.status_code == 200
        data = response.json()
        assert data["header"] == "Consent Administration"
        assert data["showDescription"] is True
        assert [(sp["relying_party_id"], sp["status"]) for sp in data["spList"]] == [("sp1", "none"), ("sp2", "none")]

    def test_grant_and_revoke(self, client):
        assert client.get("/consentAdmin", params={"action": "true", "cv": "sp1"}).json() == {"isStored": True}
        statuses = {sp["relying_party_id"]: sp["status"] for sp in client.get("/consentAdmin").json()["spList"]}
        assert statuses["sp1"] == "ok"

        assert client.get("/consentAdmin", params={"action": "false", "cv": "sp1"}).json() == {"isStored": False}

    def test_logout_redirects(self, client):
        response = client.get("/consentAdmin", params={"logout": "1"}, follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://idp.example.org/goodbye"


class TestErrorMapping:
    """Engine errors map to HTTP status codes."""

    @pytest.mark.parametrize(
        "params,status_code",
        [
            ({"action": "maybe", "cv": "sp1"}, 400),
            ({"action": "true", "cv": "unknown"}, 404),
            ({"action": "false", "cv": "sp1"}, 409),
        ],
    )
    def test_action_errors(self, client, params, status_code):
        assert client.get("/consentAdmin", params=params).status_code == status_code

    def test_unauthenticated(self, consent_admin_config):
        session = StaticSession(attributes={"eduPersonPrincipalName": [TEST_USER]}, authenticated=False)
        provider = Mock(return_value=session)
        client = TestClient(create_app(consent_admin_config, session_provider=provider, store=InMemoryConsentStore()))

        assert client.get("/consentAdmin").status_code == 401

    def test_missing_identifier(self, consent_admin_config):
        provider = Mock(return_value=make_session({"mail": ["a@x"]}))
        client = TestClient(create_app(consent_admin_config, session_provider=provider, store=InMemoryConsentStore()))

        response = client.get("/consentAdmin")
        assert response.status_code == 500
        assert "eduPersonPrincipalName" in response.json()["detail"]

    def test_pipeline_failure(self, consent_admin_config):
        runner = Mock()
        runner.run.side_effect = PipelineExecutionError("sp1", "boom")
        client = TestClient(create_app(consent_admin_config, store=InMemoryConsentStore(), runner=runner))

        assert client.get("/consentAdmin").status_code == 500


class TestNavigation:
    def test_links_endpoint(self, client):
        links = client.get("/consentAdmin/links").json()["links"]

        assert len(links) == 1
        assert links[0]["text"] == LINK_TEXT
        assert links[0]["href"].endswith("/consentAdmin")

    def test_hook_frontpage(self):
        links = {"links": [], "config": [{"href": "/other", "text": "Other"}]}
        hook_frontpage(links, "/consentAdmin")
        assert links["config"][-1] == {"href": "/consentAdmin", "text": LINK_TEXT}

    def test_hook_frontpage_requires_links(self):
        with pytest.raises(KeyError):
            hook_frontpage({}, "/consentAdmin")

    def test_hook_configpage(self):
        page_data = {}
        hook_configpage(page_data, "/consentAdmin")
        assert page_data == {"links": [{"href": "/consentAdmin", "text": LINK_TEXT}]}
