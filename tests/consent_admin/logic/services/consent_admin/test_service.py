"""End-to-end tests for ConsentAdminService request handling."""

from unittest.mock import Mock

import pytest

from consent_admin.logic.auth.static_session import StaticSession
from consent_admin.logic.exceptions import (
    AuthenticationRequiredError,
    InvalidActionError,
    MissingIdentifierError,
    RelyingPartyNotFoundError,
    StorageInconsistencyError,
)
from consent_admin.logic.metadata.static_provider import StaticMetadataProvider
from consent_admin.logic.persistence.consent_store import InMemoryConsentStore
from consent_admin.logic.pipeline.processing_chain import ProcessingChain
from consent_admin.logic.services.consent_admin import ConsentAdminService
from consent_admin.schemas.consent.core import ActionResult, ConsentStatus, LogoutResult, ReconciliationView
from tests.fixtures.consent_admin import TEST_USER, make_session


def _statuses(view):
    return {entry.relying_party_id: entry.status for entry in view.entries}


class TestListing:
    """Reconciliation listing without an action."""

    def test_initial_listing(self, consent_admin_service, session):
        view = consent_admin_service.handle(session)

        assert isinstance(view, ReconciliationView)
        assert view.header == "Consent Administration"
        assert view.show_description is True
        assert _statuses(view) == {"sp1": ConsentStatus.NONE, "sp2": ConsentStatus.NONE}

    def test_grant_then_ok(self, consent_admin_service):
        """Granting consent makes the next listing report ok for the same targeted id."""
        before = consent_admin_service.handle(make_session()).by_relying_party()["sp1"]

        result = consent_admin_service.handle(make_session(), action="true", cv="sp1")
        assert result == ActionResult(is_stored=True)

        after = consent_admin_service.handle(make_session()).by_relying_party()["sp1"]
        assert after.status is ConsentStatus.OK
        assert after.fingerprint.targeted_id == before.fingerprint.targeted_id

    def test_attribute_change_reports_changed(self, consent_admin_service, consent_store):
        consent_admin_service.handle(make_session(), action="true", cv="sp1")
        granted = consent_admin_service.handle(make_session()).by_relying_party()["sp1"]

        changed_session = make_session({"eduPersonPrincipalName": [TEST_USER], "mail": ["u1@example.org"]})
        entry = consent_admin_service.handle(changed_session).by_relying_party()["sp1"]

        assert entry.status is ConsentStatus.CHANGED
        assert entry.fingerprint.targeted_id == granted.fingerprint.targeted_id
        assert entry.fingerprint.attribute_hash != granted.fingerprint.attribute_hash
        stored = dict(consent_store.get_consents(entry.fingerprint.hashed_user_id))
        assert stored[entry.fingerprint.targeted_id] == granted.fingerprint.attribute_hash

    def test_regrant_after_change(self, consent_admin_service):
        consent_admin_service.handle(make_session(), action="true", cv="sp1")
        changed_session = make_session({"eduPersonPrincipalName": [TEST_USER], "mail": ["u1@example.org"]})
        consent_admin_service.handle(changed_session, action="true", cv="sp1")

        entry = consent_admin_service.handle(changed_session).by_relying_party()["sp1"]
        assert entry.status is ConsentStatus.OK

    def test_consent_disabled_never_listed(self, consent_admin_config, consent_store):
        """Stored consent for a disabled relying party does not surface it."""
        metadata = consent_admin_config.metadata.model_copy(
            update={
                "identity_source": consent_admin_config.metadata.identity_source.model_copy(
                    update={"consent_disable": ["sp2"]}
                )
            }
        )
        service = ConsentAdminService(
            config=consent_admin_config,
            metadata=StaticMetadataProvider(metadata),
            store=consent_store,
            runner=ProcessingChain(),
        )
        service.handle(make_session(), action="true", cv="sp2")

        view = service.handle(make_session())
        assert [entry.relying_party_id for entry in view.entries] == ["sp1"]

    def test_bridged_login_has_separate_consent(self, consent_admin_service):
        consent_admin_service.handle(make_session(), action="true", cv="sp1")

        bridged = make_session(**{"saml:sp:IdP": "https://remote.example.org/"})
        view = consent_admin_service.handle(bridged)
        assert _statuses(view)["sp1"] is ConsentStatus.NONE

    def test_missing_identifier(self, consent_admin_service):
        with pytest.raises(MissingIdentifierError):
            consent_admin_service.handle(make_session({"mail": ["a@x"]}))


class TestListConsents:
    def test_list_consents(self, consent_admin_service):
        consent_admin_service.handle(make_session(), action="true", cv="sp1")
        view = consent_admin_service.list_consents(make_session())

        assert isinstance(view, ReconciliationView)
        assert _statuses(view) == {"sp1": ConsentStatus.OK, "sp2": ConsentStatus.NONE}

    def test_list_consents_requires_authentication(self, consent_admin_service):
        session = StaticSession(attributes={"eduPersonPrincipalName": [TEST_USER]}, authenticated=False)
        with pytest.raises(AuthenticationRequiredError):
            consent_admin_service.list_consents(session)


class TestActions:
    """Single relying party actions."""

    def test_revoke_after_grant(self, consent_admin_service):
        consent_admin_service.handle(make_session(), action="true", cv="sp1")
        result = consent_admin_service.handle(make_session(), action="false", cv="sp1")

        assert result == ActionResult(is_stored=False)
        assert _statuses(consent_admin_service.handle(make_session()))["sp1"] is ConsentStatus.NONE

    def test_revoke_without_record(self, consent_admin_service, consent_store):
        with pytest.raises(StorageInconsistencyError):
            consent_admin_service.handle(make_session(), action="false", cv="sp1")
        assert _statuses(consent_admin_service.handle(make_session()))["sp1"] is ConsentStatus.NONE

    def test_invalid_action_makes_no_store_call(self, consent_admin_config, metadata_provider):
        store = Mock(wraps=InMemoryConsentStore())
        service = ConsentAdminService(consent_admin_config, metadata_provider, store, ProcessingChain())

        with pytest.raises(InvalidActionError):
            service.handle(make_session(), action="maybe", cv="sp1")

        store.save_consent.assert_not_called()
        store.delete_consent.assert_not_called()
        store.get_consents.assert_not_called()

        view = service.handle(make_session())
        assert _statuses(view) == {"sp1": ConsentStatus.NONE, "sp2": ConsentStatus.NONE}

    def test_unknown_relying_party(self, consent_admin_service):
        with pytest.raises(RelyingPartyNotFoundError):
            consent_admin_service.handle(make_session(), action="true", cv="https://unknown.example.org/")

    def test_action_without_cv_lists(self, consent_admin_service):
        assert isinstance(consent_admin_service.handle(make_session(), action="true"), ReconciliationView)


class TestSessionHandling:
    def test_logout_first(self, consent_admin_service):
        session = make_session()
        result = consent_admin_service.handle(session, logout="", action="true", cv="sp1")

        assert result == LogoutResult(return_url="https://idp.example.org/goodbye")
        assert session.logged_out_to == "https://idp.example.org/goodbye"
        assert not session.is_authenticated()

    def test_unauthenticated(self, consent_admin_service):
        session = StaticSession(attributes={"eduPersonPrincipalName": [TEST_USER]}, authenticated=False)
        with pytest.raises(AuthenticationRequiredError):
            consent_admin_service.handle(session)
