"""Tests for grant and revoke handling."""

from unittest.mock import Mock

import pytest

from consent_admin.logic.exceptions import InvalidActionError, StorageInconsistencyError
from consent_admin.logic.services.consent_admin import ConsentActionHandler, parse_action
from consent_admin.schemas.consent.core import ConsentAction, ConsentOutcome


class TestParseAction:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", ConsentAction.GRANT),
            ("false", ConsentAction.REVOKE),
            ("grant", ConsentAction.GRANT),
            ("revoke", ConsentAction.REVOKE),
            (ConsentAction.REVOKE, ConsentAction.REVOKE),
        ],
    )
    def test_known_values(self, value, expected):
        assert parse_action(value) is expected

    @pytest.mark.parametrize("value", ["maybe", "", "TRUE", None, 1])
    def test_unknown_values(self, value):
        with pytest.raises(InvalidActionError):
            parse_action(value)


class TestConsentActionHandler:
    """Test store interaction per action."""

    def test_grant_stores_fingerprint(self, consent_store):
        outcome = ConsentActionHandler(consent_store).apply(ConsentAction.GRANT, "user", "sp1", "t1", "h1")

        assert outcome is ConsentOutcome.STORED
        assert consent_store.get_consents("user") == [("t1", "h1")]

    def test_grant_replaces_changed_fingerprint(self, consent_store):
        consent_store.save_consent("user", "t1", "old")
        ConsentActionHandler(consent_store).apply(ConsentAction.GRANT, "user", "sp1", "t1", "new")
        assert consent_store.get_consents("user") == [("t1", "new")]

    def test_grant_not_confirmed(self):
        store = Mock()
        store.save_consent.return_value = False

        with pytest.raises(StorageInconsistencyError) as exc_info:
            ConsentActionHandler(store).apply(ConsentAction.GRANT, "user", "sp1", "t1", "h1")
        assert exc_info.value.operation == "grant"

    def test_revoke_removes_record(self, consent_store):
        consent_store.save_consent("user", "t1", "h1")
        outcome = ConsentActionHandler(consent_store).apply(ConsentAction.REVOKE, "user", "sp1", "t1", "h1")

        assert outcome is ConsentOutcome.NOT_STORED
        assert consent_store.get_consents("user") == []

    def test_revoke_without_record(self, consent_store):
        with pytest.raises(StorageInconsistencyError) as exc_info:
            ConsentActionHandler(consent_store).apply(ConsentAction.REVOKE, "user", "sp1", "t1", "h1")

        assert exc_info.value.targeted_id == "t1"
        assert exc_info.value.operation == "revoke"

    def test_invalid_action_makes_no_store_call(self):
        store = Mock()
        with pytest.raises(InvalidActionError):
            ConsentActionHandler(store).apply("maybe", "user", "sp1", "t1", "h1")

        store.save_consent.assert_not_called()
        store.delete_consent.assert_not_called()
