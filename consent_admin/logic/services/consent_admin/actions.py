"""Consent action handling: grant or revoke for a single relying party."""

import logging
from typing import Any

from consent_admin.logic.exceptions import InvalidActionError, StorageInconsistencyError
from consent_admin.protocols.consent_store import ConsentStoreProtocol
from consent_admin.schemas.consent.core import ConsentAction, ConsentOutcome

logger = logging.getLogger(__name__)

# Request values of the 'action' query parameter
_REQUEST_ACTIONS = {
    "true": ConsentAction.GRANT,
    "false": ConsentAction.REVOKE,
    ConsentAction.GRANT.value: ConsentAction.GRANT,
    ConsentAction.REVOKE.value: ConsentAction.REVOKE,
}


def parse_action(value: Any) -> ConsentAction:
    """
    Map a request value to a ConsentAction.

    Raises:
        InvalidActionError: For anything other than true/false/grant/revoke
    """
    if isinstance(value, ConsentAction):
        return value
    if isinstance(value, str) and value in _REQUEST_ACTIONS:
        return _REQUEST_ACTIONS[value]
    raise InvalidActionError(value)


class ConsentActionHandler:
    """Applies a user-issued action using freshly computed fingerprints."""

    def __init__(self, store: ConsentStoreProtocol):
        self._store = store

    def apply(
        self,
        action: Any,
        hashed_user_id: str,
        relying_party_id: str,
        targeted_id: str,
        attribute_fingerprint: str,
    ) -> ConsentOutcome:
        """
        Raises:
            InvalidActionError: If action is not a ConsentAction (no store call made)
            StorageInconsistencyError: If the store did not apply the write
        """
        if not isinstance(action, ConsentAction):
            logger.warning(f"consentAdmin: unknown action {action!r} for {relying_party_id}")
            raise InvalidActionError(action)

        if action is ConsentAction.GRANT:
            # Upsert: replaces a changed fingerprint with the current one
            if not self._store.save_consent(hashed_user_id, targeted_id, attribute_fingerprint):
                raise StorageInconsistencyError(hashed_user_id, targeted_id, operation="grant")
            logger.info(f"consentAdmin: consent stored for {relying_party_id}")
            return ConsentOutcome.STORED

        removed = self._store.delete_consent(hashed_user_id, targeted_id)
        if removed < 1:
            logger.warning(f"consentAdmin: revoke removed nothing for {relying_party_id} ({targeted_id})")
            raise StorageInconsistencyError(hashed_user_id, targeted_id)
        logger.info(f"consentAdmin: consent removed for {relying_party_id}")
        return ConsentOutcome.NOT_STORED
