"""
Consent administration service.

Thin orchestration of one request: logout, authentication, identity
resolution, then either a single grant/revoke action or the full listing.
Collaborators are injected; nothing is cached between requests because the
pipeline, metadata and attributes may change at any time.
"""

import logging
from typing import Optional, Tuple, Union

from consent_admin.constants import CONSENT_ADMIN_HEADER, SP_REMOTE_SET
from consent_admin.logic.context.identity_resolver import IdentityContextResolver
from consent_admin.logic.exceptions import RelyingPartyNotFoundError
from consent_admin.logic.pipeline.passive_simulator import PassiveReleaseSimulator
from consent_admin.logic.services.consent_admin.actions import ConsentActionHandler, parse_action
from consent_admin.logic.services.consent_admin.reconciliation import ReconciliationEngine, build_stored_records
from consent_admin.logic.utils.fingerprint import FingerprintCalculator
from consent_admin.protocols.consent_store import ConsentStoreProtocol
from consent_admin.protocols.metadata import MetadataProviderProtocol
from consent_admin.protocols.pipeline import PipelineRunnerProtocol
from consent_admin.protocols.session import SessionProtocol
from consent_admin.schemas.config import ConsentAdminConfig
from consent_admin.schemas.consent.core import (
    ActionResult,
    ConsentOutcome,
    IdentityContext,
    LogoutResult,
    ReconciliationView,
)
from consent_admin.schemas.metadata import IdentitySourceDescriptor, RelyingPartyDescriptor

logger = logging.getLogger(__name__)

ConsentAdminResult = Union[LogoutResult, ActionResult, ReconciliationView]


class ConsentAdminService:
    """Handles consent administration requests against injected collaborators."""

    def __init__(
        self,
        config: ConsentAdminConfig,
        metadata: MetadataProviderProtocol,
        store: ConsentStoreProtocol,
        runner: PipelineRunnerProtocol,
    ):
        self._config = config
        self._metadata = metadata
        self._store = store
        self._resolver = IdentityContextResolver(metadata)
        self._calculator = FingerprintCalculator(config.secret_salt, config.hash_attributes)
        self._engine = ReconciliationEngine(
            PassiveReleaseSimulator(runner),
            self._calculator,
            excluded_attributes=config.exclude_attributes,
            language=config.language,
        )
        self._action_handler = ConsentActionHandler(store)

    def handle(
        self,
        session: SessionProtocol,
        logout: Optional[str] = None,
        action: Optional[str] = None,
        cv: Optional[str] = None,
    ) -> ConsentAdminResult:
        """
        Process one request.

        Args:
            session: Session of the requesting user
            logout: Any value triggers logout before anything else
            action: 'true' (grant) or 'false' (revoke); requires cv
            cv: Target relying party entity id

        Raises:
            AuthenticationRequiredError: If the session is not authenticated
            MissingIdentifierError: If the user-identifying attribute is missing
            InvalidActionError: For an unknown action value (no store call made)
            RelyingPartyNotFoundError: If cv is not a known relying party
            PipelineExecutionError: If the attribute pipeline fails
            StorageInconsistencyError: If a revoke removed nothing
        """
        if logout is not None:
            session.logout(self._config.return_url)
            return LogoutResult(return_url=self._config.return_url)

        if action is None or cv is None:
            return self.list_consents(session)

        identity_source, context, hashed_user_id = self._identify(session)
        logger.info(f"consentAdmin: sp: {cv} action: {action}")
        consent_action = parse_action(action)

        relying_party = self._metadata.get_descriptor(cv, SP_REMOTE_SET)
        if not isinstance(relying_party, RelyingPartyDescriptor):
            raise RelyingPartyNotFoundError(cv)

        _, fingerprint = self._engine.derive(context, identity_source, relying_party)
        outcome = self._action_handler.apply(
            consent_action,
            hashed_user_id,
            relying_party.id,
            fingerprint.targeted_id,
            fingerprint.attribute_hash,
        )
        return ActionResult(is_stored=outcome is ConsentOutcome.STORED)

    def list_consents(self, session: SessionProtocol) -> ReconciliationView:
        """
        Reconciliation listing for every relying party.

        Raises:
            AuthenticationRequiredError: If the session is not authenticated
            MissingIdentifierError: If the user-identifying attribute is missing
            PipelineExecutionError: If the attribute pipeline fails
        """
        identity_source, context, hashed_user_id = self._identify(session)

        stored_records = build_stored_records(self._store.get_consents(hashed_user_id))
        entries = self._engine.reconcile(
            context,
            identity_source,
            self._metadata.list_descriptors(SP_REMOTE_SET),
            stored_records,
        )
        return ReconciliationView(
            header=CONSENT_ADMIN_HEADER,
            entries=entries,
            show_description=self._config.show_description,
        )

    def _identify(self, session: SessionProtocol) -> Tuple[IdentitySourceDescriptor, IdentityContext, str]:
        session.require_authentication()
        identity_source = self._resolver.identity_source()
        context = self._resolver.resolve(session, identity_source)
        return identity_source, context, self._calculator.hashed_user_id(context.user_id, context.source_id)
