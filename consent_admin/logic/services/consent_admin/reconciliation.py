"""
Consent reconciliation engine.

For each relying party: replay the attribute pipeline passively, derive the
fingerprint, and classify the stored consent as none / changed / ok. Read-only:
the store is never written from here.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from consent_admin.logic.pipeline.passive_simulator import PassiveReleaseSimulator
from consent_admin.logic.services.consent_admin.display import resolve_description, resolve_display_name
from consent_admin.logic.utils.fingerprint import FingerprintCalculator
from consent_admin.schemas.consent.core import (
    ConsentRecord,
    ConsentStatus,
    Fingerprint,
    IdentityContext,
    RelyingPartyConsentEntry,
    ReleasedAttributeSet,
)
from consent_admin.schemas.metadata import IdentitySourceDescriptor, RelyingPartyDescriptor

logger = logging.getLogger(__name__)


def build_stored_records(consents: Iterable[Tuple[str, str]]) -> Dict[str, ConsentRecord]:
    """Index the store's (targeted_id, attribute_hash) pairs by targeted id."""
    return {
        targeted_id: ConsentRecord(targeted_id=targeted_id, attribute_hash=attribute_hash)
        for targeted_id, attribute_hash in consents
    }


def classify(stored: Optional[ConsentRecord], computed_hash: str) -> ConsentStatus:
    if stored is None:
        return ConsentStatus.NONE
    if stored.attribute_hash == computed_hash:
        return ConsentStatus.OK
    return ConsentStatus.CHANGED


class ReconciliationEngine:
    """Derives and classifies consent state for every candidate relying party."""

    def __init__(
        self,
        simulator: PassiveReleaseSimulator,
        calculator: FingerprintCalculator,
        excluded_attributes: Iterable[str] = (),
        language: str = "en",
    ):
        self._simulator = simulator
        self._calculator = calculator
        self._excluded_attributes = frozenset(excluded_attributes)
        self._language = language

    def derive(
        self,
        context: IdentityContext,
        identity_source: IdentitySourceDescriptor,
        relying_party: RelyingPartyDescriptor,
    ) -> Tuple[ReleasedAttributeSet, Fingerprint]:
        """Released attributes and fingerprint for one relying party, computed fresh."""
        released = self._simulator.simulate(
            context,
            identity_source,
            relying_party,
            context.raw_attributes,
            self._excluded_attributes,
        )
        fingerprint = self._calculator.fingerprint(
            context.user_id, context.source_id, relying_party.destination_id, released
        )
        logger.debug(f"consentAdmin: target: {fingerprint.targeted_id}")
        logger.debug(f"consentAdmin: attribute: {fingerprint.attribute_hash}")
        return released, fingerprint

    def reconcile(
        self,
        context: IdentityContext,
        identity_source: IdentitySourceDescriptor,
        relying_parties: Union[Mapping[str, RelyingPartyDescriptor], Sequence[RelyingPartyDescriptor]],
        stored_records: Mapping[str, ConsentRecord],
    ) -> List[RelyingPartyConsentEntry]:
        """
        Classify every relying party, preserving input order.

        Args:
            context: Identity of the current user
            identity_source: Hosted identity source (pipeline and consent-disabled set)
            relying_parties: Candidates in listing order
            stored_records: targeted id -> stored record, see build_stored_records()

        Raises:
            PipelineExecutionError: If any relying party's release cannot be determined
        """
        if isinstance(relying_parties, Mapping):
            candidates = list(relying_parties.values())
        else:
            candidates = list(relying_parties)

        disabled = set(identity_source.consent_disable)
        entries: List[RelyingPartyConsentEntry] = []

        for relying_party in candidates:
            if relying_party.id in disabled:
                continue

            released, fingerprint = self.derive(context, identity_source, relying_party)
            status = classify(stored_records.get(fingerprint.targeted_id), fingerprint.attribute_hash)
            logger.info(f"consentAdmin: {relying_party.id}: {status.value}")

            entries.append(
                RelyingPartyConsentEntry(
                    relying_party_id=relying_party.id,
                    name=resolve_display_name(relying_party, self._language),
                    description=resolve_description(relying_party, self._language),
                    service_url=relying_party.service_url,
                    status=status,
                    fingerprint=fingerprint,
                    released_attributes=released.attributes,
                )
            )

        return entries
