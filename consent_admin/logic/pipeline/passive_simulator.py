"""Passive release simulation for one relying party."""

import logging
from typing import Iterable, Mapping, Sequence

from consent_admin.logic.pipeline.state import ExecutionState
from consent_admin.protocols.pipeline import PipelineRunnerProtocol
from consent_admin.schemas.consent.core import IdentityContext, ReleasedAttributeSet, normalize_attributes
from consent_admin.schemas.metadata import IdentitySourceDescriptor, RelyingPartyDescriptor

logger = logging.getLogger(__name__)


class PassiveReleaseSimulator:
    """
    Replays the attribute pipeline without user interaction.

    The result is what the relying party would actually receive, minus the
    attributes exempt from consent tracking.
    """

    def __init__(self, runner: PipelineRunnerProtocol):
        self._runner = runner

    def simulate(
        self,
        context: IdentityContext,
        identity_source: IdentitySourceDescriptor,
        relying_party: RelyingPartyDescriptor,
        base_attributes: Mapping[str, Sequence[str]],
        excluded_attribute_names: Iterable[str] = (),
    ) -> ReleasedAttributeSet:
        """
        Raises:
            PipelineExecutionError: If the pipeline fails unrecoverably
        """
        state = ExecutionState(
            # Fresh copy per relying party; filters mutate in place
            attributes=normalize_attributes(base_attributes),
            source=identity_source,
            destination=relying_party,
            passive=True,
            remote_source_id=context.remote_source_id,
        )
        self._runner.run(state, interactive=False)

        excluded = set(excluded_attribute_names) | relying_party.consent_exempt_attributes
        released = {name: list(values) for name, values in state.attributes.items() if name not in excluded}
        logger.debug(f"Released to {relying_party.entity_id}: {sorted(released)}")

        return ReleasedAttributeSet(relying_party_id=relying_party.entity_id, attributes=released)
