"""
Processing chain: builds and runs the configured filters for one destination.

Identity-source filters and relying-party filters are merged and ordered by
priority; equal priorities keep their configured order, source filters first.
"""

import logging
from typing import Dict, List, Optional, Type

from consent_admin.logic.exceptions import InteractionRequiredError, PipelineExecutionError
from consent_admin.logic.pipeline.filters import FILTER_REGISTRY, AttributeFilter
from consent_admin.logic.pipeline.state import ExecutionState
from consent_admin.protocols.pipeline import AttributeFilterProtocol
from consent_admin.schemas.metadata import FilterConfig, IdentitySourceDescriptor, RelyingPartyDescriptor

logger = logging.getLogger(__name__)


class ProcessingChain:
    """Concrete PipelineRunnerProtocol backed by a filter registry."""

    def __init__(self, registry: Optional[Dict[str, Type[AttributeFilter]]] = None):
        self._registry = registry if registry is not None else FILTER_REGISTRY

    def build(
        self, source: IdentitySourceDescriptor, destination: RelyingPartyDescriptor
    ) -> List[AttributeFilterProtocol]:
        configured: List[FilterConfig] = list(source.authproc) + list(destination.authproc)
        configured.sort(key=lambda fc: fc.priority)

        filters: List[AttributeFilterProtocol] = []
        for fc in configured:
            filter_cls = self._registry.get(fc.name)
            if filter_cls is None:
                raise PipelineExecutionError(destination.entity_id, f"unknown filter {fc.name!r}")
            filters.append(filter_cls(options=fc.options, priority=fc.priority))
        return filters

    def run(self, state: ExecutionState, interactive: bool = True) -> None:
        state.passive = not interactive
        relying_party_id = state.destination.entity_id

        for attribute_filter in self.build(state.source, state.destination):
            name = type(attribute_filter).__name__
            try:
                attribute_filter.process(state)
            except InteractionRequiredError:
                if interactive:
                    raise
                # Passive runs never suspend; the step keeps its no-op default
                logger.debug(f"Skipped interactive filter {name} for {relying_party_id}")
            except PipelineExecutionError:
                raise
            except Exception as e:
                logger.error(f"Filter {name} failed for {relying_party_id}: {e}")
                raise PipelineExecutionError(relying_party_id, f"{name}: {e}") from e
