"""Attribute-transformation pipeline and its passive replay."""

from .filters import FILTER_REGISTRY, AttributeFilter, register_filter
from .passive_simulator import PassiveReleaseSimulator
from .processing_chain import ProcessingChain
from .state import ExecutionState

__all__ = [
    "AttributeFilter",
    "ExecutionState",
    "FILTER_REGISTRY",
    "PassiveReleaseSimulator",
    "ProcessingChain",
    "register_filter",
]
