"""
Attribute-transformation pipeline protocols.

Passive (non-interactive) execution is a mode flag on the runner, not a
different filter type: every filter must have a defined outcome when the
execution state says it is passive.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from consent_admin.logic.pipeline.state import ExecutionState


@runtime_checkable
class AttributeFilterProtocol(Protocol):
    """One attribute-transformation step."""

    def process(self, state: "ExecutionState") -> None:
        """
        Mutate state.attributes in place.

        Raises:
            InteractionRequiredError: If the step cannot finish without the user
                and has no passive default
        """
        ...


class PipelineRunnerProtocol(Protocol):
    """Runs the configured filters for an execution state."""

    def run(self, state: "ExecutionState", interactive: bool = True) -> None:
        """
        Execute all filters in order.

        With interactive=False the run never suspends: steps that would ask the
        user resolve to their passive default or are skipped.

        Raises:
            PipelineExecutionError: If a filter fails unrecoverably
        """
        ...
