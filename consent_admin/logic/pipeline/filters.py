"""
Built-in attribute filters.

Each filter has a defined outcome in passive mode. Filters that need the user
(confirmation pages, warnings) do nothing when state.passive is set and raise
InteractionRequiredError otherwise.
"""

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Type

from consent_admin.logic.exceptions import InteractionRequiredError
from consent_admin.logic.pipeline.state import ExecutionState

logger = logging.getLogger(__name__)

FILTER_REGISTRY: Dict[str, Type["AttributeFilter"]] = {}


def register_filter(name: str) -> Callable[[Type["AttributeFilter"]], Type["AttributeFilter"]]:
    """Class decorator registering a filter under its configuration name."""

    def decorator(cls: Type["AttributeFilter"]) -> Type["AttributeFilter"]:
        if name in FILTER_REGISTRY:
            raise ValueError(f"Filter {name!r} is already registered")
        FILTER_REGISTRY[name] = cls
        return cls

    return decorator


class AttributeFilter(ABC):
    """Base class for configured pipeline steps."""

    def __init__(self, options: Optional[Dict[str, Any]] = None, priority: int = 50):
        self.options = options or {}
        self.priority = priority

    @abstractmethod
    def process(self, state: ExecutionState) -> None:
        ...


@register_filter("AttributeAdd")
class AttributeAdd(AttributeFilter):
    """Add fixed values. options: attributes {name: [values]}, replace (bool)."""

    def process(self, state: ExecutionState) -> None:
        replace = bool(self.options.get("replace", False))
        for name, values in self.options.get("attributes", {}).items():
            values = [values] if isinstance(values, str) else list(values)
            if replace or name not in state.attributes:
                state.attributes[name] = values
            else:
                state.attributes[name] = state.attributes[name] + [v for v in values if v not in state.attributes[name]]


@register_filter("AttributeLimit")
class AttributeLimit(AttributeFilter):
    """Keep only the listed attributes. options: allowed [names]."""

    def process(self, state: ExecutionState) -> None:
        allowed = set(self.options.get("allowed", []))
        for name in list(state.attributes):
            if name not in allowed:
                del state.attributes[name]


@register_filter("AttributeMap")
class AttributeMap(AttributeFilter):
    """Rename attributes. options: map {old: new}, duplicate (keep the original too)."""

    def process(self, state: ExecutionState) -> None:
        duplicate = bool(self.options.get("duplicate", False))
        for old, new in self.options.get("map", {}).items():
            if old not in state.attributes:
                continue
            values = state.attributes[old] if duplicate else state.attributes.pop(old)
            state.attributes[new] = list(values)


@register_filter("AttributeValueFilter")
class AttributeValueFilter(AttributeFilter):
    """Drop values matching a pattern. options: attribute, pattern; empty attributes are removed."""

    def process(self, state: ExecutionState) -> None:
        name = self.options["attribute"]
        pattern = re.compile(self.options["pattern"])
        if name not in state.attributes:
            return
        kept = [v for v in state.attributes[name] if not pattern.search(v)]
        if kept:
            state.attributes[name] = kept
        else:
            del state.attributes[name]


@register_filter("ExpiryCheck")
class ExpiryCheck(AttributeFilter):
    """
    Warn the user when their account has expired.

    options: expiry_attribute (ISO-8601 date). Passive default: no change.
    """

    def process(self, state: ExecutionState) -> None:
        if state.passive:
            return
        values = state.attributes.get(self.options.get("expiry_attribute", "schacExpiryDate"))
        if not values:
            return
        expires = datetime.fromisoformat(values[0])
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        if expires < datetime.now(timezone.utc):
            raise InteractionRequiredError(f"Account expired at {values[0]}")


@register_filter("ConsentPrompt")
class ConsentPrompt(AttributeFilter):
    """Ask the user to confirm the release. Passive default: release unchanged."""

    def process(self, state: ExecutionState) -> None:
        if state.passive:
            logger.debug(f"ConsentPrompt skipped for {state.destination.entity_id} (passive)")
            return
        raise InteractionRequiredError(f"Consent confirmation required for {state.destination.entity_id}")
