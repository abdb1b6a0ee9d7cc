"""Execution state handed through the attribute-transformation pipeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from consent_admin.schemas.metadata import IdentitySourceDescriptor, RelyingPartyDescriptor


@dataclass
class ExecutionState:
    """Mutable per-run state. Filters change `attributes` in place."""

    attributes: Dict[str, List[str]]
    source: IdentitySourceDescriptor
    destination: RelyingPartyDescriptor
    passive: bool = False
    # Remote identity source when the login was bridged; rules may branch on it
    remote_source_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
