"""
Consent reconciliation schemas - FAIL FAST, FAIL LOUD, NO FAKE DATA.

These schemas define what the engine derives for each relying party and what
it hands back to the request handler. Nothing here is persisted except the
targeted id / attribute hash pair inside ConsentRecord.
"""

from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

AttributeMap = Dict[str, List[str]]


def normalize_attributes(attributes: Mapping[str, Union[str, Sequence[str]]]) -> AttributeMap:
    """Copy an attribute mapping, turning bare string values into one-element lists."""
    normalized: AttributeMap = {}
    for name, values in attributes.items():
        if isinstance(values, str):
            normalized[name] = [values]
        else:
            normalized[name] = [str(v) for v in values]
    return normalized


class ConsentStatus(str, Enum):
    """Consent state of one relying party - derived, never persisted."""

    NONE = "none"  # No consent recorded
    CHANGED = "changed"  # Consent recorded for a different attribute release
    OK = "ok"  # Consent recorded for exactly this attribute release


class ConsentAction(str, Enum):
    """User-issued action for one relying party."""

    GRANT = "grant"
    REVOKE = "revoke"


class ConsentOutcome(str, Enum):
    """Resulting stored state after an action."""

    STORED = "stored"
    NOT_STORED = "not_stored"


class IdentityContext(BaseModel):
    """Who is asking, and from which identity source - immutable per request."""

    source_id: str = Field(..., description="'<metadata-set>|<entity id>' of the authenticating source")
    user_id: str = Field(..., description="Authoritative user identifier for consent purposes")
    raw_attributes: AttributeMap = Field(default_factory=dict, description="Attributes from the session")
    remote_source_id: Optional[str] = Field(None, description="Remote identity source when bridged")

    model_config = ConfigDict(frozen=True)

    @field_validator("raw_attributes", mode="before")
    @classmethod
    def _normalize(cls, v: Mapping[str, Union[str, Sequence[str]]]) -> AttributeMap:
        return normalize_attributes(v)

    @property
    def is_bridged(self) -> bool:
        return self.remote_source_id is not None


class ReleasedAttributeSet(BaseModel):
    """Attributes as they would actually be sent to one relying party."""

    relying_party_id: str = Field(..., description="Relying party entity id")
    attributes: AttributeMap = Field(default_factory=dict, description="Post-pipeline, exemption-filtered")


class Fingerprint(BaseModel):
    """Derived identifiers for one (user, source, relying party) triple."""

    hashed_user_id: str = Field(..., description="Storage partition key for the user")
    targeted_id: str = Field(..., description="Join key between derived state and stored records")
    attribute_hash: str = Field(..., description="Hash or canonical form of the released attributes")


class ConsentRecord(BaseModel):
    """The persisted unit, keyed by hashed user id in the store."""

    targeted_id: str
    attribute_hash: str


class RelyingPartyConsentEntry(BaseModel):
    """One row of the reconciliation listing."""

    relying_party_id: str = Field(..., description="Relying party entity id")
    name: str = Field(..., description="Resolved display name")
    description: Optional[str] = Field(None, description="Only present if the relying party publishes one")
    service_url: Optional[str] = Field(None, description="Service URL if published")
    status: ConsentStatus = Field(..., description="Reconciled consent status")
    fingerprint: Fingerprint
    released_attributes: AttributeMap = Field(default_factory=dict)


class ReconciliationView(BaseModel):
    """Full listing returned when no action is requested."""

    header: str
    entries: List[RelyingPartyConsentEntry] = Field(default_factory=list)
    show_description: bool = False

    def by_relying_party(self) -> Dict[str, RelyingPartyConsentEntry]:
        return {entry.relying_party_id: entry for entry in self.entries}


class ActionResult(BaseModel):
    """Minimal result returned for a grant/revoke request."""

    is_stored: Optional[bool] = Field(..., description="True after grant, False after revoke")


class LogoutResult(BaseModel):
    """Returned when the request asked for logout; nothing else was processed."""

    return_url: str
