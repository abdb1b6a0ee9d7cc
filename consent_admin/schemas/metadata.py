"""
Metadata descriptors for the identity source and relying parties.

Display fields may be plain strings or language maps ({"en": "...", "nl": "..."}).
"""

from typing import Any, Dict, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from consent_admin.constants import IDP_HOSTED_SET, SP_REMOTE_SET

LocalizedText = Union[str, Dict[str, str]]


def localize(value: Optional[LocalizedText], language: str) -> Optional[str]:
    """Pick the preferred language, then English, then the first available entry."""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if not value:
        return None
    for lang in (language, "en"):
        if value.get(lang):
            return value[lang]
    return next((text for text in value.values() if text), None)


class FilterConfig(BaseModel):
    """One attribute-transformation step as configured in metadata."""

    name: str = Field(..., description="Registered filter name, e.g. 'AttributeLimit'")
    priority: int = Field(50, description="Lower runs first; ties keep configured order")
    options: Dict[str, Any] = Field(default_factory=dict)


class IdentitySourceDescriptor(BaseModel):
    """Hosted identity source metadata."""

    entity_id: str
    metadata_set: str = IDP_HOSTED_SET
    name: Optional[LocalizedText] = None
    userid_attribute: Optional[str] = Field(None, description="Overrides the default user-identifying attribute")
    consent_disable: List[str] = Field(default_factory=list, description="Relying parties never surfaced")
    authproc: List[FilterConfig] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("metadata_set")
    @classmethod
    def validate_metadata_set(cls, v: str) -> str:
        """The engine only looks up the hosted identity source in its own set."""
        if v != IDP_HOSTED_SET:
            raise ValueError(f"identity source must be in metadata set {IDP_HOSTED_SET!r}, got {v!r}")
        return v


class RelyingPartyDescriptor(BaseModel):
    """Relying party metadata - read-only within the engine."""

    entity_id: str
    metadata_set: str = SP_REMOTE_SET
    name: Optional[LocalizedText] = None
    organization_display_name: Optional[Dict[str, str]] = Field(None, alias="OrganizationDisplayName")
    description: Optional[LocalizedText] = None
    service_url: Optional[str] = Field(None, alias="ServiceURL")
    consent_exempt_attributes: Set[str] = Field(default_factory=set)
    authproc: List[FilterConfig] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def id(self) -> str:
        return self.entity_id

    def display_name(self, language: str = "en") -> str:
        """Localized name, then localized organization display name, then the raw entity id."""
        return (
            localize(self.name, language)
            or localize(self.organization_display_name, language)
            or self.entity_id
        )

    @property
    def destination_id(self) -> str:
        return f"{self.metadata_set}|{self.entity_id}"
