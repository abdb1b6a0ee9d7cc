"""
Consent administration configuration models.

Option names follow the module's historical config file, so the dotted and
camel-cased spellings ('attributes.hash', 'showDescription', 'returnURL',
'consentadmin') are accepted as aliases next to the Python field names.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from consent_admin.constants import PLACEHOLDER_SECRET_SALT
from consent_admin.schemas.metadata import IdentitySourceDescriptor, RelyingPartyDescriptor

_LEGACY_STORE_NAMES = {
    "consent:Database": "sqlite",
    "consent:Memory": "memory",
}


class StoreBackend(str, Enum):
    MEMORY = "memory"
    SQLITE = "sqlite"


class StoreConfig(BaseModel):
    """Consent store selection. Opaque to the engine beyond backend choice."""

    backend: StoreBackend = StoreBackend.MEMORY
    dsn: Optional[str] = Field(None, description="sqlite DSN, e.g. 'sqlite:///var/consent.db' or 'sqlite::memory:'")
    options: Dict[str, Any] = Field(default_factory=dict, description="Backend settings, e.g. sqlite 'timeout'")

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_form(cls, data: Any) -> Any:
        """Accept ['consent:Database', {'dsn': ...}] as well as a plain mapping."""
        if isinstance(data, list):
            if not data or not isinstance(data[0], str):
                raise ValueError("store list form must start with a store class name")
            merged: Dict[str, Any] = {}
            for item in data[1:]:
                if not isinstance(item, dict):
                    raise ValueError(f"unexpected store option {item!r}")
                merged.update(item)
            data = {"class": data[0], **merged}
        if isinstance(data, dict) and "class" in data:
            data = dict(data)
            store_class = data.pop("class")
            if store_class not in _LEGACY_STORE_NAMES:
                raise ValueError(f"unknown consent store {store_class!r}")
            options = dict(data.pop("options", {}))
            options.update({k: data.pop(k) for k in list(data) if k != "dsn"})
            data = {"backend": _LEGACY_STORE_NAMES[store_class], "dsn": data.get("dsn"), "options": options}
        return data


class AuthSourceConfig(BaseModel):
    """Static authentication source (development and tests)."""

    attributes: Dict[str, List[str]] = Field(default_factory=dict)
    auth_context: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("attributes", mode="before")
    @classmethod
    def _listify(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        return {k: [val] if isinstance(val, str) else val for k, val in (v or {}).items()}


class MetadataConfig(BaseModel):
    """Identity-source and relying-party metadata served from configuration."""

    identity_source: IdentitySourceDescriptor
    relying_parties: Dict[str, RelyingPartyDescriptor] = Field(default_factory=dict)

    @field_validator("relying_parties", mode="before")
    @classmethod
    def _fill_entity_ids(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        filled = {}
        for entity_id, values in v.items():
            if isinstance(values, RelyingPartyDescriptor):
                filled[entity_id] = values
                continue
            values = dict(values or {})
            values.setdefault("entity_id", entity_id)
            filled[entity_id] = values
        return filled


class ConsentAdminConfig(BaseModel):
    """Top-level configuration for the consent administration module."""

    authority: str = Field(..., description="Auth source used to authenticate the user")
    secret_salt: str = Field(..., description="Process-wide salt for identifier hashing")
    hash_attributes: bool = Field(False, alias="attributes.hash")
    exclude_attributes: List[str] = Field(default_factory=list, alias="attributes.exclude")
    show_description: bool = Field(False, alias="showDescription")
    return_url: str = Field("/", alias="returnURL")
    language: str = Field("en", description="Preferred language for display names")
    store: StoreConfig = Field(default_factory=StoreConfig, alias="consentadmin")
    metadata: Optional[MetadataConfig] = None
    auth_sources: Dict[str, AuthSourceConfig] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("secret_salt")
    @classmethod
    def validate_secret_salt(cls, v: str) -> str:
        """Refuse empty or placeholder salts - identifiers would be guessable."""
        if not v or not v.strip():
            raise ValueError("secret_salt must not be empty")
        if v == PLACEHOLDER_SECRET_SALT:
            raise ValueError("secret_salt is still set to the sample placeholder")
        return v

    @model_validator(mode="after")
    def validate_authority(self) -> "ConsentAdminConfig":
        if self.auth_sources and self.authority not in self.auth_sources:
            raise ValueError(f"authority {self.authority!r} is not a configured auth source")
        return self
