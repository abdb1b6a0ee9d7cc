"""Display-field resolution for relying parties."""

from typing import Optional

from consent_admin.schemas.metadata import RelyingPartyDescriptor, localize

__all__ = ["localize", "resolve_description", "resolve_display_name"]


def resolve_display_name(descriptor: RelyingPartyDescriptor, language: str = "en") -> str:
    """Localized name, then localized organization display name, then the raw entity id."""
    return descriptor.display_name(language)


def resolve_description(descriptor: RelyingPartyDescriptor, language: str = "en") -> Optional[str]:
    """None when the relying party publishes no description."""
    return localize(descriptor.description, language)
