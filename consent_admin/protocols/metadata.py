"""Metadata provider protocol."""

from typing import Dict, Protocol, Union

from consent_admin.schemas.metadata import IdentitySourceDescriptor, RelyingPartyDescriptor


class MetadataProviderProtocol(Protocol):
    """Protocol for looking up identity-source and relying-party metadata."""

    def get_current_source_id(self, set_name: str) -> str:
        """Entity id of the hosted identity source in set_name."""
        ...

    def get_descriptor(
        self, entity_id: str, set_name: str
    ) -> Union[IdentitySourceDescriptor, RelyingPartyDescriptor]:
        """
        Descriptor for one entity.

        Raises:
            RelyingPartyNotFoundError: If the entity is unknown in set_name
        """
        ...

    def list_descriptors(self, set_name: str) -> Dict[str, RelyingPartyDescriptor]:
        """All descriptors in set_name, in listing order."""
        ...
