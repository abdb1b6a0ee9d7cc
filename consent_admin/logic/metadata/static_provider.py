"""Metadata provider serving descriptors from configuration."""

import logging
from typing import Dict, Union

from consent_admin.constants import SP_REMOTE_SET
from consent_admin.logic.exceptions import ConfigurationError, RelyingPartyNotFoundError
from consent_admin.schemas.config import MetadataConfig
from consent_admin.schemas.metadata import IdentitySourceDescriptor, RelyingPartyDescriptor

logger = logging.getLogger(__name__)


class StaticMetadataProvider:
    """
    MetadataProviderProtocol implementation over a MetadataConfig.

    Relying parties are listed in configuration order.
    """

    def __init__(self, metadata: MetadataConfig):
        self._identity_source = metadata.identity_source
        self._relying_parties: Dict[str, RelyingPartyDescriptor] = dict(metadata.relying_parties)

    def get_current_source_id(self, set_name: str) -> str:
        if set_name != self._identity_source.metadata_set:
            raise ConfigurationError(f"No hosted identity source in metadata set {set_name!r}")
        return self._identity_source.entity_id

    def get_descriptor(self, entity_id: str, set_name: str) -> Union[IdentitySourceDescriptor, RelyingPartyDescriptor]:
        if set_name == self._identity_source.metadata_set and entity_id == self._identity_source.entity_id:
            return self._identity_source
        if set_name == SP_REMOTE_SET and entity_id in self._relying_parties:
            return self._relying_parties[entity_id]
        raise RelyingPartyNotFoundError(entity_id)

    def list_descriptors(self, set_name: str) -> Dict[str, RelyingPartyDescriptor]:
        if set_name != SP_REMOTE_SET:
            return {}
        return dict(self._relying_parties)
