"""Identity context resolution for consent purposes."""

import logging
from typing import Optional

from consent_admin.constants import BRIDGED_IDP_KEY, DEFAULT_USERID_ATTRIBUTE, IDP_HOSTED_SET, IDP_REMOTE_SET
from consent_admin.logic.exceptions import MissingIdentifierError
from consent_admin.protocols.metadata import MetadataProviderProtocol
from consent_admin.protocols.session import SessionProtocol
from consent_admin.schemas.consent.core import IdentityContext, normalize_attributes
from consent_admin.schemas.metadata import IdentitySourceDescriptor

logger = logging.getLogger(__name__)


class IdentityContextResolver:
    """
    Determines the identity source and user identifier of the current session.

    Bridged logins (user authenticated at a remote identity source and proxied
    through the hosted one) get a '<remote set>|<remote id>' source so their
    targeted ids never collide with local logins of the same user.
    """

    def __init__(self, metadata: MetadataProviderProtocol):
        self._metadata = metadata

    def identity_source(self) -> IdentitySourceDescriptor:
        entity_id = self._metadata.get_current_source_id(IDP_HOSTED_SET)
        descriptor = self._metadata.get_descriptor(entity_id, IDP_HOSTED_SET)
        if not isinstance(descriptor, IdentitySourceDescriptor):
            raise TypeError(f"Metadata for {entity_id} is not an identity source descriptor")
        return descriptor

    def resolve(
        self, session: SessionProtocol, identity_source: Optional[IdentitySourceDescriptor] = None
    ) -> IdentityContext:
        """
        Build the immutable identity context for this request.

        Raises:
            MissingIdentifierError: If the user-identifying attribute is absent or empty
        """
        idp = identity_source or self.identity_source()
        attributes = normalize_attributes(session.get_attributes())

        remote_idp = session.get_auth_context_value(BRIDGED_IDP_KEY)
        if remote_idp is not None:
            source_id = f"{IDP_REMOTE_SET}|{remote_idp}"
        else:
            source_id = f"{idp.metadata_set}|{idp.entity_id}"

        userid_attribute = idp.userid_attribute or DEFAULT_USERID_ATTRIBUTE
        user_ids = attributes.get(userid_attribute)
        if not user_ids or not user_ids[0]:
            raise MissingIdentifierError(userid_attribute)

        logger.info(f"consentAdmin: identity source {source_id}")
        return IdentityContext(
            source_id=source_id,
            user_id=user_ids[0],
            raw_attributes=attributes,
            remote_source_id=str(remote_idp) if remote_idp is not None else None,
        )
