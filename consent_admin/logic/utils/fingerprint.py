"""
Fingerprint calculation for consent records.

Identifier derivation matches the consent module's stores: SHA-1 over
'<user>|<salt>|<source>[|<destination>]', hex encoded. Attribute fingerprints
are computed over a canonical JSON form so map key order never matters, while
value order within a key does.
"""

import hashlib
import json
from typing import Mapping, Sequence, Union

from consent_admin.schemas.consent.core import Fingerprint, ReleasedAttributeSet, normalize_attributes


def canonical_attributes(attributes: Mapping[str, Union[str, Sequence[str]]]) -> str:
    """Stable serialization: keys sorted, values kept in release order."""
    normalized = normalize_attributes(attributes)
    return json.dumps(normalized, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def attribute_fingerprint(attributes: Mapping[str, Union[str, Sequence[str]]], hashing_enabled: bool) -> str:
    """
    Fingerprint of a released attribute set.

    Args:
        attributes: Final, exemption-filtered attribute map
        hashing_enabled: Hash the canonical form instead of returning it

    Returns:
        Canonical serialization, or its SHA-1 hex digest when hashing is enabled
    """
    canonical = canonical_attributes(attributes)
    if not hashing_enabled:
        return canonical
    return hashlib.sha1(canonical.encode("utf-8")).hexdigest()


class FingerprintCalculator:
    """Derives identifiers for one deployment. Holds only the secret salt."""

    def __init__(self, secret_salt: str, hash_attributes: bool = False):
        if not secret_salt:
            raise ValueError("secret_salt is required")
        self._secret_salt = secret_salt
        self.hash_attributes = hash_attributes

    def _digest(self, *parts: str) -> str:
        base = "|".join([parts[0], self._secret_salt, *parts[1:]])
        return hashlib.sha1(base.encode("utf-8")).hexdigest()

    def hashed_user_id(self, user_id: str, source_id: str) -> str:
        """Storage partition key for a user's consent records."""
        return self._digest(user_id, source_id)

    def targeted_id(self, user_id: str, source_id: str, destination_id: str) -> str:
        """Per (user, source, destination) identifier; destination is '<set>|<entity id>'."""
        return self._digest(user_id, source_id, destination_id)

    def attribute_fingerprint(self, attributes: Mapping[str, Union[str, Sequence[str]]]) -> str:
        return attribute_fingerprint(attributes, self.hash_attributes)

    def fingerprint(
        self, user_id: str, source_id: str, destination_id: str, released: ReleasedAttributeSet
    ) -> Fingerprint:
        return Fingerprint(
            hashed_user_id=self.hashed_user_id(user_id, source_id),
            targeted_id=self.targeted_id(user_id, source_id, destination_id),
            attribute_hash=self.attribute_fingerprint(released.attributes),
        )
