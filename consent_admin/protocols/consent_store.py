"""Consent store protocol."""

from typing import List, Protocol, Tuple


class ConsentStoreProtocol(Protocol):
    """Durable storage of consent records, partitioned by hashed user id."""

    def get_consents(self, hashed_user_id: str) -> List[Tuple[str, str]]:
        """All (targeted_id, attribute_hash) pairs stored for the user."""
        ...

    def save_consent(self, hashed_user_id: str, targeted_id: str, attribute_hash: str) -> bool:
        """Upsert a consent record. Returns True when stored."""
        ...

    def delete_consent(self, hashed_user_id: str, targeted_id: str) -> int:
        """Delete a consent record. Returns the number of rows removed."""
        ...
