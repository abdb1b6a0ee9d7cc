"""
Session / authentication protocol.

The engine never authenticates anyone itself; it asks the session whether the
user is known and which attributes the identity source asserted.
"""

from typing import Any, Dict, List, Optional, Protocol


class SessionProtocol(Protocol):
    """Protocol for the authenticated session of the current request."""

    def is_authenticated(self) -> bool:
        """Whether a valid local session exists."""
        ...

    def require_authentication(self) -> None:
        """
        Ensure the user is authenticated.

        Raises:
            AuthenticationRequiredError: If no valid session exists
        """
        ...

    def get_attributes(self) -> Dict[str, List[str]]:
        """Attributes asserted for the user."""
        ...

    def get_auth_context_value(self, key: str) -> Optional[Any]:
        """Value stored by the authentication step, e.g. the bridged remote source."""
        ...

    def logout(self, return_url: str) -> None:
        """Terminate the session; the caller redirects to return_url."""
        ...
