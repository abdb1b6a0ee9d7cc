"""
Static authentication source.

Serves a fixed user from configuration. Used for development deployments and
as the default session in tests; production hosts plug in their own
SessionProtocol implementation.
"""

import logging
from typing import Any, Dict, List, Optional

from consent_admin.logic.exceptions import AuthenticationRequiredError, ConfigurationError
from consent_admin.schemas.config import AuthSourceConfig, ConsentAdminConfig

logger = logging.getLogger(__name__)


class StaticSession:
    """SessionProtocol implementation backed by one configured auth source."""

    def __init__(
        self,
        attributes: Dict[str, List[str]],
        auth_context: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ):
        self._attributes = {k: list(v) for k, v in attributes.items()}
        self._auth_context = dict(auth_context or {})
        self._authenticated = authenticated
        self.logged_out_to: Optional[str] = None

    @classmethod
    def from_auth_source(cls, source: AuthSourceConfig) -> "StaticSession":
        return cls(attributes=source.attributes, auth_context=source.auth_context)

    def is_authenticated(self) -> bool:
        return self._authenticated

    def require_authentication(self) -> None:
        if not self._authenticated:
            raise AuthenticationRequiredError("No valid session; authentication required")

    def get_attributes(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._attributes.items()}

    def get_auth_context_value(self, key: str) -> Optional[Any]:
        return self._auth_context.get(key)

    def logout(self, return_url: str) -> None:
        logger.info(f"Session logged out, returning to {return_url}")
        self._authenticated = False
        self.logged_out_to = return_url


class StaticSessionProvider:
    """Creates a fresh StaticSession per request for the configured authority."""

    def __init__(self, config: ConsentAdminConfig):
        if config.authority not in config.auth_sources:
            raise ConfigurationError(f"authority {config.authority!r} has no auth source configured")
        self._source = config.auth_sources[config.authority]

    def __call__(self, request: Optional[Any] = None) -> StaticSession:
        return StaticSession.from_auth_source(self._source)
