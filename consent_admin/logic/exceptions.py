"""
Consent administration errors - FAIL FAST, FAIL LOUD.

Every failure the engine can detect has its own type so the request handler
can map it without inspecting messages.
"""


class ConsentAdminError(Exception):
    """Base class for all consent administration errors."""

    pass


class ConfigurationError(ConsentAdminError):
    """Raised when the module configuration is missing or invalid."""

    pass


class AuthenticationRequiredError(ConsentAdminError):
    """Raised when the session is not authenticated."""

    pass


class MissingIdentifierError(ConsentAdminError):
    """Raised when the user-identifying attribute is absent or empty."""

    def __init__(self, attribute_name: str):
        self.attribute_name = attribute_name
        super().__init__(
            f"Could not generate user identifier for storing consent. Attribute [{attribute_name}] was not available."
        )


class PipelineExecutionError(ConsentAdminError):
    """Raised when the attribute-transformation pipeline fails for a relying party."""

    def __init__(self, relying_party_id: str, message: str):
        self.relying_party_id = relying_party_id
        super().__init__(f"Attribute pipeline failed for {relying_party_id}: {message}")


class InteractionRequiredError(ConsentAdminError):
    """Raised by a filter that cannot complete without asking the user."""

    pass


class StorageInconsistencyError(ConsentAdminError):
    """Raised when the store did not apply a write the engine relied on."""

    def __init__(self, hashed_user_id: str, targeted_id: str, operation: str = "revoke"):
        self.hashed_user_id = hashed_user_id
        self.targeted_id = targeted_id
        self.operation = operation
        if operation == "revoke":
            message = f"No consent record removed for targeted id {targeted_id}"
        else:
            message = f"Consent store did not confirm {operation} for targeted id {targeted_id}"
        super().__init__(message)


class InvalidActionError(ConsentAdminError):
    """Raised for an action value other than grant or revoke."""

    def __init__(self, action: object):
        self.action = action
        super().__init__(f"Unknown consent action: {action!r}")


class RelyingPartyNotFoundError(ConsentAdminError):
    """Raised when metadata has no descriptor for the requested relying party."""

    def __init__(self, relying_party_id: str):
        self.relying_party_id = relying_party_id
        super().__init__(f"Unknown relying party: {relying_party_id}")
