"""FastAPI dependencies pulling collaborators from app state."""

from fastapi import HTTPException, Request, status

from consent_admin.logic.services.consent_admin import ConsentAdminService
from consent_admin.protocols.session import SessionProtocol


def get_consent_admin_service(request: Request) -> ConsentAdminService:
    """Get the consent admin service instance from app state."""
    service = getattr(request.app.state, "consent_admin_service", None)
    if service is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Consent admin not initialized")
    return service


def get_session(request: Request) -> SessionProtocol:
    """Create the session for this request via the configured provider."""
    provider = getattr(request.app.state, "session_provider", None)
    if provider is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="No session provider configured")
    return provider(request)
