"""
Consent administration endpoint - FAIL FAST, NO FAKE DATA.

GET /consentAdmin
    ?logout          log out and redirect to the configured return URL
    ?action=&cv=     grant ('true') or revoke ('false') consent for one relying party
    (no params)      list every relying party with its consent status
"""

import logging
from typing import Any, Dict, Optional, Type, Union

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse

from consent_admin.logic.exceptions import (
    AuthenticationRequiredError,
    ConsentAdminError,
    InvalidActionError,
    MissingIdentifierError,
    PipelineExecutionError,
    RelyingPartyNotFoundError,
    StorageInconsistencyError,
)
from consent_admin.logic.services.consent_admin import ConsentAdminService
from consent_admin.protocols.session import SessionProtocol
from consent_admin.schemas.consent.core import ActionResult, LogoutResult, ReconciliationView

from ..dependencies import get_consent_admin_service, get_session

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/consentAdmin",
    tags=["consent-admin"],
    responses={
        400: {"description": "Invalid action"},
        401: {"description": "Not authenticated"},
        404: {"description": "Unknown relying party"},
        409: {"description": "Consent store out of sync with the displayed state"},
    },
)

ERROR_STATUS: Dict[Type[ConsentAdminError], int] = {
    AuthenticationRequiredError: status.HTTP_401_UNAUTHORIZED,
    InvalidActionError: status.HTTP_400_BAD_REQUEST,
    RelyingPartyNotFoundError: status.HTTP_404_NOT_FOUND,
    StorageInconsistencyError: status.HTTP_409_CONFLICT,
    MissingIdentifierError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    PipelineExecutionError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _http_error(error: ConsentAdminError) -> HTTPException:
    for error_type, code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=code, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))


def _view_to_dict(view: ReconciliationView) -> Dict[str, Any]:
    return {
        "header": view.header,
        "showDescription": view.show_description,
        "spList": [entry.model_dump(mode="json") for entry in view.entries],
    }


@router.get("", name="consent_admin", response_model=None)
def consent_admin(
    action: Optional[str] = Query(None, description="'true' to grant, 'false' to revoke"),
    cv: Optional[str] = Query(None, description="Relying party entity id"),
    logout: Optional[str] = Query(None, description="Present to log out"),
    session: SessionProtocol = Depends(get_session),
    service: ConsentAdminService = Depends(get_consent_admin_service),
) -> Union[Dict[str, Any], RedirectResponse]:
    """Reconciliation listing, or a single grant/revoke action."""
    try:
        result = service.handle(session, logout=logout, action=action, cv=cv)
    except ConsentAdminError as e:
        logger.warning(f"consentAdmin request failed: {e}")
        raise _http_error(e) from e

    if isinstance(result, LogoutResult):
        return RedirectResponse(url=result.return_url, status_code=status.HTTP_302_FOUND)
    if isinstance(result, ActionResult):
        return {"isStored": result.is_stored}
    return _view_to_dict(result)
