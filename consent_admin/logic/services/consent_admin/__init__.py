"""Consent administration: reconciliation listing and grant/revoke actions."""

from .actions import ConsentActionHandler, parse_action
from .reconciliation import ReconciliationEngine, build_stored_records, classify
from .service import ConsentAdminService

__all__ = [
    "ConsentActionHandler",
    "ConsentAdminService",
    "ReconciliationEngine",
    "build_stored_records",
    "classify",
    "parse_action",
]
