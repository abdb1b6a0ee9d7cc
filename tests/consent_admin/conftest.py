"""
Pytest configuration and fixtures for consent administration tests.

Imports fixtures from the shared fixtures directory.
"""

from tests.fixtures.consent_admin import (
    calculator,
    consent_admin_config,
    consent_admin_service,
    consent_store,
    identity_context,
    identity_source,
    metadata_config,
    metadata_provider,
    processing_chain,
    reconciliation_engine,
    session,
    simulator,
    sp1,
    sp2,
    sp_limited,
)

__all__ = [
    "calculator",
    "consent_admin_config",
    "consent_admin_service",
    "consent_store",
    "identity_context",
    "identity_source",
    "metadata_config",
    "metadata_provider",
    "processing_chain",
    "reconciliation_engine",
    "session",
    "simulator",
    "sp1",
    "sp2",
    "sp_limited",
]
