"""
FastAPI application for the consent administration module.

This module creates and configures the FastAPI application with all routes.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional

from fastapi import FastAPI

from consent_admin.constants import CONSENT_ADMIN_VERSION
from consent_admin.logic.auth.static_session import StaticSessionProvider
from consent_admin.logic.exceptions import ConfigurationError
from consent_admin.logic.metadata.static_provider import StaticMetadataProvider
from consent_admin.logic.persistence.consent_store import parse_store_config
from consent_admin.logic.pipeline.processing_chain import ProcessingChain
from consent_admin.logic.services.consent_admin import ConsentAdminService
from consent_admin.protocols.consent_store import ConsentStoreProtocol
from consent_admin.protocols.metadata import MetadataProviderProtocol
from consent_admin.protocols.pipeline import PipelineRunnerProtocol
from consent_admin.protocols.session import SessionProtocol
from consent_admin.schemas.config import ConsentAdminConfig

from .routes import consent_admin, navigation

logger = logging.getLogger(__name__)

SessionProvider = Callable[[Any], SessionProtocol]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    logger.info("Starting consent admin API...")
    yield
    logger.info("Shutting down consent admin API...")


def build_consent_admin_service(
    config: ConsentAdminConfig,
    metadata: Optional[MetadataProviderProtocol] = None,
    store: Optional[ConsentStoreProtocol] = None,
    runner: Optional[PipelineRunnerProtocol] = None,
) -> ConsentAdminService:
    """Wire the service, filling unset collaborators from configuration."""
    if metadata is None:
        if config.metadata is None:
            raise ConfigurationError("No metadata configured and no metadata provider given")
        metadata = StaticMetadataProvider(config.metadata)
    return ConsentAdminService(
        config=config,
        metadata=metadata,
        store=store if store is not None else parse_store_config(config.store),
        runner=runner if runner is not None else ProcessingChain(),
    )


def create_app(
    config: ConsentAdminConfig,
    session_provider: Optional[SessionProvider] = None,
    metadata: Optional[MetadataProviderProtocol] = None,
    store: Optional[ConsentStoreProtocol] = None,
    runner: Optional[PipelineRunnerProtocol] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Validated module configuration
        session_provider: Callable(request) -> session; defaults to the configured static auth source
        metadata: Metadata provider; defaults to metadata from config
        store: Consent store; defaults to the configured backend
        runner: Attribute pipeline runner; defaults to ProcessingChain

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Consent Administration API",
        description="Review and manage attribute release consent per service",
        version=CONSENT_ADMIN_VERSION,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.session_provider = session_provider or StaticSessionProvider(config)
    app.state.consent_admin_service = build_consent_admin_service(config, metadata, store, runner)

    app.include_router(consent_admin.router)
    app.include_router(navigation.router)

    return app
