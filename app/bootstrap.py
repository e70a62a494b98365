"""Application bootstrap wiring for startup validation and dependency assembly."""

import logging

from fastapi import FastAPI
from sqlalchemy import Engine

from app.analytics import RegistrationAnalyticsService, RosterListingService
from app.api import create_api_application
from app.assemblies import AssemblyAdministrationService
from app.config import AppSettings, config_configure_logging, config_load_settings
from app.db import (
    SQLAlchemyAssemblyService,
    SQLAlchemyDatabaseHealthService,
    SQLAlchemyParticipantService,
    SQLAlchemyRegistrationService,
    db_create_engine,
)

logger = logging.getLogger(__name__)


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional preloaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_configure_logging(resolved_settings)
    engine = db_create_engine(
        database_url=resolved_settings.database_url,
        pool_size=max(5, resolved_settings.analytics_fetch_workers),
    )
    assembly_repository = SQLAlchemyAssemblyService(engine=engine)
    participant_repository = SQLAlchemyParticipantService(engine=engine)
    registration_repository = SQLAlchemyRegistrationService(engine=engine)
    logger.info("application wired environment=%s", resolved_settings.environment_name)
    return create_api_application(
        settings=resolved_settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        assembly_service=AssemblyAdministrationService(
            assembly_repository=assembly_repository,
            participant_repository=participant_repository,
            registration_repository=registration_repository,
        ),
        analytics_service=RegistrationAnalyticsService(
            participant_repository=participant_repository,
            registration_repository=registration_repository,
            assembly_repository=assembly_repository,
            fetch_workers=resolved_settings.analytics_fetch_workers,
        ),
        roster_service=RosterListingService(participant_repository=participant_repository),
    )


def bootstrap_create_analytics_service(
    settings: AppSettings | None = None,
) -> tuple[RegistrationAnalyticsService, Engine]:
    """Build the analytics service for non-HTTP report surfaces.

    The caller owns the returned engine and disposes it when done.

    Args:
        settings: Optional preloaded settings; loaded from the environment when omitted.

    Returns:
        tuple[RegistrationAnalyticsService, Engine]: Wired analytics service and its engine.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_configure_logging(resolved_settings)
    engine = db_create_engine(
        database_url=resolved_settings.database_url,
        pool_size=max(5, resolved_settings.analytics_fetch_workers),
    )
    analytics_service = RegistrationAnalyticsService(
        participant_repository=SQLAlchemyParticipantService(engine=engine),
        registration_repository=SQLAlchemyRegistrationService(engine=engine),
        assembly_repository=SQLAlchemyAssemblyService(engine=engine),
        fetch_workers=resolved_settings.analytics_fetch_workers,
    )
    return analytics_service, engine
