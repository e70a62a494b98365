"""FastAPI application factory for the registration admin service."""

from fastapi import FastAPI

from app.analytics import RegistrationAnalyticsPort, RosterListingPort
from app.assemblies import AssemblyAdministrationService
from app.config import AppSettings
from app.db import DatabaseHealthPort

from .routers import (
    api_create_analytics_router,
    api_create_assemblies_router,
    api_create_health_router,
    api_create_rosters_router,
)


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    assembly_service: AssemblyAdministrationService,
    analytics_service: RegistrationAnalyticsPort,
    roster_service: RosterListingPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings.
        db_health_service: Database health service used by health endpoints.
        assembly_service: Assembly administration service.
        analytics_service: Registration analytics service.
        roster_service: Roster listing service.

    Returns:
        FastAPI: Application with all routers mounted.

    Raises:
        ValueError: Raised when a router dependency is invalid.
    """
    application = FastAPI(title="Assembly Registration Admin")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service identity for bootstrap verification."""

        return {
            "service": "assembly-registration-admin",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(api_create_assemblies_router(settings=settings, assembly_service=assembly_service))
    application.include_router(api_create_analytics_router(analytics_service=analytics_service))
    application.include_router(api_create_rosters_router(roster_service=roster_service))

    return application
