"""API router package for endpoint composition."""

from .analytics import api_create_analytics_router
from .assemblies import api_create_assemblies_router
from .health import api_create_health_router
from .rosters import api_create_rosters_router

__all__ = [
    "api_create_analytics_router",
    "api_create_assemblies_router",
    "api_create_health_router",
    "api_create_rosters_router",
]
