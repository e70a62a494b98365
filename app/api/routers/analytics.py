"""Registration analytics router for per-assembly reports."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.analytics import RegistrationAnalyticsPort

from ..errors import api_error_from_exception
from ..serialization import api_serialize_registration_report, api_serialize_registration_stats


def api_create_analytics_router(analytics_service: RegistrationAnalyticsPort) -> APIRouter:
    """Create analytics router.

    Args:
        analytics_service: Registration analytics service.

    Returns:
        APIRouter: Router exposing per-assembly analytics endpoints.

    Raises:
        ValueError: Raised when analytics_service is invalid.
    """

    if analytics_service is None:
        raise ValueError("analytics_service must not be None")

    router = APIRouter(prefix="/assemblies", tags=["analytics"])

    @router.get("/{assembly_id}/analytics")
    def api_registration_analytics(assembly_id: str) -> JSONResponse:
        """Return the categorized registration report of one assembly.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            JSONResponse: Report payload, 400 for malformed ids and 503 when a fetch fails.
        """

        try:
            report = analytics_service.analytics_compute_registration_report(assembly_id)
        except (ValueError, RuntimeError) as error:
            return api_error_from_exception(error)
        return JSONResponse(content=api_serialize_registration_report(report), status_code=status.HTTP_200_OK)

    @router.get("/{assembly_id}/registration-stats")
    def api_registration_stats(assembly_id: str) -> JSONResponse:
        """Return registration counters and capacity flags of one assembly."""

        try:
            report = analytics_service.analytics_compute_registration_stats(assembly_id)
        except (ValueError, RuntimeError) as error:
            return api_error_from_exception(error)
        return JSONResponse(content=api_serialize_registration_stats(report), status_code=status.HTTP_200_OK)

    return router


__all__ = ["api_create_analytics_router"]
