"""Roster drop-down router for committees, board members and coordinators."""

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.analytics import RosterListingPort
from app.domain import DOMAIN_PARTICIPANT_TYPE_CR, DOMAIN_PARTICIPANT_TYPE_EB

from ..errors import api_error_from_exception
from ..serialization import api_serialize_board_entry, api_serialize_comite_entry


def api_create_rosters_router(roster_service: RosterListingPort) -> APIRouter:
    """Create roster router.

    Args:
        roster_service: Roster listing service.

    Returns:
        APIRouter: Router exposing `/rosters` endpoints.

    Raises:
        ValueError: Raised when roster_service is invalid.
    """

    if roster_service is None:
        raise ValueError("roster_service must not be None")

    router = APIRouter(prefix="/rosters", tags=["rosters"])

    @router.get("/comites")
    def api_roster_comites(
        assembly_id: str | None = Query(default=None, alias="assemblyId"),
        include_status: bool = Query(default=False, alias="includeStatus"),
    ) -> JSONResponse:
        """List committee entries sorted by participant id.

        Args:
            assembly_id: Optional assembly scope; all assemblies when omitted.
            include_status: Attach the resolved Pleno/Não-pleno status.

        Returns:
            JSONResponse: Committee entry list payload.
        """

        try:
            entries = roster_service.roster_list_comites(assembly_id=assembly_id, include_status=include_status)
        except (ValueError, RuntimeError) as error:
            return api_error_from_exception(error)
        payload = {"items": [api_serialize_comite_entry(entry) for entry in entries]}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/ebs")
    def api_roster_ebs() -> JSONResponse:
        """List board member entries sorted by role."""

        return _api_roster_board_response(roster_service, DOMAIN_PARTICIPANT_TYPE_EB)

    @router.get("/crs")
    def api_roster_crs() -> JSONResponse:
        """List regional coordinator entries sorted by role."""

        return _api_roster_board_response(roster_service, DOMAIN_PARTICIPANT_TYPE_CR)

    return router


def _api_roster_board_response(roster_service: RosterListingPort, participant_type: str) -> JSONResponse:
    try:
        entries = roster_service.roster_list_board_members(participant_type)
    except (ValueError, RuntimeError) as error:
        return api_error_from_exception(error)
    payload = {"items": [api_serialize_board_entry(entry) for entry in entries]}
    return JSONResponse(content=payload, status_code=status.HTTP_200_OK)


__all__ = ["api_create_rosters_router"]
