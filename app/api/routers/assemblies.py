"""Assembly administration router: lifecycle actions and roster import."""
# pylint: disable=duplicate-code

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.assemblies import AssemblyAdministrationService
from app.config import AppSettings
from app.db import AssemblyStateError, ParticipantInsertRequest

from ..errors import api_error_from_exception
from ..schemas import (
    AssemblyCreatePayload,
    AssemblyDeletePayload,
    AssemblyOperatorPayload,
    AssemblyUpdatePayload,
    ParticipantImportPayload,
)
from ..serialization import (
    api_serialize_assembly,
    api_serialize_assembly_deletion,
    api_serialize_assembly_report_data,
    api_serialize_participant,
)

_API_SERVICE_ERRORS = (ValueError, LookupError, AssemblyStateError, RuntimeError)


def api_create_assemblies_router(
    settings: AppSettings,
    assembly_service: AssemblyAdministrationService,
) -> APIRouter:
    """Create assembly administration router.

    Args:
        settings: Runtime settings used for pagination defaults.
        assembly_service: Assembly administration service.

    Returns:
        APIRouter: Router exposing `/assemblies` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if assembly_service is None:
        raise ValueError("assembly_service must not be None")

    router = APIRouter(prefix="/assemblies", tags=["assemblies"])

    @router.get("")
    def api_assembly_list(
        limit: int = Query(default=settings.api_default_limit, ge=1),
        offset: int = Query(default=0, ge=0),
        active_only: bool = Query(default=False, alias="activeOnly"),
    ) -> JSONResponse:
        """List assemblies newest first.

        Args:
            limit: Max rows to return, capped by `api_max_limit`.
            offset: Rows to skip.
            active_only: Restrict to active assemblies.

        Returns:
            JSONResponse: Assembly list envelope payload.
        """

        applied_limit = min(limit, settings.api_max_limit)
        try:
            assemblies = assembly_service.assembly_list(limit=applied_limit, offset=offset, active_only=active_only)
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)

        payload = {
            "items": [api_serialize_assembly(assembly) for assembly in assemblies],
            "page": {
                "limit": limit,
                "appliedLimit": applied_limit,
                "offset": offset,
                "returned": len(assemblies),
            },
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/upcoming")
    def api_assembly_next_upcoming() -> JSONResponse:
        """Return the earliest active assembly that has not started, or `null`."""

        try:
            assembly = assembly_service.assembly_get_next_upcoming()
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)

        payload = {"assembly": None if assembly is None else api_serialize_assembly(assembly)}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/{assembly_id}")
    def api_assembly_detail(assembly_id: str) -> JSONResponse:
        """Return one assembly."""

        try:
            assembly = assembly_service.assembly_get(assembly_id)
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)
        return JSONResponse(content=api_serialize_assembly(assembly), status_code=status.HTTP_200_OK)

    @router.post("")
    def api_assembly_create(payload: AssemblyCreatePayload) -> JSONResponse:
        """Create one active assembly.

        Args:
            payload: Assembly creation body.

        Returns:
            JSONResponse: Created assembly with status 201.
        """

        try:
            assembly = assembly_service.assembly_create(
                name=payload.name,
                assembly_type=payload.type,
                location=payload.location,
                start_date=payload.start_date,
                end_date=payload.end_date,
                created_by=payload.created_by,
                registration_open=payload.registration_open,
                registration_deadline=payload.registration_deadline,
                max_participants=payload.max_participants,
                description=payload.description,
                payment_required=payload.payment_required,
            )
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)
        return JSONResponse(content=api_serialize_assembly(assembly), status_code=status.HTTP_201_CREATED)

    @router.patch("/{assembly_id}")
    def api_assembly_update(assembly_id: str, payload: AssemblyUpdatePayload) -> JSONResponse:
        """Apply a partial update; fields absent from the body stay unchanged."""

        changes = payload.model_dump(exclude_unset=True, exclude={"last_updated_by"})
        try:
            assembly = assembly_service.assembly_update(
                assembly_id=assembly_id,
                last_updated_by=payload.last_updated_by,
                changes=changes,
            )
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)
        return JSONResponse(content=api_serialize_assembly(assembly), status_code=status.HTTP_200_OK)

    @router.delete("/{assembly_id}")
    def api_assembly_delete(assembly_id: str, payload: AssemblyDeletePayload) -> JSONResponse:
        """Permanently delete one assembly and its related rows.

        Args:
            assembly_id: Assembly identifier.
            payload: Operator and confirmation text matching the assembly name.

        Returns:
            JSONResponse: Removed row counts.
        """

        try:
            deletion_result = assembly_service.assembly_delete_with_related_data(
                assembly_id=assembly_id,
                deleted_by=payload.deleted_by,
                confirmation_text=payload.confirmation_text,
            )
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)
        return JSONResponse(content=api_serialize_assembly_deletion(deletion_result), status_code=status.HTTP_200_OK)

    @router.get("/{assembly_id}/report-data")
    def api_assembly_report_data(assembly_id: str) -> JSONResponse:
        """Return one assembly with its roster, registrations and modalities."""

        try:
            report_data = assembly_service.assembly_get_report_data(assembly_id)
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)
        return JSONResponse(content=api_serialize_assembly_report_data(report_data), status_code=status.HTTP_200_OK)

    @router.post("/{assembly_id}/archive")
    def api_assembly_archive(assembly_id: str, payload: AssemblyOperatorPayload) -> JSONResponse:
        """Archive one active assembly; archived assemblies answer 409."""

        try:
            assembly = assembly_service.assembly_archive(
                assembly_id=assembly_id,
                last_updated_by=payload.last_updated_by,
            )
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)
        return JSONResponse(content=api_serialize_assembly(assembly), status_code=status.HTTP_200_OK)

    @router.post("/{assembly_id}/payment-required/recompute")
    def api_assembly_recompute_payment_required(assembly_id: str, payload: AssemblyOperatorPayload) -> JSONResponse:
        """Reset the payment flag from the assembly type."""

        try:
            assembly = assembly_service.assembly_recompute_payment_required(
                assembly_id=assembly_id,
                last_updated_by=payload.last_updated_by,
            )
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)
        return JSONResponse(content=api_serialize_assembly(assembly), status_code=status.HTTP_200_OK)

    @router.post("/{assembly_id}/participants")
    def api_assembly_participants_import(assembly_id: str, payload: ParticipantImportPayload) -> JSONResponse:
        """Bulk insert roster rows for one assembly.

        Args:
            assembly_id: Assembly identifier.
            payload: Roster rows to import.

        Returns:
            JSONResponse: Inserted row count with status 201.
        """

        requests = [
            ParticipantInsertRequest(
                type=row.type,
                participant_id=row.participant_id,
                name=row.name,
                role=row.role,
                status=row.status,
                escola=row.escola,
                regional=row.regional,
                cidade=row.cidade,
                uf=row.uf,
                ag_filiacao=row.ag_filiacao,
            )
            for row in payload.participants
        ]
        try:
            inserted_count = assembly_service.participants_bulk_insert(assembly_id=assembly_id, requests=requests)
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)
        return JSONResponse(
            content={"assemblyId": assembly_id, "inserted": inserted_count},
            status_code=status.HTTP_201_CREATED,
        )

    @router.get("/{assembly_id}/participants")
    def api_assembly_participants_list(
        assembly_id: str,
        participant_type: str | None = Query(default=None, alias="type"),
    ) -> JSONResponse:
        """List roster rows of one assembly, optionally filtered by type."""

        try:
            participants = assembly_service.participants_list(
                assembly_id=assembly_id,
                participant_type=participant_type,
            )
        except _API_SERVICE_ERRORS as error:
            return api_error_from_exception(error)
        payload = {"items": [api_serialize_participant(participant) for participant in participants]}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


__all__ = ["api_create_assemblies_router"]
