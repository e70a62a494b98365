"""Assembly lifecycle administration and roster import service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from app.db import (
    AssemblyCreateRequest,
    AssemblyDeletionResult,
    AssemblyRecord,
    AssemblyRepositoryPort,
    AssemblyStateError,
    ParticipantInsertRequest,
    ParticipantRecord,
    ParticipantRepositoryPort,
    RegistrationModalityRecord,
    RegistrationRecord,
    RegistrationRepositoryPort,
)
from app.domain import domain_parse_assembly_id

logger = logging.getLogger(__name__)

ASSEMBLY_TYPE_GENERAL = "AG"
ASSEMBLY_TYPE_EXTRAORDINARY = "AGE"
ASSEMBLY_STATUS_ACTIVE = "active"
ASSEMBLY_STATUS_ARCHIVED = "archived"

_ASSEMBLY_ALLOWED_TYPES = frozenset({ASSEMBLY_TYPE_GENERAL, ASSEMBLY_TYPE_EXTRAORDINARY})
# Update columns that reject an explicit null.
_ASSEMBLY_REQUIRED_UPDATE_FIELDS = (
    "name",
    "type",
    "location",
    "start_date",
    "end_date",
    "registration_open",
    "payment_required",
)


@dataclass(frozen=True)
class AssemblyReportData:
    """One assembly with every row an export report needs.

    Attributes:
        assembly: Assembly row.
        participants: Roster rows in import order.
        registrations: Registration rows in submission order.
        modalities: Registration modality rows.
    """

    assembly: AssemblyRecord
    participants: list[ParticipantRecord]
    registrations: list[RegistrationRecord]
    modalities: list[RegistrationModalityRecord]


class AssemblyAdministrationService:
    """Validate and apply assembly lifecycle operations.

    Payment is required by default for general assemblies only. Archiving is
    allowed from the active status and always closes registration.
    """

    def __init__(
        self,
        assembly_repository: AssemblyRepositoryPort,
        participant_repository: ParticipantRepositoryPort,
        registration_repository: RegistrationRepositoryPort,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize assembly administration dependencies.

        Args:
            assembly_repository: DB-layer assembly repository.
            participant_repository: DB-layer participant roster repository.
            registration_repository: DB-layer registration repository.
            clock: Optional UTC clock used for upcoming-assembly resolution.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if assembly_repository is None:
            raise ValueError("assembly_repository must not be None")
        if participant_repository is None:
            raise ValueError("participant_repository must not be None")
        if registration_repository is None:
            raise ValueError("registration_repository must not be None")
        self._assembly_repository = assembly_repository
        self._participant_repository = participant_repository
        self._registration_repository = registration_repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def assembly_list(self, limit: int, offset: int, active_only: bool = False) -> list[AssemblyRecord]:
        """List assemblies newest first.

        Args:
            limit: Max rows to return.
            offset: Rows to skip.
            active_only: Restrict to active assemblies.

        Returns:
            list[AssemblyRecord]: Assembly rows.

        Raises:
            ValueError: Raised when pagination values are invalid.
            RuntimeError: Raised when database read fails.
        """

        status = ASSEMBLY_STATUS_ACTIVE if active_only else None
        return self._assembly_repository.db_assembly_list(limit=limit, offset=offset, status=status)

    def assembly_get_next_upcoming(self) -> AssemblyRecord | None:
        """Return the earliest active assembly that has not started yet."""

        return self._assembly_repository.db_assembly_get_next_upcoming(now_utc=self._clock())

    def assembly_get(self, assembly_id: str) -> AssemblyRecord:
        """Fetch one assembly.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            AssemblyRecord: Matching assembly.

        Raises:
            ValueError: Raised when assembly_id is malformed.
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when database read fails.
        """

        assembly = self._assembly_repository.db_assembly_get_by_id(domain_parse_assembly_id(assembly_id))
        if assembly is None:
            raise LookupError("assembly not found")
        return assembly

    def assembly_create(
        self,
        name: str,
        assembly_type: str,
        location: str,
        start_date: datetime,
        end_date: datetime,
        created_by: str,
        registration_open: bool | None = None,
        registration_deadline: datetime | None = None,
        max_participants: int | None = None,
        description: str | None = None,
        payment_required: bool | None = None,
    ) -> AssemblyRecord:
        """Create one active assembly.

        Args:
            name: Display name.
            assembly_type: `AG` or `AGE`.
            location: Venue or city label.
            start_date: Start timestamp.
            end_date: End timestamp.
            created_by: Operator creating the assembly.
            registration_open: Optional initial registration state, open by default.
            registration_deadline: Optional registration deadline.
            max_participants: Optional capacity limit.
            description: Optional description.
            payment_required: Optional payment flag, defaults to `assembly_type == "AG"`.

        Returns:
            AssemblyRecord: Created assembly.

        Raises:
            ValueError: Raised when inputs are invalid.
            RuntimeError: Raised when persistence fails.
        """

        normalized_type = _assembly_validate_type(assembly_type)
        _assembly_validate_date_range(start_date, end_date)
        _assembly_validate_max_participants(max_participants)

        created_assembly = self._assembly_repository.db_assembly_create(
            AssemblyCreateRequest(
                name=_assembly_validate_non_empty_text(name, "name"),
                type=normalized_type,
                location=_assembly_validate_non_empty_text(location, "location"),
                start_date=start_date,
                end_date=end_date,
                created_by=_assembly_validate_non_empty_text(created_by, "created_by"),
                registration_open=True if registration_open is None else registration_open,
                registration_deadline=registration_deadline,
                max_participants=max_participants,
                description=description,
                payment_required=(
                    normalized_type == ASSEMBLY_TYPE_GENERAL if payment_required is None else payment_required
                ),
            )
        )
        logger.info("assembly created assembly_id=%s type=%s", created_assembly.assembly_id, created_assembly.type)
        return created_assembly

    def assembly_update(self, assembly_id: str, last_updated_by: str, changes: dict[str, object]) -> AssemblyRecord:
        """Apply a partial update; only supplied fields change.

        An explicit None clears an optional column and is rejected for required ones.

        Args:
            assembly_id: Assembly identifier.
            last_updated_by: Operator performing the update.
            changes: Supplied field values keyed by column name.

        Returns:
            AssemblyRecord: Updated assembly.

        Raises:
            ValueError: Raised when inputs are invalid.
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when persistence fails.
        """

        current_assembly = self.assembly_get(assembly_id)
        normalized_operator = _assembly_validate_non_empty_text(last_updated_by, "last_updated_by")
        if "status" in changes:
            raise ValueError("status cannot be changed by update; use archive")

        null_required_fields = sorted(
            field_name
            for field_name in _ASSEMBLY_REQUIRED_UPDATE_FIELDS
            if field_name in changes and changes[field_name] is None
        )
        if null_required_fields:
            raise ValueError(f"fields cannot be null: {', '.join(null_required_fields)}")

        normalized_changes = dict(changes)
        if "type" in normalized_changes:
            normalized_changes["type"] = _assembly_validate_type(normalized_changes["type"])
        for text_field in ("name", "location"):
            if text_field in normalized_changes:
                normalized_changes[text_field] = _assembly_validate_non_empty_text(
                    normalized_changes[text_field], text_field
                )
        if "max_participants" in normalized_changes:
            _assembly_validate_max_participants(normalized_changes["max_participants"])
        _assembly_validate_date_range(
            normalized_changes.get("start_date", current_assembly.start_date),
            normalized_changes.get("end_date", current_assembly.end_date),
        )

        return self._assembly_repository.db_assembly_update(
            assembly_id=current_assembly.assembly_id,
            changes=normalized_changes,
            last_updated_by=normalized_operator,
        )

    def assembly_archive(self, assembly_id: str, last_updated_by: str) -> AssemblyRecord:
        """Archive one active assembly and close its registration.

        Args:
            assembly_id: Assembly identifier.
            last_updated_by: Operator performing the archive.

        Returns:
            AssemblyRecord: Archived assembly.

        Raises:
            ValueError: Raised when inputs are invalid.
            LookupError: Raised when the assembly does not exist.
            AssemblyStateError: Raised when the assembly is not active.
            RuntimeError: Raised when persistence fails.
        """

        current_assembly = self.assembly_get(assembly_id)
        normalized_operator = _assembly_validate_non_empty_text(last_updated_by, "last_updated_by")
        if current_assembly.status != ASSEMBLY_STATUS_ACTIVE:
            raise AssemblyStateError("only active assemblies can be archived")

        archived_assembly = self._assembly_repository.db_assembly_update(
            assembly_id=current_assembly.assembly_id,
            changes={"status": ASSEMBLY_STATUS_ARCHIVED, "registration_open": False},
            last_updated_by=normalized_operator,
        )
        logger.info("assembly archived assembly_id=%s", archived_assembly.assembly_id)
        return archived_assembly

    def assembly_recompute_payment_required(self, assembly_id: str, last_updated_by: str) -> AssemblyRecord:
        """Reset the payment flag from the assembly type (`AG` requires payment).

        Args:
            assembly_id: Assembly identifier.
            last_updated_by: Operator performing the update.

        Returns:
            AssemblyRecord: Updated assembly.

        Raises:
            ValueError: Raised when inputs are invalid.
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when persistence fails.
        """

        current_assembly = self.assembly_get(assembly_id)
        return self._assembly_repository.db_assembly_update(
            assembly_id=current_assembly.assembly_id,
            changes={"payment_required": current_assembly.type == ASSEMBLY_TYPE_GENERAL},
            last_updated_by=_assembly_validate_non_empty_text(last_updated_by, "last_updated_by"),
        )

    def assembly_delete_with_related_data(
        self,
        assembly_id: str,
        deleted_by: str,
        confirmation_text: str,
    ) -> AssemblyDeletionResult:
        """Permanently delete one assembly with its registrations, modalities and roster.

        The confirmation text must equal the assembly name exactly.

        Args:
            assembly_id: Assembly identifier.
            deleted_by: Operator performing the deletion.
            confirmation_text: Text typed by the operator to confirm.

        Returns:
            AssemblyDeletionResult: Removed row counts.

        Raises:
            ValueError: Raised when inputs are invalid or confirmation does not match.
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when persistence fails.
        """

        current_assembly = self.assembly_get(assembly_id)
        normalized_operator = _assembly_validate_non_empty_text(deleted_by, "deleted_by")
        if confirmation_text != current_assembly.name:
            raise ValueError("confirmation text does not match assembly name")

        deletion_result = self._assembly_repository.db_assembly_delete_with_related_data(current_assembly.assembly_id)
        logger.warning(
            "assembly deleted assembly_id=%s deleted_by=%s registrations=%d modalities=%d participants=%d",
            deletion_result.assembly_id,
            normalized_operator,
            deletion_result.deleted_registrations,
            deletion_result.deleted_modalities,
            deletion_result.deleted_participants,
        )
        return deletion_result

    def assembly_get_report_data(self, assembly_id: str) -> AssemblyReportData:
        """Collect one assembly with its roster, registrations and modalities.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            AssemblyReportData: Assembly and related rows.

        Raises:
            ValueError: Raised when assembly_id is malformed.
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when database read fails.
        """

        current_assembly = self.assembly_get(assembly_id)
        return AssemblyReportData(
            assembly=current_assembly,
            participants=self._participant_repository.db_participant_list_for_assembly(
                assembly_id=current_assembly.assembly_id,
            ),
            registrations=self._registration_repository.db_registration_list_for_assembly(current_assembly.assembly_id),
            modalities=self._assembly_repository.db_registration_modality_list_for_assembly(current_assembly.assembly_id),
        )

    def participants_bulk_insert(self, assembly_id: str, requests: list[ParticipantInsertRequest]) -> int:
        """Import roster rows for one existing assembly.

        Args:
            assembly_id: Assembly identifier.
            requests: Roster rows to insert.

        Returns:
            int: Number of inserted rows.

        Raises:
            ValueError: Raised when inputs are invalid.
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when persistence fails.
        """

        current_assembly = self.assembly_get(assembly_id)
        for request in requests:
            _assembly_validate_non_empty_text(request.type, "type")

        inserted_count = self._participant_repository.db_participant_insert_many(
            assembly_id=current_assembly.assembly_id,
            requests=requests,
        )
        logger.info("participants imported assembly_id=%s count=%d", current_assembly.assembly_id, inserted_count)
        return inserted_count

    def participants_list(self, assembly_id: str, participant_type: str | None = None) -> list[ParticipantRecord]:
        """List roster rows of one assembly, optionally of one type.

        Args:
            assembly_id: Assembly identifier.
            participant_type: Optional type filter.

        Returns:
            list[ParticipantRecord]: Roster rows in import order.

        Raises:
            ValueError: Raised when inputs are invalid.
            RuntimeError: Raised when database read fails.
        """

        return self._participant_repository.db_participant_list_for_assembly(
            assembly_id=domain_parse_assembly_id(assembly_id),
            participant_type=participant_type,
        )


def _assembly_validate_non_empty_text(value: object, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    normalized_value = value.strip()
    if not normalized_value:
        raise ValueError(f"{field_name} must not be blank")
    return normalized_value


def _assembly_validate_type(value: object) -> str:
    if not isinstance(value, str):
        raise ValueError("type must be one of: AG, AGE")
    normalized_value = value.strip().upper()
    if normalized_value not in _ASSEMBLY_ALLOWED_TYPES:
        raise ValueError("type must be one of: AG, AGE")
    return normalized_value


def _assembly_validate_date_range(start_date: object, end_date: object) -> None:
    if isinstance(start_date, datetime) and isinstance(end_date, datetime) and end_date < start_date:
        raise ValueError("end_date must not be earlier than start_date")


def _assembly_validate_max_participants(value: object) -> None:
    if value is not None and (not isinstance(value, int) or value < 1):
        raise ValueError("max_participants must be a positive integer")


__all__ = [
    "ASSEMBLY_STATUS_ACTIVE",
    "ASSEMBLY_STATUS_ARCHIVED",
    "ASSEMBLY_TYPE_EXTRAORDINARY",
    "ASSEMBLY_TYPE_GENERAL",
    "AssemblyAdministrationService",
    "AssemblyReportData",
]
