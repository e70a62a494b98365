"""Typed interfaces for database-layer services.

All SQL and ORM access must remain in the db package and its submodules.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from app.domain import HealthStatus


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class AssemblyStateError(RuntimeError):
    """Raised when an assembly lifecycle transition is not allowed from its current status."""


@dataclass(frozen=True)
class AssemblyRecord:
    """Persistence model for one assembly row.

    Attributes:
        assembly_id: Unique assembly identifier.
        name: Display name.
        type: Assembly type (`AG` or `AGE`).
        location: Venue or city label.
        start_date: Assembly start timestamp in UTC.
        end_date: Assembly end timestamp in UTC.
        status: Lifecycle status (`active`, `archived`).
        created_by: Operator that created the row.
        created_at_utc: Creation timestamp in UTC.
        last_updated_at_utc: Last modification timestamp in UTC.
        last_updated_by: Operator of the last modification.
        registration_open: Whether new registrations are accepted.
        registration_deadline: Optional registration deadline in UTC.
        max_participants: Optional capacity limit.
        description: Optional free-text description.
        payment_required: Whether registrations require payment.
    """

    assembly_id: UUID
    name: str
    type: str
    location: str
    start_date: datetime
    end_date: datetime
    status: str
    created_by: str
    created_at_utc: datetime
    last_updated_at_utc: datetime
    last_updated_by: str
    registration_open: bool
    registration_deadline: datetime | None
    max_participants: int | None
    description: str | None
    payment_required: bool


@dataclass(frozen=True)
class AssemblyCreateRequest:
    """Input payload for one assembly creation.

    Attributes:
        name: Display name.
        type: Assembly type (`AG` or `AGE`).
        location: Venue or city label.
        start_date: Assembly start timestamp.
        end_date: Assembly end timestamp.
        created_by: Operator creating the row.
        registration_open: Whether registration starts open.
        registration_deadline: Optional registration deadline.
        max_participants: Optional capacity limit.
        description: Optional description.
        payment_required: Whether registrations require payment.
    """

    name: str
    type: str
    location: str
    start_date: datetime
    end_date: datetime
    created_by: str
    registration_open: bool
    registration_deadline: datetime | None
    max_participants: int | None
    description: str | None
    payment_required: bool


@dataclass(frozen=True)
class AssemblyDeletionResult:
    """Row counts removed by one assembly deletion.

    Attributes:
        assembly_id: Deleted assembly identifier.
        deleted_registrations: Registration rows removed.
        deleted_modalities: Registration modality rows removed.
        deleted_participants: Roster rows removed.
    """

    assembly_id: UUID
    deleted_registrations: int
    deleted_modalities: int
    deleted_participants: int


@dataclass(frozen=True)
class RegistrationModalityRecord:
    """Persistence model for one registration modality row.

    Attributes:
        modality_id: Unique modality identifier.
        assembly_id: Owning assembly identifier.
        name: Modality display name.
        price: Decimal price rendered as string.
        max_participants: Optional modality capacity.
    """

    modality_id: UUID
    assembly_id: UUID
    name: str
    price: str
    max_participants: int | None


@dataclass(frozen=True)
class ParticipantRecord:
    """Persistence model for one expected-participant roster row.

    Attributes:
        ag_participant_id: Unique row identifier.
        assembly_id: Assembly the roster row was imported for.
        type: Participant type (`comite`, `eb`, `cr`, ...).
        participant_id: External business key, not unique across rows.
        name: Participant or committee name.
        role: Optional role label.
        status: Optional free-text membership status.
        escola: Optional school name.
        regional: Optional regional label.
        cidade: Optional city.
        uf: Optional federative unit.
        ag_filiacao: Optional affiliation assembly label.
        created_at_utc: Import timestamp in UTC.
    """

    ag_participant_id: UUID
    assembly_id: UUID
    type: str
    participant_id: str | None
    name: str | None
    role: str | None
    status: str | None
    escola: str | None
    regional: str | None
    cidade: str | None
    uf: str | None
    ag_filiacao: str | None
    created_at_utc: datetime


@dataclass(frozen=True)
class ParticipantInsertRequest:
    """Input payload for one roster row in a bulk participant import.

    Attributes:
        type: Participant type.
        participant_id: External business key.
        name: Participant or committee name.
        role: Optional role label.
        status: Optional membership status.
        escola: Optional school name.
        regional: Optional regional label.
        cidade: Optional city.
        uf: Optional federative unit.
        ag_filiacao: Optional affiliation assembly label.
    """

    type: str
    participant_id: str
    name: str
    role: str | None = None
    status: str | None = None
    escola: str | None = None
    regional: str | None = None
    cidade: str | None = None
    uf: str | None = None
    ag_filiacao: str | None = None


@dataclass(frozen=True)
class RegistrationRecord:
    """Persistence model for one assembly registration row.

    Attributes:
        registration_id: Unique registration identifier.
        assembly_id: Assembly the registration belongs to.
        participant_id: Optional external participant key.
        participant_type: Optional declared participant type.
        participant_role: Optional declared role.
        status: Registration status (`pending`, `approved`, `cancelled`, `rejected`, ...).
        modality_id: Optional registration modality identifier.
        created_at_utc: Submission timestamp in UTC.
    """

    registration_id: UUID
    assembly_id: UUID
    participant_id: str | None
    participant_type: str | None
    participant_role: str | None
    status: str
    modality_id: UUID | None
    created_at_utc: datetime


class AssemblyRepositoryPort(Protocol):
    """Port definition for assembly and modality persistence."""

    def db_assembly_list(self, limit: int, offset: int, status: str | None = None) -> list[AssemblyRecord]:
        """List assemblies ordered by newest creation first.

        Args:
            limit: Max rows to return.
            offset: Rows to skip.
            status: Optional status filter.

        Returns:
            list[AssemblyRecord]: Assembly rows.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_assembly_get_by_id(self, assembly_id: UUID) -> AssemblyRecord | None:
        """Fetch one assembly by id.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            AssemblyRecord | None: Matching row or None.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_assembly_get_next_upcoming(self, now_utc: datetime) -> AssemblyRecord | None:
        """Fetch the active assembly with the earliest start after `now_utc`.

        Args:
            now_utc: Reference timestamp.

        Returns:
            AssemblyRecord | None: Earliest upcoming active assembly or None.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_assembly_create(self, request: AssemblyCreateRequest) -> AssemblyRecord:
        """Insert one active assembly.

        Args:
            request: Assembly creation payload.

        Returns:
            AssemblyRecord: Created row.

        Raises:
            RuntimeError: Raised when persistence fails.
        """

    def db_assembly_update(self, assembly_id: UUID, changes: dict[str, object], last_updated_by: str) -> AssemblyRecord:
        """Apply a partial update to one assembly.

        Args:
            assembly_id: Assembly identifier.
            changes: Column-to-value mapping of supplied fields.
            last_updated_by: Operator performing the update.

        Returns:
            AssemblyRecord: Updated row.

        Raises:
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when persistence fails.
        """

    def db_assembly_delete_with_related_data(self, assembly_id: UUID) -> AssemblyDeletionResult:
        """Delete one assembly with its registrations, modalities and roster rows.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            AssemblyDeletionResult: Removed row counts.

        Raises:
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when persistence fails.
        """

    def db_registration_modality_list_for_assembly(self, assembly_id: UUID) -> list[RegistrationModalityRecord]:
        """List registration modalities of one assembly.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            list[RegistrationModalityRecord]: Modality rows.

        Raises:
            RuntimeError: Raised when database read fails.
        """


class ParticipantRepositoryPort(Protocol):
    """Port definition for expected-participant roster reads and imports."""

    def db_participant_list_for_assembly(
        self,
        assembly_id: UUID,
        participant_type: str | None = None,
    ) -> list[ParticipantRecord]:
        """List roster rows scoped to one assembly in import order.

        Args:
            assembly_id: Assembly identifier.
            participant_type: Optional type filter.

        Returns:
            list[ParticipantRecord]: Roster rows.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_participant_list_by_type(self, participant_type: str) -> list[ParticipantRecord]:
        """List roster rows of one type across every assembly in import order.

        Args:
            participant_type: Participant type.

        Returns:
            list[ParticipantRecord]: Roster rows.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_participant_insert_many(self, assembly_id: UUID, requests: list[ParticipantInsertRequest]) -> int:
        """Insert roster rows for one assembly.

        Args:
            assembly_id: Assembly identifier.
            requests: Roster rows to insert.

        Returns:
            int: Number of inserted rows.

        Raises:
            RuntimeError: Raised when persistence fails.
        """


class RegistrationRepositoryPort(Protocol):
    """Port definition for registration reads."""

    def db_registration_list_for_assembly(self, assembly_id: UUID) -> list[RegistrationRecord]:
        """List registrations of one assembly in submission order.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            list[RegistrationRecord]: Registration rows.

        Raises:
            RuntimeError: Raised when database read fails.
        """
