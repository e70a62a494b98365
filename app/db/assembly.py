"""Database service for assembly lifecycle persistence and modality reads."""
# pylint: disable=duplicate-code

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from .interfaces import (
    AssemblyCreateRequest,
    AssemblyDeletionResult,
    AssemblyRecord,
    AssemblyRepositoryPort,
    RegistrationModalityRecord,
)


class SQLAlchemyAssemblyService(AssemblyRepositoryPort):
    """SQLAlchemy implementation for `assembly` and `registration_modality` operations."""

    _ASSEMBLY_UPDATABLE_COLUMNS = (
        "name",
        "type",
        "location",
        "start_date",
        "end_date",
        "status",
        "registration_open",
        "registration_deadline",
        "max_participants",
        "description",
        "payment_required",
    )

    _ASSEMBLY_RELATED_TABLES = (
        ("registrations", "ag_registration"),
        ("modalities", "registration_modality"),
        ("participants", "ag_participant"),
    )

    _ASSEMBLY_SELECT_COLUMNS = (
        "SELECT "
        "assembly_id, name, type, location, start_date, end_date, status, created_by, created_at_utc, "
        "last_updated_at_utc, last_updated_by, registration_open, registration_deadline, max_participants, "
        "description, payment_required "
        "FROM assembly "
    )

    def __init__(self, engine: Engine):
        """Initialize assembly database service.

        Args:
            engine: SQLAlchemy engine used for persistence and reads.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_assembly_list(self, limit: int, offset: int, status: str | None = None) -> list[AssemblyRecord]:
        """List assemblies ordered by newest creation first.

        Args:
            limit: Max rows to return.
            offset: Rows to skip.
            status: Optional status filter.

        Returns:
            list[AssemblyRecord]: Assembly rows.

        Raises:
            ValueError: Raised when pagination values are invalid.
            RuntimeError: Raised when database read fails.
        """

        if limit < 1:
            raise ValueError("limit must be greater than zero")
        if offset < 0:
            raise ValueError("offset must not be negative")

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(
                        self._ASSEMBLY_SELECT_COLUMNS
                        + "WHERE (CAST(:status AS text) IS NULL OR status = CAST(:status AS text)) "
                        + "ORDER BY created_at_utc desc, assembly_id desc LIMIT :limit OFFSET :offset"
                    ),
                    {"status": status, "limit": limit, "offset": offset},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("assembly list read failed") from error

        return [self._db_assembly_build_record(row) for row in rows]

    def db_assembly_get_by_id(self, assembly_id: UUID) -> AssemblyRecord | None:
        """Fetch one assembly by id.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            AssemblyRecord | None: Matching row or None.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        try:
            with self._engine.connect() as connection:
                row = connection.execute(
                    text(self._ASSEMBLY_SELECT_COLUMNS + "WHERE assembly_id = :assembly_id"),
                    {"assembly_id": assembly_id},
                ).mappings().first()
        except SQLAlchemyError as error:
            raise RuntimeError("assembly read failed") from error

        if row is None:
            return None
        return self._db_assembly_build_record(row)

    def db_assembly_get_next_upcoming(self, now_utc: datetime) -> AssemblyRecord | None:
        """Fetch the active assembly with the earliest start after `now_utc`.

        Args:
            now_utc: Reference timestamp.

        Returns:
            AssemblyRecord | None: Earliest upcoming active assembly or None.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        try:
            with self._engine.connect() as connection:
                row = connection.execute(
                    text(
                        self._ASSEMBLY_SELECT_COLUMNS
                        + "WHERE status = 'active' AND start_date > :now_utc "
                        + "ORDER BY start_date asc, assembly_id asc LIMIT 1"
                    ),
                    {"now_utc": now_utc},
                ).mappings().first()
        except SQLAlchemyError as error:
            raise RuntimeError("upcoming assembly read failed") from error

        if row is None:
            return None
        return self._db_assembly_build_record(row)

    def db_assembly_create(self, request: AssemblyCreateRequest) -> AssemblyRecord:
        """Insert one active assembly.

        Args:
            request: Assembly creation payload.

        Returns:
            AssemblyRecord: Created row.

        Raises:
            RuntimeError: Raised when persistence fails.
        """

        try:
            with self._engine.begin() as connection:
                row = connection.execute(
                    text(
                        "INSERT INTO assembly ("
                        "name, type, location, start_date, end_date, status, created_by, last_updated_by, "
                        "registration_open, registration_deadline, max_participants, description, payment_required"
                        ") VALUES ("
                        ":name, :type, :location, :start_date, :end_date, 'active', :created_by, :created_by, "
                        ":registration_open, :registration_deadline, :max_participants, :description, :payment_required"
                        ") "
                        "RETURNING "
                        "assembly_id, name, type, location, start_date, end_date, status, created_by, created_at_utc, "
                        "last_updated_at_utc, last_updated_by, registration_open, registration_deadline, "
                        "max_participants, description, payment_required"
                    ),
                    {
                        "name": request.name,
                        "type": request.type,
                        "location": request.location,
                        "start_date": request.start_date,
                        "end_date": request.end_date,
                        "created_by": request.created_by,
                        "registration_open": request.registration_open,
                        "registration_deadline": request.registration_deadline,
                        "max_participants": request.max_participants,
                        "description": request.description,
                        "payment_required": request.payment_required,
                    },
                ).mappings().one()
        except SQLAlchemyError as error:
            raise RuntimeError("assembly create failed") from error

        return self._db_assembly_build_record(row)

    def db_assembly_update(self, assembly_id: UUID, changes: dict[str, object], last_updated_by: str) -> AssemblyRecord:
        """Apply a partial update to one assembly.

        Args:
            assembly_id: Assembly identifier.
            changes: Column-to-value mapping of supplied fields.
            last_updated_by: Operator performing the update.

        Returns:
            AssemblyRecord: Updated row.

        Raises:
            ValueError: Raised when a change targets a non-updatable column.
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when persistence fails.
        """

        unsupported_columns = sorted(set(changes) - set(self._ASSEMBLY_UPDATABLE_COLUMNS))
        if unsupported_columns:
            raise ValueError(f"unsupported assembly columns: {', '.join(unsupported_columns)}")

        assignments = [f"{column_name} = :{column_name}" for column_name in self._ASSEMBLY_UPDATABLE_COLUMNS if column_name in changes]
        assignments.extend(["last_updated_at_utc = now()", "last_updated_by = :last_updated_by"])
        parameters: dict[str, object] = dict(changes)
        parameters["assembly_id"] = assembly_id
        parameters["last_updated_by"] = last_updated_by

        try:
            with self._engine.begin() as connection:
                row = connection.execute(
                    text(
                        "UPDATE assembly SET "
                        + ", ".join(assignments)
                        + " WHERE assembly_id = :assembly_id "
                        + "RETURNING "
                        + "assembly_id, name, type, location, start_date, end_date, status, created_by, created_at_utc, "
                        + "last_updated_at_utc, last_updated_by, registration_open, registration_deadline, "
                        + "max_participants, description, payment_required"
                    ),
                    parameters,
                ).mappings().first()
        except SQLAlchemyError as error:
            raise RuntimeError("assembly update failed") from error

        if row is None:
            raise LookupError("assembly not found")
        return self._db_assembly_build_record(row)

    def db_assembly_delete_with_related_data(self, assembly_id: UUID) -> AssemblyDeletionResult:
        """Delete one assembly and every row that references it in one transaction.

        Registrations go first so modality deletion never has to null their
        `modality_id`.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            AssemblyDeletionResult: Removed row counts.

        Raises:
            LookupError: Raised when the assembly does not exist.
            RuntimeError: Raised when persistence fails.
        """

        deleted_counts: dict[str, int] = {}
        try:
            with self._engine.begin() as connection:
                for count_key, table_name in self._ASSEMBLY_RELATED_TABLES + (("assembly", "assembly"),):
                    deleted_counts[count_key] = int(
                        connection.execute(
                            text(
                                f"WITH deleted_rows AS (DELETE FROM {table_name} "
                                "WHERE assembly_id = :assembly_id RETURNING 1) "
                                "SELECT count(*) FROM deleted_rows"
                            ),
                            {"assembly_id": assembly_id},
                        ).scalar_one()
                    )
                if deleted_counts["assembly"] == 0:
                    raise LookupError("assembly not found")
        except SQLAlchemyError as error:
            raise RuntimeError("assembly delete failed") from error

        return AssemblyDeletionResult(
            assembly_id=assembly_id,
            deleted_registrations=deleted_counts["registrations"],
            deleted_modalities=deleted_counts["modalities"],
            deleted_participants=deleted_counts["participants"],
        )

    def db_registration_modality_list_for_assembly(self, assembly_id: UUID) -> list[RegistrationModalityRecord]:
        """List registration modalities of one assembly.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            list[RegistrationModalityRecord]: Modality rows in creation order.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(
                        "SELECT modality_id, assembly_id, name, price, max_participants "
                        "FROM registration_modality "
                        "WHERE assembly_id = :assembly_id "
                        "ORDER BY created_at_utc asc, modality_id asc"
                    ),
                    {"assembly_id": assembly_id},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("registration modality read failed") from error

        return [
            RegistrationModalityRecord(
                modality_id=row["modality_id"],
                assembly_id=row["assembly_id"],
                name=row["name"],
                price=str(row["price"]),
                max_participants=row["max_participants"],
            )
            for row in rows
        ]

    def _db_assembly_build_record(self, row: Any) -> AssemblyRecord:
        """Map one row mapping into a typed assembly record.

        Args:
            row: SQLAlchemy row mapping.

        Returns:
            AssemblyRecord: Typed assembly row.

        Raises:
            KeyError: Raised when required columns are missing.
        """

        return AssemblyRecord(
            assembly_id=row["assembly_id"],
            name=row["name"],
            type=row["type"],
            location=row["location"],
            start_date=row["start_date"],
            end_date=row["end_date"],
            status=row["status"],
            created_by=row["created_by"],
            created_at_utc=row["created_at_utc"],
            last_updated_at_utc=row["last_updated_at_utc"],
            last_updated_by=row["last_updated_by"],
            registration_open=bool(row["registration_open"]),
            registration_deadline=row["registration_deadline"],
            max_participants=row["max_participants"],
            description=row["description"],
            payment_required=bool(row["payment_required"]),
        )
