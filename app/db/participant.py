"""Database service for expected-participant roster reads and bulk imports."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from .interfaces import ParticipantInsertRequest, ParticipantRecord, ParticipantRepositoryPort


class SQLAlchemyParticipantService(ParticipantRepositoryPort):
    """SQLAlchemy implementation for `ag_participant` roster operations.

    Reads are ordered by import time and row id so first-seen deduplication in
    the analytics layer is deterministic across calls.
    """

    _PARTICIPANT_SELECT_COLUMNS = (
        "SELECT "
        "ag_participant_id, assembly_id, type, participant_id, name, role, status, "
        "escola, regional, cidade, uf, ag_filiacao, created_at_utc "
        "FROM ag_participant "
    )

    _PARTICIPANT_LIST_FOR_ASSEMBLY_QUERY = (
        _PARTICIPANT_SELECT_COLUMNS
        + "WHERE assembly_id = :assembly_id "
        + "AND (CAST(:participant_type AS text) IS NULL OR type = CAST(:participant_type AS text)) "
        + "ORDER BY created_at_utc asc, ag_participant_id asc"
    )

    _PARTICIPANT_LIST_BY_TYPE_QUERY = (
        _PARTICIPANT_SELECT_COLUMNS + "WHERE type = :participant_type ORDER BY created_at_utc asc, ag_participant_id asc"
    )

    def __init__(self, engine: Engine):
        """Initialize participant roster database service.

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
            ValueError: Raised when the type filter is blank.
            RuntimeError: Raised when database read fails.
        """

        normalized_type = None
        if participant_type is not None:
            normalized_type = self._db_participant_validate_non_empty_text(participant_type, "participant_type")

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(self._PARTICIPANT_LIST_FOR_ASSEMBLY_QUERY),
                    {"assembly_id": assembly_id, "participant_type": normalized_type},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("participant roster read failed") from error

        return [self._db_participant_build_record(row) for row in rows]

    def db_participant_list_by_type(self, participant_type: str) -> list[ParticipantRecord]:
        """List roster rows of one type across every assembly in import order.

        Args:
            participant_type: Participant type.

        Returns:
            list[ParticipantRecord]: Roster rows.

        Raises:
            ValueError: Raised when participant_type is blank.
            RuntimeError: Raised when database read fails.
        """

        normalized_type = self._db_participant_validate_non_empty_text(participant_type, "participant_type")

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(self._PARTICIPANT_LIST_BY_TYPE_QUERY),
                    {"participant_type": normalized_type},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("participant roster read failed") from error

        return [self._db_participant_build_record(row) for row in rows]

    def db_participant_insert_many(self, assembly_id: UUID, requests: list[ParticipantInsertRequest]) -> int:
        """Insert roster rows for one assembly in a single transaction.

        Args:
            assembly_id: Assembly identifier.
            requests: Roster rows to insert.

        Returns:
            int: Number of inserted rows.

        Raises:
            RuntimeError: Raised when persistence fails.
        """

        if not requests:
            return 0

        parameters = [
            {
                "assembly_id": assembly_id,
                "type": request.type,
                "participant_id": request.participant_id,
                "name": request.name,
                "role": request.role,
                "status": request.status,
                "escola": request.escola,
                "regional": request.regional,
                "cidade": request.cidade,
                "uf": request.uf,
                "ag_filiacao": request.ag_filiacao,
            }
            for request in requests
        ]

        try:
            with self._engine.begin() as connection:
                connection.execute(
                    text(
                        "INSERT INTO ag_participant ("
                        "assembly_id, type, participant_id, name, role, status, "
                        "escola, regional, cidade, uf, ag_filiacao"
                        ") VALUES ("
                        ":assembly_id, :type, :participant_id, :name, :role, :status, "
                        ":escola, :regional, :cidade, :uf, :ag_filiacao"
                        ")"
                    ),
                    parameters,
                )
        except SQLAlchemyError as error:
            raise RuntimeError("participant bulk insert failed") from error

        return len(parameters)

    def _db_participant_build_record(self, row: Any) -> ParticipantRecord:
        """Map one row mapping into a typed roster record.

        Args:
            row: SQLAlchemy row mapping.

        Returns:
            ParticipantRecord: Typed roster row.

        Raises:
            KeyError: Raised when required columns are missing.
        """

        return ParticipantRecord(
            ag_participant_id=row["ag_participant_id"],
            assembly_id=row["assembly_id"],
            type=row["type"],
            participant_id=row["participant_id"],
            name=row["name"],
            role=row["role"],
            status=row["status"],
            escola=row["escola"],
            regional=row["regional"],
            cidade=row["cidade"],
            uf=row["uf"],
            ag_filiacao=row["ag_filiacao"],
            created_at_utc=row["created_at_utc"],
        )

    def _db_participant_validate_non_empty_text(self, value: str, field_name: str) -> str:
        normalized_value = value.strip()
        if not normalized_value:
            raise ValueError(f"{field_name} must not be blank")
        return normalized_value
