"""Database service for assembly registration reads."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from .interfaces import RegistrationRecord, RegistrationRepositoryPort


class SQLAlchemyRegistrationService(RegistrationRepositoryPort):
    """SQLAlchemy implementation for `ag_registration` reads."""

    def __init__(self, engine: Engine):
        """Initialize registration database service.

        Args:
            engine: SQLAlchemy engine used for reads.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_registration_list_for_assembly(self, assembly_id: UUID) -> list[RegistrationRecord]:
        """List registrations of one assembly in submission order.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            list[RegistrationRecord]: Registration rows, every status included.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(
                        "SELECT "
                        "registration_id, assembly_id, participant_id, participant_type, participant_role, "
                        "status, modality_id, created_at_utc "
                        "FROM ag_registration "
                        "WHERE assembly_id = :assembly_id "
                        "ORDER BY created_at_utc asc, registration_id asc"
                    ),
                    {"assembly_id": assembly_id},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("registration read failed") from error

        return [
            RegistrationRecord(
                registration_id=row["registration_id"],
                assembly_id=row["assembly_id"],
                participant_id=row["participant_id"],
                participant_type=row["participant_type"],
                participant_role=row["participant_role"],
                status=row["status"],
                modality_id=row["modality_id"],
                created_at_utc=row["created_at_utc"],
            )
            for row in rows
        ]
