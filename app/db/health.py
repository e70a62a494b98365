"""Database health service for connectivity and schema readiness checks."""

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from app.domain import HealthStatus

from .interfaces import DatabaseHealthPort


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Database health service that also verifies the registration schema is migrated."""

    _REQUIRED_TABLES = ("assembly", "ag_participant", "ag_registration")

    def __init__(self, engine: Engine):
        """Initialize database health service.

        Args:
            engine: SQLAlchemy engine used for connectivity checks.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the target database URL with the password hidden."""

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Verify connectivity and presence of the registration tables.

        Returns:
            HealthStatus: `ok` when all required tables exist, `degraded` otherwise.

        Raises:
            ConnectionError: Raised when the database cannot be reached.
        """

        try:
            with self._engine.connect() as connection:
                missing_tables = []
                for table_name in self._REQUIRED_TABLES:
                    table_exists = connection.execute(
                        text("SELECT to_regclass(:table_name) IS NOT NULL"),
                        {"table_name": table_name},
                    ).scalar_one()
                    if not table_exists:
                        missing_tables.append(table_name)
        except SQLAlchemyError as error:
            raise ConnectionError("database connectivity check failed") from error

        if missing_tables:
            return HealthStatus(status="degraded", detail=f"missing tables: {', '.join(missing_tables)}")
        return HealthStatus(status="ok", detail="database connectivity and schema verified")
