"""Database layer package for all SQL and persistence boundaries."""

from .assembly import SQLAlchemyAssemblyService
from .health import SQLAlchemyDatabaseHealthService
from .interfaces import (
	AssemblyCreateRequest,
	AssemblyDeletionResult,
	AssemblyRecord,
	AssemblyRepositoryPort,
	AssemblyStateError,
	DatabaseHealthPort,
	ParticipantInsertRequest,
	ParticipantRecord,
	ParticipantRepositoryPort,
	RegistrationModalityRecord,
	RegistrationRecord,
	RegistrationRepositoryPort,
)
from .participant import SQLAlchemyParticipantService
from .registration import SQLAlchemyRegistrationService
from .session import db_create_engine

__all__ = [
	"AssemblyCreateRequest",
	"AssemblyDeletionResult",
	"AssemblyRecord",
	"AssemblyRepositoryPort",
	"AssemblyStateError",
	"DatabaseHealthPort",
	"ParticipantInsertRequest",
	"ParticipantRecord",
	"ParticipantRepositoryPort",
	"RegistrationModalityRecord",
	"RegistrationRecord",
	"RegistrationRepositoryPort",
	"SQLAlchemyAssemblyService",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyParticipantService",
	"SQLAlchemyRegistrationService",
	"db_create_engine",
]
