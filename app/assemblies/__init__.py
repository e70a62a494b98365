"""Assembly administration package for lifecycle rules and roster imports."""

from .service import (
    ASSEMBLY_STATUS_ACTIVE,
    ASSEMBLY_STATUS_ARCHIVED,
    ASSEMBLY_TYPE_EXTRAORDINARY,
    ASSEMBLY_TYPE_GENERAL,
    AssemblyAdministrationService,
    AssemblyReportData,
)

__all__ = [
    "ASSEMBLY_STATUS_ACTIVE",
    "ASSEMBLY_STATUS_ARCHIVED",
    "ASSEMBLY_TYPE_EXTRAORDINARY",
    "ASSEMBLY_TYPE_GENERAL",
    "AssemblyAdministrationService",
    "AssemblyReportData",
]
