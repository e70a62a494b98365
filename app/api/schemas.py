"""Request body models for assembly administration endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelCaseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class AssemblyCreatePayload(_CamelCaseModel):
    """Body of `POST /assemblies`."""

    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    location: str = Field(min_length=1)
    start_date: datetime
    end_date: datetime
    created_by: str = Field(min_length=1)
    registration_open: bool | None = None
    registration_deadline: datetime | None = None
    max_participants: int | None = Field(default=None, ge=1)
    description: str | None = None
    payment_required: bool | None = None


class AssemblyUpdatePayload(_CamelCaseModel):
    """Body of `PATCH /assemblies/{assembly_id}`; omitted fields stay unchanged."""

    last_updated_by: str = Field(min_length=1)
    name: str | None = None
    type: str | None = None
    location: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    registration_open: bool | None = None
    registration_deadline: datetime | None = None
    max_participants: int | None = Field(default=None, ge=1)
    description: str | None = None
    payment_required: bool | None = None


class AssemblyOperatorPayload(_CamelCaseModel):
    """Body of lifecycle actions that only record the acting operator."""

    last_updated_by: str = Field(min_length=1)


class AssemblyDeletePayload(_CamelCaseModel):
    """Body of `DELETE /assemblies/{assembly_id}`; `confirmationText` must equal the assembly name."""

    deleted_by: str = Field(min_length=1)
    confirmation_text: str


class ParticipantImportRow(_CamelCaseModel):
    """One roster row of a bulk participant import."""

    type: str = Field(min_length=1)
    participant_id: str
    name: str
    role: str | None = None
    status: str | None = None
    escola: str | None = None
    regional: str | None = None
    cidade: str | None = None
    uf: str | None = None
    ag_filiacao: str | None = None


class ParticipantImportPayload(_CamelCaseModel):
    """Body of `POST /assemblies/{assembly_id}/participants`."""

    participants: list[ParticipantImportRow]
