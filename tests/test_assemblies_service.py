"""Tests for assembly lifecycle validation and roster import."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from app.assemblies import AssemblyAdministrationService
from app.db import (
    AssemblyDeletionResult,
    AssemblyRecord,
    AssemblyStateError,
    ParticipantInsertRequest,
    RegistrationModalityRecord,
    RegistrationRecord,
)

_ASSEMBLY_ID = UUID("0b6f3a2c-7d8e-4f90-a1b2-c3d4e5f60718")
_START = datetime(2026, 11, 20, 9, 0, tzinfo=timezone.utc)
_END = _START + timedelta(days=3)
_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _assembly(**overrides) -> AssemblyRecord:
    record = AssemblyRecord(
        assembly_id=_ASSEMBLY_ID,
        name="AG Nacional",
        type="AG",
        location="Salvador",
        start_date=_START,
        end_date=_END,
        status="active",
        created_by="admin",
        created_at_utc=_NOW,
        last_updated_at_utc=_NOW,
        last_updated_by="admin",
        registration_open=True,
        registration_deadline=None,
        max_participants=None,
        description=None,
        payment_required=True,
    )
    return dataclasses.replace(record, **overrides)


def _modality(assembly_id: UUID) -> RegistrationModalityRecord:
    return RegistrationModalityRecord(
        modality_id=UUID("5a4b3c2d-1e0f-4a9b-8c7d-6e5f4a3b2c1d"),
        assembly_id=assembly_id,
        name="Presencial",
        price="150.00",
        max_participants=200,
    )


class _AssemblyRepositoryStub:
    """In-memory assembly repository capturing create and update payloads."""

    def __init__(self, stored: AssemblyRecord | None = None):
        self.stored = stored
        self.created_requests: list = []
        self.updates: list[tuple] = []
        self.upcoming_queries: list[datetime] = []
        self.deleted_ids: list[UUID] = []

    def db_assembly_list(self, limit, offset, status=None):
        self.list_arguments = (limit, offset, status)
        return [] if self.stored is None else [self.stored]

    def db_assembly_get_by_id(self, assembly_id):
        if self.stored is None or self.stored.assembly_id != assembly_id:
            return None
        return self.stored

    def db_assembly_get_next_upcoming(self, now_utc):
        self.upcoming_queries.append(now_utc)
        return self.stored

    def db_assembly_create(self, request):
        self.created_requests.append(request)
        self.stored = _assembly(
            name=request.name,
            type=request.type,
            location=request.location,
            start_date=request.start_date,
            end_date=request.end_date,
            created_by=request.created_by,
            registration_open=request.registration_open,
            max_participants=request.max_participants,
            payment_required=request.payment_required,
        )
        return self.stored

    def db_assembly_update(self, assembly_id, changes, last_updated_by):
        self.updates.append((assembly_id, dict(changes), last_updated_by))
        self.stored = dataclasses.replace(self.stored, last_updated_by=last_updated_by, **changes)
        return self.stored

    def db_assembly_delete_with_related_data(self, assembly_id):
        self.deleted_ids.append(assembly_id)
        return AssemblyDeletionResult(
            assembly_id=assembly_id,
            deleted_registrations=4,
            deleted_modalities=2,
            deleted_participants=9,
        )

    def db_registration_modality_list_for_assembly(self, assembly_id):
        return [_modality(assembly_id)]


class _ParticipantRepositoryStub:
    def __init__(self):
        self.inserted: list[tuple] = []
        self.list_calls: list[tuple] = []

    def db_participant_list_for_assembly(self, assembly_id, participant_type=None):
        self.list_calls.append((assembly_id, participant_type))
        return []

    def db_participant_list_by_type(self, participant_type):
        _ = participant_type
        return []

    def db_participant_insert_many(self, assembly_id, requests):
        self.inserted.append((assembly_id, list(requests)))
        return len(requests)


class _RegistrationRepositoryStub:
    def __init__(self):
        self.list_calls: list[UUID] = []

    def db_registration_list_for_assembly(self, assembly_id):
        self.list_calls.append(assembly_id)
        return [
            RegistrationRecord(
                registration_id=UUID("9c8b7a6d-5e4f-4a3b-9c2d-1e0f9a8b7c6d"),
                assembly_id=assembly_id,
                participant_id="BR001",
                participant_type="comite",
                participant_role=None,
                status="approved",
                modality_id=None,
                created_at_utc=_NOW,
            )
        ]


def _build_service(stored: AssemblyRecord | None = None):
    assembly_repository = _AssemblyRepositoryStub(stored=stored)
    participant_repository = _ParticipantRepositoryStub()
    service = AssemblyAdministrationService(
        assembly_repository=assembly_repository,
        participant_repository=participant_repository,
        registration_repository=_RegistrationRepositoryStub(),
        clock=lambda: _NOW,
    )
    return service, assembly_repository, participant_repository


@pytest.mark.parametrize(("assembly_type", "expected_payment"), [("AG", True), ("age", False)])
def test_create_defaults_payment_required_from_type(assembly_type: str, expected_payment: bool) -> None:
    service, assembly_repository, _ = _build_service()

    created = service.assembly_create(
        name="  Assembleia  ",
        assembly_type=assembly_type,
        location="Salvador",
        start_date=_START,
        end_date=_END,
        created_by="admin",
    )

    request = assembly_repository.created_requests[0]
    assert request.name == "Assembleia"
    assert request.type == assembly_type.upper()
    assert request.payment_required is expected_payment
    assert request.registration_open is True
    assert created.payment_required is expected_payment


def test_create_keeps_explicit_payment_flag() -> None:
    service, assembly_repository, _ = _build_service()

    service.assembly_create(
        name="AG",
        assembly_type="AG",
        location="Natal",
        start_date=_START,
        end_date=_END,
        created_by="admin",
        payment_required=False,
    )

    assert assembly_repository.created_requests[0].payment_required is False


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"assembly_type": "XYZ"}, "type must be one of"),
        ({"end_date": _START - timedelta(days=1)}, "end_date must not be earlier"),
        ({"max_participants": 0}, "max_participants must be a positive integer"),
        ({"name": "   "}, "name must not be blank"),
    ],
)
def test_create_rejects_invalid_input(overrides: dict, message: str) -> None:
    service, assembly_repository, _ = _build_service()
    arguments = {
        "name": "AG",
        "assembly_type": "AG",
        "location": "Natal",
        "start_date": _START,
        "end_date": _END,
        "created_by": "admin",
    }
    arguments.update(overrides)

    with pytest.raises(ValueError, match=message):
        service.assembly_create(**arguments)
    assert assembly_repository.created_requests == []


def test_get_raises_lookup_error_for_unknown_assembly() -> None:
    service, _, _ = _build_service()

    with pytest.raises(LookupError):
        service.assembly_get(str(_ASSEMBLY_ID))


def test_update_applies_only_supplied_fields() -> None:
    service, assembly_repository, _ = _build_service(stored=_assembly())

    updated = service.assembly_update(
        assembly_id=str(_ASSEMBLY_ID),
        last_updated_by="editor",
        changes={"location": " Fortaleza ", "type": "age"},
    )

    assert assembly_repository.updates == [(_ASSEMBLY_ID, {"location": "Fortaleza", "type": "AGE"}, "editor")]
    assert updated.location == "Fortaleza"
    assert updated.last_updated_by == "editor"


def test_update_validates_date_range_against_current_values() -> None:
    service, assembly_repository, _ = _build_service(stored=_assembly())

    with pytest.raises(ValueError, match="end_date"):
        service.assembly_update(
            assembly_id=str(_ASSEMBLY_ID),
            last_updated_by="editor",
            changes={"start_date": _END + timedelta(days=1)},
        )
    assert assembly_repository.updates == []


@pytest.mark.parametrize(
    "changes",
    [
        {"name": None},
        {"location": None},
        {"type": None},
        {"start_date": None},
        {"end_date": None},
        {"registration_open": None},
        {"payment_required": None},
        {"name": None, "start_date": None},
    ],
)
def test_update_rejects_null_for_required_fields(changes: dict) -> None:
    """A null required column is a validation error, never a stored `"None"` or a null insert."""

    service, assembly_repository, _ = _build_service(stored=_assembly())

    with pytest.raises(ValueError, match="fields cannot be null"):
        service.assembly_update(assembly_id=str(_ASSEMBLY_ID), last_updated_by="editor", changes=changes)
    assert assembly_repository.updates == []


def test_update_rejects_non_text_name() -> None:
    service, assembly_repository, _ = _build_service(stored=_assembly())

    with pytest.raises(ValueError, match="name must be a string"):
        service.assembly_update(assembly_id=str(_ASSEMBLY_ID), last_updated_by="editor", changes={"name": 42})
    assert assembly_repository.updates == []


def test_update_allows_clearing_optional_fields() -> None:
    service, assembly_repository, _ = _build_service(
        stored=_assembly(max_participants=300, description="Anual", registration_deadline=_START)
    )

    updated = service.assembly_update(
        assembly_id=str(_ASSEMBLY_ID),
        last_updated_by="editor",
        changes={"max_participants": None, "description": None, "registration_deadline": None},
    )

    assert assembly_repository.updates[0][1] == {
        "max_participants": None,
        "description": None,
        "registration_deadline": None,
    }
    assert updated.max_participants is None
    assert updated.description is None


def test_update_rejects_status_changes() -> None:
    service, _, _ = _build_service(stored=_assembly())

    with pytest.raises(ValueError, match="status cannot be changed"):
        service.assembly_update(assembly_id=str(_ASSEMBLY_ID), last_updated_by="editor", changes={"status": "archived"})


def test_archive_closes_registration() -> None:
    service, assembly_repository, _ = _build_service(stored=_assembly())

    archived = service.assembly_archive(assembly_id=str(_ASSEMBLY_ID), last_updated_by="admin")

    assert archived.status == "archived"
    assert archived.registration_open is False
    assert assembly_repository.updates[0][1] == {"status": "archived", "registration_open": False}


def test_archive_rejects_already_archived_assembly() -> None:
    service, _, _ = _build_service(stored=_assembly(status="archived"))

    with pytest.raises(AssemblyStateError):
        service.assembly_archive(assembly_id=str(_ASSEMBLY_ID), last_updated_by="admin")


def test_recompute_payment_required_follows_type() -> None:
    service, _, _ = _build_service(stored=_assembly(type="AGE", payment_required=True))

    updated = service.assembly_recompute_payment_required(assembly_id=str(_ASSEMBLY_ID), last_updated_by="admin")

    assert updated.payment_required is False


def test_next_upcoming_uses_injected_clock() -> None:
    service, assembly_repository, _ = _build_service(stored=_assembly())

    upcoming = service.assembly_get_next_upcoming()

    assert upcoming is not None
    assert assembly_repository.upcoming_queries == [_NOW]


def test_list_active_only_filters_by_status() -> None:
    service, assembly_repository, _ = _build_service(stored=_assembly())

    service.assembly_list(limit=10, offset=0, active_only=True)

    assert assembly_repository.list_arguments == (10, 0, "active")


def test_bulk_insert_requires_existing_assembly() -> None:
    service, _, participant_repository = _build_service()

    with pytest.raises(LookupError):
        service.participants_bulk_insert(
            assembly_id=str(_ASSEMBLY_ID),
            requests=[ParticipantInsertRequest(type="comite", participant_id="BR001", name="Comitê")],
        )
    assert participant_repository.inserted == []


def test_bulk_insert_forwards_rows_and_returns_count() -> None:
    service, _, participant_repository = _build_service(stored=_assembly())
    requests = [
        ParticipantInsertRequest(type="comite", participant_id="BR001", name="Comitê A", status="Pleno"),
        ParticipantInsertRequest(type="eb", participant_id="EB01", name="Maria", role="Presidente"),
    ]

    inserted_count = service.participants_bulk_insert(assembly_id=str(_ASSEMBLY_ID), requests=requests)

    assert inserted_count == 2
    assert participant_repository.inserted == [(_ASSEMBLY_ID, requests)]


def test_bulk_insert_rejects_blank_type() -> None:
    service, _, participant_repository = _build_service(stored=_assembly())

    with pytest.raises(ValueError, match="type must not be blank"):
        service.participants_bulk_insert(
            assembly_id=str(_ASSEMBLY_ID),
            requests=[ParticipantInsertRequest(type=" ", participant_id="X", name="X")],
        )
    assert participant_repository.inserted == []


def test_delete_requires_confirmation_matching_assembly_name() -> None:
    service, assembly_repository, _ = _build_service(stored=_assembly())

    with pytest.raises(ValueError, match="confirmation text does not match"):
        service.assembly_delete_with_related_data(
            assembly_id=str(_ASSEMBLY_ID),
            deleted_by="admin",
            confirmation_text="ag nacional",
        )
    assert assembly_repository.deleted_ids == []


def test_delete_returns_removed_row_counts() -> None:
    service, assembly_repository, _ = _build_service(stored=_assembly())

    deletion_result = service.assembly_delete_with_related_data(
        assembly_id=str(_ASSEMBLY_ID),
        deleted_by="admin",
        confirmation_text="AG Nacional",
    )

    assert assembly_repository.deleted_ids == [_ASSEMBLY_ID]
    assert deletion_result.deleted_registrations == 4
    assert deletion_result.deleted_modalities == 2
    assert deletion_result.deleted_participants == 9


def test_delete_raises_lookup_error_for_unknown_assembly() -> None:
    service, assembly_repository, _ = _build_service()

    with pytest.raises(LookupError):
        service.assembly_delete_with_related_data(
            assembly_id=str(_ASSEMBLY_ID),
            deleted_by="admin",
            confirmation_text="AG Nacional",
        )
    assert assembly_repository.deleted_ids == []


def test_delete_rejects_blank_operator() -> None:
    service, assembly_repository, _ = _build_service(stored=_assembly())

    with pytest.raises(ValueError, match="deleted_by must not be blank"):
        service.assembly_delete_with_related_data(
            assembly_id=str(_ASSEMBLY_ID),
            deleted_by="  ",
            confirmation_text="AG Nacional",
        )
    assert assembly_repository.deleted_ids == []


def test_report_data_collects_related_rows() -> None:
    service, _, participant_repository = _build_service(stored=_assembly())

    report_data = service.assembly_get_report_data(str(_ASSEMBLY_ID))

    assert report_data.assembly.assembly_id == _ASSEMBLY_ID
    assert report_data.participants == []
    assert [registration.participant_id for registration in report_data.registrations] == ["BR001"]
    assert [modality.name for modality in report_data.modalities] == ["Presencial"]
    assert participant_repository.list_calls == [(_ASSEMBLY_ID, None)]


def test_report_data_raises_lookup_error_for_unknown_assembly() -> None:
    service, _, participant_repository = _build_service()

    with pytest.raises(LookupError):
        service.assembly_get_report_data(str(_ASSEMBLY_ID))
    assert participant_repository.list_calls == []
