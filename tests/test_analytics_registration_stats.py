"""Regression tests for registration counters and capacity flags."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from app.analytics import analytics_build_registration_stats
from app.db import AssemblyRecord, ParticipantRecord, RegistrationModalityRecord, RegistrationRecord

_ASSEMBLY_ID = UUID("1d7c6a2e-5b0a-4c55-9a53-7e1e2b3c4d5e")
_NOW = datetime(2026, 5, 1, tzinfo=timezone.utc)
_MODALITY_FULL = UUID("00000000-0000-4000-8000-000000000001")
_MODALITY_OPEN = UUID("00000000-0000-4000-8000-000000000002")


def _assembly(max_participants: int | None) -> AssemblyRecord:
    return AssemblyRecord(
        assembly_id=_ASSEMBLY_ID,
        name="AG 2026",
        type="AG",
        location="Brasília",
        start_date=_NOW,
        end_date=_NOW,
        status="active",
        created_by="admin",
        created_at_utc=_NOW,
        last_updated_at_utc=_NOW,
        last_updated_by="admin",
        registration_open=True,
        registration_deadline=None,
        max_participants=max_participants,
        description=None,
        payment_required=True,
    )


def _participant(participant_type: str) -> ParticipantRecord:
    return ParticipantRecord(
        ag_participant_id=uuid4(),
        assembly_id=_ASSEMBLY_ID,
        type=participant_type,
        participant_id=f"{participant_type}-{uuid4().hex[:6]}",
        name=None,
        role=None,
        status=None,
        escola=None,
        regional=None,
        cidade=None,
        uf=None,
        ag_filiacao=None,
        created_at_utc=_NOW,
    )


def _registration(status: str, participant_type: str | None = "comite", modality_id: UUID | None = None):
    return RegistrationRecord(
        registration_id=uuid4(),
        assembly_id=_ASSEMBLY_ID,
        participant_id="p",
        participant_type=participant_type,
        participant_role=None,
        status=status,
        modality_id=modality_id,
        created_at_utc=_NOW,
    )


def test_counters_cover_every_status_and_type() -> None:
    """Type and status counters include inactive registrations; missing types count as `unknown`."""

    report = analytics_build_registration_stats(
        assembly_id=str(_ASSEMBLY_ID),
        assembly=_assembly(max_participants=None),
        participants=[_participant("comite"), _participant("comite"), _participant("eb")],
        registrations=[
            _registration("approved"),
            _registration("pending", participant_type="eb"),
            _registration("cancelled"),
            _registration("rejected", participant_type=None),
        ],
        modalities=[],
    )

    assert report.total_participants == 3
    assert report.total_registrations == 4
    assert report.active_registrations == 2
    assert report.participants_by_type == {"comite": 2, "eb": 1}
    assert report.registrations_by_type == {"comite": 2, "eb": 1, "unknown": 1}
    assert report.registrations_by_status == {"approved": 1, "pending": 1, "cancelled": 1, "rejected": 1}
    assert report.assembly_capacity.is_full is False
    assert report.assembly_capacity.is_near_full is False


def test_modality_capacity_counts_active_registrations_only() -> None:
    modalities = [
        RegistrationModalityRecord(
            modality_id=_MODALITY_FULL, assembly_id=_ASSEMBLY_ID, name="Presencial", price="150.00", max_participants=2
        ),
        RegistrationModalityRecord(
            modality_id=_MODALITY_OPEN, assembly_id=_ASSEMBLY_ID, name="Online", price="0.00", max_participants=None
        ),
    ]
    report = analytics_build_registration_stats(
        assembly_id=str(_ASSEMBLY_ID),
        assembly=_assembly(max_participants=10),
        participants=[],
        registrations=[
            _registration("approved", modality_id=_MODALITY_FULL),
            _registration("pending", modality_id=_MODALITY_FULL),
            _registration("cancelled", modality_id=_MODALITY_FULL),
            _registration("approved", modality_id=_MODALITY_OPEN),
        ],
        modalities=modalities,
    )

    full_modality, open_modality = report.modality_stats
    assert full_modality.modality_id == str(_MODALITY_FULL)
    assert full_modality.current_registrations == 2
    assert full_modality.is_full is True
    assert full_modality.is_near_full is True
    assert open_modality.current_registrations == 1
    assert open_modality.is_full is False
    assert open_modality.is_near_full is False


def test_assembly_near_full_threshold_is_ninety_percent() -> None:
    report = analytics_build_registration_stats(
        assembly_id=str(_ASSEMBLY_ID),
        assembly=_assembly(max_participants=10),
        participants=[],
        registrations=[_registration("approved") for _ in range(9)],
        modalities=[],
    )

    assert report.assembly_capacity.max_participants == 10
    assert report.assembly_capacity.current_registrations == 9
    assert report.assembly_capacity.is_full is False
    assert report.assembly_capacity.is_near_full is True


def test_unknown_assembly_reports_no_capacity() -> None:
    report = analytics_build_registration_stats(
        assembly_id=str(_ASSEMBLY_ID),
        assembly=None,
        participants=[],
        registrations=[],
        modalities=[],
    )

    assert report.assembly_capacity.max_participants is None
    assert report.total_registrations == 0
    assert report.modality_stats == []
