"""Regression tests for the pure registration analytics aggregation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from app.analytics import analytics_build_registration_report
from app.db import ParticipantRecord, RegistrationRecord

_ASSEMBLY_ID = UUID("8f14e45f-ceea-467f-a8c5-5b2c1e0f1a11")
_COMPUTED_AT = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
_BASE_TIME = datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc)


def _participant(
    participant_type: str,
    participant_id: str | None,
    status: str | None = None,
    name: str | None = None,
    role: str | None = None,
    escola: str | None = None,
    offset_minutes: int = 0,
) -> ParticipantRecord:
    """Build one roster row with deterministic defaults.

    Args:
        participant_type: Participant type.
        participant_id: External participant key.
        status: Optional committee status.
        name: Optional name.
        role: Optional role.
        escola: Optional school.
        offset_minutes: Import time offset used for ordering.

    Returns:
        ParticipantRecord: Roster row.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return ParticipantRecord(
        ag_participant_id=uuid4(),
        assembly_id=_ASSEMBLY_ID,
        type=participant_type,
        participant_id=participant_id,
        name=name,
        role=role,
        status=status,
        escola=escola,
        regional=None,
        cidade=None,
        uf=None,
        ag_filiacao=None,
        created_at_utc=_BASE_TIME + timedelta(minutes=offset_minutes),
    )


def _registration(
    participant_id: str | None,
    status: str = "approved",
    participant_type: str | None = None,
    participant_role: str | None = None,
) -> RegistrationRecord:
    """Build one registration row with deterministic defaults."""

    return RegistrationRecord(
        registration_id=uuid4(),
        assembly_id=_ASSEMBLY_ID,
        participant_id=participant_id,
        participant_type=participant_type,
        participant_role=participant_role,
        status=status,
        modality_id=None,
        created_at_utc=_BASE_TIME,
    )


def _build(participants=None, registrations=None, eb_roster=None, cr_roster=None):
    return analytics_build_registration_report(
        assembly_id=str(_ASSEMBLY_ID),
        assembly_participants=participants or [],
        assembly_registrations=registrations or [],
        eb_roster=eb_roster or [],
        cr_roster=cr_roster or [],
        computed_at_utc=_COMPUTED_AT,
    )


def test_duplicate_committee_rows_collapse_to_one_registered_entry() -> None:
    """Two `BR001` rows plus one active registration report one fully registered committee."""

    report = _build(
        participants=[
            _participant("comite", "BR001", status="Pleno"),
            _participant("comite", "BR001", status="Pleno", offset_minutes=1),
        ],
        registrations=[_registration("BR001")],
    )

    assert report.comites_plenos.total == 1
    assert report.comites_plenos.registered == 1
    assert report.comites_plenos.unregistered == 0
    assert report.comites_plenos.registration_rate == 100.0
    assert report.comites_plenos.details[0].registration_count == 1


def test_cancelled_registration_is_not_counted() -> None:
    """Cancelled registrations count neither as registered nor as active."""

    report = _build(
        participants=[_participant("comite", "BR001", status="Pleno")],
        registrations=[_registration("BR001", status="cancelled")],
    )

    assert report.comites_plenos.registered == 0
    assert report.comites_plenos.details[0].is_registered is False
    assert report.comites_plenos.details[0].registration is None
    assert report.summary.total_active_registrations == 0
    assert report.others.total == 0


def test_rejected_registration_is_not_active() -> None:
    report = _build(registrations=[_registration("X1", status="rejected"), _registration("X2", status="pending")])

    assert report.summary.total_active_registrations == 1
    assert [registration.participant_id for registration in report.others.details] == ["X2"]


def test_other_registrations_group_by_role_then_type_then_unknown() -> None:
    """Role falls back to type, then to `unknown`; counts keep first-seen order."""

    report = _build(
        registrations=[
            _registration("G1", participant_type="guest"),
            _registration("S1", participant_type="guest", participant_role="speaker"),
            _registration("U1"),
            _registration("G2", participant_type="guest"),
        ]
    )

    assert report.others.total == 4
    assert [(role_count.role, role_count.count) for role_count in report.others.by_role] == [
        ("guest", 2),
        ("speaker", 1),
        ("unknown", 1),
    ]
    assert report.summary.total_other_registrations == 4


def test_empty_input_yields_zero_report() -> None:
    report = _build()

    for category in (report.comites_plenos, report.comites_nao_plenos, report.ebs, report.crs):
        assert category.total == 0
        assert category.registered == 0
        assert category.unregistered == 0
        assert category.registration_rate == 0.0
        assert category.details == []
    assert report.others.details == []
    assert report.others.by_role == []
    assert report.summary.overall_registration_rate == 0.0
    assert report.last_updated == _COMPUTED_AT


def test_whitespace_participant_id_is_excluded_from_every_bucket() -> None:
    report = _build(
        participants=[
            _participant("comite", "   ", status="Pleno"),
            _participant("comite", None, status="Não-pleno"),
        ],
        eb_roster=[_participant("eb", "  ", role="Presidente")],
    )

    assert report.comites_plenos.total == 0
    assert report.comites_nao_plenos.total == 0
    assert report.ebs.total == 0
    assert report.summary.total_predefined_participants == 0


def test_first_seen_row_is_retained_after_trimming_ids() -> None:
    """Ids differing only by surrounding whitespace collapse onto the first row."""

    report = _build(
        participants=[
            _participant("comite", " BR002 ", status="Pleno", name="Primeiro", escola="Escola A"),
            _participant("comite", "BR002", status="Pleno", name="Segundo", escola="Escola B", offset_minutes=1),
        ],
        registrations=[_registration("BR002  ")],
    )

    detail = report.comites_plenos.details[0]
    assert report.comites_plenos.total == 1
    assert detail.participant_id == "BR002"
    assert detail.name == "Primeiro"
    assert detail.escola == "Escola A"
    assert detail.is_registered is True


def test_missing_committee_status_falls_into_nao_pleno_bucket() -> None:
    report = _build(
        participants=[
            _participant("comite", "BR010", status=None),
            _participant("comite", "BR011", status="  "),
            _participant("comite", "BR012", status="Pleno"),
        ]
    )

    assert report.comites_nao_plenos.total == 2
    assert report.comites_plenos.total == 1


def test_missing_optional_fields_project_as_empty_strings() -> None:
    report = _build(participants=[_participant("comite", "BR020", status="Pleno")])

    detail = report.comites_plenos.details[0]
    assert detail.name == ""
    assert detail.escola == ""
    assert detail.cidade == ""
    assert detail.uf == ""
    assert detail.regional == ""
    assert detail.ag_filiacao == ""


def test_board_member_attaches_registration_of_matching_type() -> None:
    """`is_registered` uses any active registration, `registration` only an `eb` one."""

    untyped_registration = _registration("EB01")
    typed_registration = _registration("EB01", participant_type="eb", participant_role="Presidente")
    report = _build(
        registrations=[untyped_registration, typed_registration],
        eb_roster=[_participant("eb", "EB01", name="Maria", role="Presidente")],
        cr_roster=[_participant("cr", "CR01", name="João", role="Coordenador Sul")],
    )

    eb_detail = report.ebs.details[0]
    assert eb_detail.is_registered is True
    assert eb_detail.registration_count == 2
    assert eb_detail.registration == typed_registration
    assert report.crs.registered == 0
    assert report.crs.unregistered == 1
    assert report.summary.total_predefined_participants == 2
    assert report.summary.total_registered_predefined == 1
    assert report.summary.overall_registration_rate == 50.0


def test_board_typed_registrations_are_not_others() -> None:
    report = _build(
        registrations=[
            _registration("EB99", participant_type="eb"),
            _registration("CR99", participant_type="cr"),
            _registration("BR001"),
        ],
        participants=[_participant("comite", "BR001", status="Pleno")],
    )

    assert report.others.total == 0
    assert report.summary.total_active_registrations == 3


def test_aggregation_is_idempotent_over_identical_inputs() -> None:
    participants = [
        _participant("comite", "BR001", status="Pleno"),
        _participant("comite", "BR002", status="Não-pleno"),
        _participant("comite", "BR001", status="Pleno"),
    ]
    registrations = [_registration("BR002"), _registration("guest-1", participant_type="guest")]
    eb_roster = [_participant("eb", "EB01", role="Tesoureiro")]

    first_report = _build(participants, registrations, eb_roster)
    second_report = _build(participants, registrations, eb_roster)

    assert first_report == second_report


def test_bucket_counters_stay_consistent() -> None:
    report = _build(
        participants=[_participant("comite", f"BR{index:03d}", status="Pleno") for index in range(7)],
        registrations=[_registration("BR001"), _registration("BR003"), _registration("BR003")],
    )

    category = report.comites_plenos
    assert category.total == 7
    assert category.registered == 2
    assert category.unregistered == category.total - category.registered
    assert 0.0 <= category.registration_rate <= 100.0
    assert round(category.registration_rate, 4) == round(2 / 7 * 100, 4)
