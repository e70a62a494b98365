"""Registration analytics aggregation over roster and registration rows.

The aggregation is a pure function of its inputs: committee rosters are scoped
to the assembly, while executive-board and regional-coordinator rosters are
organization-wide and passed in already unscoped.
"""

from __future__ import annotations

from datetime import datetime

from app.db import ParticipantRecord, RegistrationRecord
from app.domain import (
    DOMAIN_COMITE_STATUS_NAO_PLENO,
    DOMAIN_COMITE_STATUS_PLENO,
    DOMAIN_PARTICIPANT_TYPE_COMITE,
    DOMAIN_PARTICIPANT_TYPE_CR,
    DOMAIN_PARTICIPANT_TYPE_EB,
    domain_normalize_optional_text,
    domain_normalize_participant_id,
    domain_registration_is_active,
    domain_resolve_comite_status,
    domain_resolve_other_role,
)

from .deduplication import analytics_deduplicate_participants, analytics_index_registrations, analytics_percentage
from .interfaces import (
    AnalyticsSummary,
    BoardMemberRegistrationDetail,
    CategoryAnalytics,
    ComiteRegistrationDetail,
    OtherRegistrationsAnalytics,
    OtherRoleCount,
    RegistrationAnalyticsReport,
)


def analytics_build_registration_report(
    assembly_id: str,
    assembly_participants: list[ParticipantRecord],
    assembly_registrations: list[RegistrationRecord],
    eb_roster: list[ParticipantRecord],
    cr_roster: list[ParticipantRecord],
    computed_at_utc: datetime,
) -> RegistrationAnalyticsReport:
    """Aggregate registration coverage for one assembly.

    Args:
        assembly_id: Assembly identifier echoed in the report.
        assembly_participants: Roster rows scoped to the assembly.
        assembly_registrations: Registrations of the assembly, every status.
        eb_roster: Organization-wide executive-board roster rows.
        cr_roster: Organization-wide regional-coordinator roster rows.
        computed_at_utc: Timestamp stamped as `last_updated`.

    Returns:
        RegistrationAnalyticsReport: Nested per-category report with global summary.

    Raises:
        RuntimeError: This function does not raise runtime errors.
    """

    active_registrations = [
        registration for registration in assembly_registrations if domain_registration_is_active(registration.status)
    ]
    registrations_by_participant = analytics_index_registrations(active_registrations)

    participants_by_bucket: dict[tuple[str, str], list[ParticipantRecord]] = {}
    for participant in assembly_participants:
        bucket_key = (participant.type, domain_resolve_comite_status(participant.status))
        participants_by_bucket.setdefault(bucket_key, []).append(participant)

    unique_comites_plenos = analytics_deduplicate_participants(
        participants_by_bucket.get((DOMAIN_PARTICIPANT_TYPE_COMITE, DOMAIN_COMITE_STATUS_PLENO), [])
    )
    unique_comites_nao_plenos = analytics_deduplicate_participants(
        participants_by_bucket.get((DOMAIN_PARTICIPANT_TYPE_COMITE, DOMAIN_COMITE_STATUS_NAO_PLENO), [])
    )

    comites_plenos = _analytics_build_category(
        [
            _analytics_build_comite_detail(participant_key, participant, registrations_by_participant)
            for participant_key, participant in unique_comites_plenos.items()
        ]
    )
    comites_nao_plenos = _analytics_build_category(
        [
            _analytics_build_comite_detail(participant_key, participant, registrations_by_participant)
            for participant_key, participant in unique_comites_nao_plenos.items()
        ]
    )
    ebs = _analytics_build_category(
        [
            _analytics_build_board_detail(participant_key, participant, DOMAIN_PARTICIPANT_TYPE_EB, registrations_by_participant)
            for participant_key, participant in analytics_deduplicate_participants(eb_roster).items()
        ]
    )
    crs = _analytics_build_category(
        [
            _analytics_build_board_detail(participant_key, participant, DOMAIN_PARTICIPANT_TYPE_CR, registrations_by_participant)
            for participant_key, participant in analytics_deduplicate_participants(cr_roster).items()
        ]
    )

    others = _analytics_build_others(
        active_registrations=active_registrations,
        predefined_participant_ids=set(unique_comites_plenos) | set(unique_comites_nao_plenos),
    )

    categories = (comites_plenos, comites_nao_plenos, ebs, crs)
    total_predefined = sum(category.total for category in categories)
    total_registered_predefined = sum(category.registered for category in categories)

    return RegistrationAnalyticsReport(
        assembly_id=assembly_id,
        summary=AnalyticsSummary(
            total_predefined_participants=total_predefined,
            total_registered_predefined=total_registered_predefined,
            total_active_registrations=len(active_registrations),
            total_other_registrations=others.total,
            overall_registration_rate=analytics_percentage(total_registered_predefined, total_predefined),
        ),
        comites_plenos=comites_plenos,
        comites_nao_plenos=comites_nao_plenos,
        ebs=ebs,
        crs=crs,
        others=others,
        last_updated=computed_at_utc,
    )


def _analytics_build_comite_detail(
    participant_key: str,
    participant: ParticipantRecord,
    registrations_by_participant: dict[str, list[RegistrationRecord]],
) -> ComiteRegistrationDetail:
    participant_registrations = registrations_by_participant.get(participant_key, [])
    return ComiteRegistrationDetail(
        participant_id=participant_key,
        name=domain_normalize_optional_text(participant.name),
        escola=domain_normalize_optional_text(participant.escola),
        cidade=domain_normalize_optional_text(participant.cidade),
        uf=domain_normalize_optional_text(participant.uf),
        regional=domain_normalize_optional_text(participant.regional),
        ag_filiacao=domain_normalize_optional_text(participant.ag_filiacao),
        is_registered=bool(participant_registrations),
        registration_count=len(participant_registrations),
        registration=participant_registrations[0] if participant_registrations else None,
    )


def _analytics_build_board_detail(
    participant_key: str,
    participant: ParticipantRecord,
    participant_type: str,
    registrations_by_participant: dict[str, list[RegistrationRecord]],
) -> BoardMemberRegistrationDetail:
    participant_registrations = registrations_by_participant.get(participant_key, [])
    typed_registration = next(
        (registration for registration in participant_registrations if registration.participant_type == participant_type),
        None,
    )
    return BoardMemberRegistrationDetail(
        participant_id=participant_key,
        name=domain_normalize_optional_text(participant.name),
        role=domain_normalize_optional_text(participant.role),
        is_registered=bool(participant_registrations),
        registration_count=len(participant_registrations),
        registration=typed_registration,
    )


def _analytics_build_category(details: list) -> CategoryAnalytics:
    registered = sum(1 for detail in details if detail.is_registered)
    total = len(details)
    return CategoryAnalytics(
        total=total,
        registered=registered,
        unregistered=total - registered,
        registration_rate=analytics_percentage(registered, total),
        details=details,
    )


def _analytics_build_others(
    active_registrations: list[RegistrationRecord],
    predefined_participant_ids: set[str],
) -> OtherRegistrationsAnalytics:
    """Collect active registrations outside the committee and board rosters.

    Args:
        active_registrations: Active registrations in submission order.
        predefined_participant_ids: Trimmed ids of the assembly's committees.

    Returns:
        OtherRegistrationsAnalytics: Registrations grouped and counted by role.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    other_registrations = [
        registration
        for registration in active_registrations
        if domain_normalize_participant_id(registration.participant_id) not in predefined_participant_ids
        and registration.participant_type not in (DOMAIN_PARTICIPANT_TYPE_EB, DOMAIN_PARTICIPANT_TYPE_CR)
    ]

    counts_by_role: dict[str, int] = {}
    for registration in other_registrations:
        role = domain_resolve_other_role(registration.participant_role, registration.participant_type)
        counts_by_role[role] = counts_by_role.get(role, 0) + 1

    return OtherRegistrationsAnalytics(
        total=len(other_registrations),
        by_role=[OtherRoleCount(role=role, count=count) for role, count in counts_by_role.items()],
        details=other_registrations,
    )


__all__ = ["analytics_build_registration_report"]
