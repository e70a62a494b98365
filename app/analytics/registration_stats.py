"""Raw registration counters and capacity occupancy for one assembly."""

from __future__ import annotations

from app.db import AssemblyRecord, ParticipantRecord, RegistrationModalityRecord, RegistrationRecord
from app.domain import domain_registration_is_active

from .interfaces import AssemblyCapacity, ModalityStats, RegistrationStatsReport

_ANALYTICS_NEAR_FULL_RATIO = 0.9


def analytics_build_registration_stats(
    assembly_id: str,
    assembly: AssemblyRecord | None,
    participants: list[ParticipantRecord],
    registrations: list[RegistrationRecord],
    modalities: list[RegistrationModalityRecord],
) -> RegistrationStatsReport:
    """Count registrations and roster rows and evaluate capacity limits.

    Type and status counters cover every registration; capacity figures
    only count active ones.

    Args:
        assembly_id: Assembly identifier echoed in the report.
        assembly: Assembly row, or None when it does not exist.
        participants: Roster rows of the assembly.
        registrations: Registrations of the assembly, every status.
        modalities: Registration modalities of the assembly.

    Returns:
        RegistrationStatsReport: Counter report.

    Raises:
        RuntimeError: This function does not raise runtime errors.
    """

    active_registrations = [
        registration for registration in registrations if domain_registration_is_active(registration.status)
    ]

    registrations_by_type: dict[str, int] = {}
    registrations_by_status: dict[str, int] = {}
    for registration in registrations:
        type_key = registration.participant_type or "unknown"
        registrations_by_type[type_key] = registrations_by_type.get(type_key, 0) + 1
        registrations_by_status[registration.status] = registrations_by_status.get(registration.status, 0) + 1

    participants_by_type: dict[str, int] = {}
    for participant in participants:
        participants_by_type[participant.type] = participants_by_type.get(participant.type, 0) + 1

    active_by_modality: dict[str, int] = {}
    for registration in active_registrations:
        if registration.modality_id is None:
            continue
        modality_key = str(registration.modality_id)
        active_by_modality[modality_key] = active_by_modality.get(modality_key, 0) + 1

    modality_stats = []
    for modality in modalities:
        modality_key = str(modality.modality_id)
        current_count = active_by_modality.get(modality_key, 0)
        is_full, is_near_full = _analytics_capacity_flags(current_count, modality.max_participants)
        modality_stats.append(
            ModalityStats(
                modality_id=modality_key,
                name=modality.name,
                price=modality.price,
                max_participants=modality.max_participants,
                current_registrations=current_count,
                is_full=is_full,
                is_near_full=is_near_full,
            )
        )

    max_participants = None if assembly is None else assembly.max_participants
    assembly_is_full, assembly_is_near_full = _analytics_capacity_flags(len(active_registrations), max_participants)

    return RegistrationStatsReport(
        assembly_id=assembly_id,
        total_participants=len(participants),
        total_registrations=len(registrations),
        active_registrations=len(active_registrations),
        registrations_by_type=registrations_by_type,
        registrations_by_status=registrations_by_status,
        participants_by_type=participants_by_type,
        modality_stats=modality_stats,
        assembly_capacity=AssemblyCapacity(
            max_participants=max_participants,
            current_registrations=len(active_registrations),
            is_full=assembly_is_full,
            is_near_full=assembly_is_near_full,
        ),
    )


def _analytics_capacity_flags(current_count: int, max_participants: int | None) -> tuple[bool, bool]:
    # no limit configured (None or 0) means never full
    if not max_participants:
        return False, False
    return current_count >= max_participants, current_count >= max_participants * _ANALYTICS_NEAR_FULL_RATIO


__all__ = ["analytics_build_registration_stats"]
