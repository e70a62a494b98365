"""First-seen deduplication and lookup helpers shared by analytics views."""

from __future__ import annotations

from collections.abc import Iterable

from app.db import ParticipantRecord, RegistrationRecord
from app.domain import domain_normalize_participant_id


def analytics_deduplicate_participants(rows: Iterable[ParticipantRecord]) -> dict[str, ParticipantRecord]:
    """Deduplicate roster rows by trimmed participant id, keeping the first occurrence.

    Args:
        rows: Roster rows in source order.

    Returns:
        dict[str, ParticipantRecord]: First-seen rows keyed by trimmed id, in insertion order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    unique_rows: dict[str, ParticipantRecord] = {}
    for row in rows:
        participant_key = domain_normalize_participant_id(row.participant_id)
        if participant_key is None or participant_key in unique_rows:
            continue
        unique_rows[participant_key] = row
    return unique_rows


def analytics_index_registrations(registrations: Iterable[RegistrationRecord]) -> dict[str, list[RegistrationRecord]]:
    """Group registrations by trimmed participant id preserving submission order.

    Args:
        registrations: Registration rows.

    Returns:
        dict[str, list[RegistrationRecord]]: Registrations keyed by trimmed participant id.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    registrations_by_participant: dict[str, list[RegistrationRecord]] = {}
    for registration in registrations:
        participant_key = domain_normalize_participant_id(registration.participant_id)
        if participant_key is None:
            continue
        registrations_by_participant.setdefault(participant_key, []).append(registration)
    return registrations_by_participant


def analytics_percentage(part: int, total: int) -> float:
    """Return `part` as a percentage of `total`, or 0 for an empty total."""

    if total <= 0:
        return 0.0
    return part / total * 100


__all__ = [
    "analytics_deduplicate_participants",
    "analytics_index_registrations",
    "analytics_percentage",
]
