"""Deduplicated roster listings used by registration drop-downs."""
# pylint: disable=too-few-public-methods

from __future__ import annotations

from app.db import ParticipantRecord, ParticipantRepositoryPort
from app.domain import (
    DOMAIN_PARTICIPANT_TYPE_COMITE,
    DOMAIN_PARTICIPANT_TYPE_CR,
    DOMAIN_PARTICIPANT_TYPE_EB,
    domain_normalize_optional_text,
    domain_parse_assembly_id,
    domain_pt_br_sort_key,
    domain_resolve_comite_status,
)

from .deduplication import analytics_deduplicate_participants
from .interfaces import BoardRosterEntry, ComiteRosterEntry, RosterListingPort


def roster_build_comite_entries(rows: list[ParticipantRecord], include_status: bool = False) -> list[ComiteRosterEntry]:
    """Build committee drop-down entries sorted by identifier.

    Args:
        rows: Committee roster rows in source order.
        include_status: Whether entries carry the resolved membership status.

    Returns:
        list[ComiteRosterEntry]: First-seen committees sorted with pt-BR collation.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    entries = []
    for participant_key, participant in analytics_deduplicate_participants(rows).items():
        escola = domain_normalize_optional_text(participant.escola)
        entries.append(
            ComiteRosterEntry(
                id=participant_key,
                name=f"{participant_key} - {escola}" if escola else participant_key,
                participant_id=participant_key,
                escola=escola,
                cidade=domain_normalize_optional_text(participant.cidade),
                uf=domain_normalize_optional_text(participant.uf),
                ag_filiacao=domain_normalize_optional_text(participant.ag_filiacao),
                status=domain_resolve_comite_status(participant.status) if include_status else None,
            )
        )
    return sorted(entries, key=lambda entry: domain_pt_br_sort_key(entry.participant_id))


def roster_build_board_entries(rows: list[ParticipantRecord]) -> list[BoardRosterEntry]:
    """Build board or coordinator drop-down entries sorted by role.

    Args:
        rows: Board or coordinator roster rows in source order.

    Returns:
        list[BoardRosterEntry]: First-seen members sorted by role with pt-BR collation.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    entries = []
    for participant_key, participant in analytics_deduplicate_participants(rows).items():
        participant_name = domain_normalize_optional_text(participant.name)
        role = domain_normalize_optional_text(participant.role)
        entries.append(
            BoardRosterEntry(
                id=participant_key,
                name=f"{role} - {participant_name}" if role else participant_name,
                participant_id=participant_key,
                participant_name=participant_name,
                role=role,
            )
        )
    return sorted(entries, key=lambda entry: domain_pt_br_sort_key(entry.role))


class RosterListingService(RosterListingPort):
    """Roster listing service backed by the participant repository."""

    _ROSTER_BOARD_TYPES = frozenset({DOMAIN_PARTICIPANT_TYPE_EB, DOMAIN_PARTICIPANT_TYPE_CR})

    def __init__(self, participant_repository: ParticipantRepositoryPort):
        """Initialize roster listing dependencies.

        Args:
            participant_repository: DB-layer participant repository.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when participant_repository is invalid.
        """

        if participant_repository is None:
            raise ValueError("participant_repository must not be None")
        self._participant_repository = participant_repository

    def roster_list_comites(self, assembly_id: str | None = None, include_status: bool = False) -> list[ComiteRosterEntry]:
        """List deduplicated local committees, optionally scoped to one assembly.

        Args:
            assembly_id: Optional assembly identifier; all assemblies when omitted.
            include_status: Whether entries carry the membership status.

        Returns:
            list[ComiteRosterEntry]: Committees sorted by identifier.

        Raises:
            ValueError: Raised when assembly_id is malformed.
            RuntimeError: Raised when the roster read fails.
        """

        if assembly_id is None:
            rows = self._participant_repository.db_participant_list_by_type(DOMAIN_PARTICIPANT_TYPE_COMITE)
        else:
            rows = self._participant_repository.db_participant_list_for_assembly(
                assembly_id=domain_parse_assembly_id(assembly_id),
                participant_type=DOMAIN_PARTICIPANT_TYPE_COMITE,
            )
        return roster_build_comite_entries(rows, include_status=include_status)

    def roster_list_board_members(self, participant_type: str) -> list[BoardRosterEntry]:
        """List deduplicated organization-wide board or coordinator members.

        Args:
            participant_type: `eb` or `cr`.

        Returns:
            list[BoardRosterEntry]: Members sorted by role.

        Raises:
            ValueError: Raised when participant_type is not a board type.
            RuntimeError: Raised when the roster read fails.
        """

        if participant_type not in self._ROSTER_BOARD_TYPES:
            raise ValueError(f"unsupported board participant_type={participant_type}")
        rows = self._participant_repository.db_participant_list_by_type(participant_type)
        return roster_build_board_entries(rows)


__all__ = ["RosterListingService", "roster_build_board_entries", "roster_build_comite_entries"]
