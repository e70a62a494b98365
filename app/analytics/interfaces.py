"""Typed interfaces for analytics-layer aggregations."""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Protocol, TypeVar

from app.db import RegistrationRecord

DetailT = TypeVar("DetailT")


@dataclass(frozen=True)
class ComiteRegistrationDetail:
    """Registration status of one deduplicated local committee.

    Attributes:
        participant_id: Trimmed external committee identifier.
        name: Committee name.
        escola: School name.
        cidade: City.
        uf: Federative unit.
        regional: Regional label.
        ag_filiacao: Affiliation assembly label.
        is_registered: Whether any active registration references the committee.
        registration_count: Number of active registrations referencing the committee.
        registration: First active registration, if any.
    """

    participant_id: str
    name: str
    escola: str
    cidade: str
    uf: str
    regional: str
    ag_filiacao: str
    is_registered: bool
    registration_count: int
    registration: RegistrationRecord | None


@dataclass(frozen=True)
class BoardMemberRegistrationDetail:
    """Registration status of one deduplicated executive-board or coordinator member.

    Attributes:
        participant_id: Trimmed external member identifier.
        name: Member name.
        role: Member role.
        is_registered: Whether any active registration references the member.
        registration_count: Number of active registrations referencing the member.
        registration: First active registration declared with the bucket's type, if any.
    """

    participant_id: str
    name: str
    role: str
    is_registered: bool
    registration_count: int
    registration: RegistrationRecord | None


@dataclass(frozen=True)
class CategoryAnalytics(Generic[DetailT]):
    """Counts, rate and itemized details for one participant category.

    Attributes:
        total: Deduplicated participant count.
        registered: Participants with at least one active registration.
        unregistered: `total - registered`.
        registration_rate: Registered share as a percentage in `[0, 100]`.
        details: Per-participant rows in first-seen order.
    """

    total: int
    registered: int
    unregistered: int
    registration_rate: float
    details: list[DetailT]


@dataclass(frozen=True)
class OtherRoleCount:
    """Registration count for one role outside the predefined rosters.

    Attributes:
        role: Role, participant type or `unknown`.
        count: Number of active registrations with this role.
    """

    role: str
    count: int


@dataclass(frozen=True)
class OtherRegistrationsAnalytics:
    """Active registrations that match no predefined roster.

    Attributes:
        total: Number of such registrations.
        by_role: Counts per role in first-seen order.
        details: The registrations themselves in submission order.
    """

    total: int
    by_role: list[OtherRoleCount]
    details: list[RegistrationRecord]


@dataclass(frozen=True)
class AnalyticsSummary:
    """Global summary across every predefined category.

    Attributes:
        total_predefined_participants: Sum of category totals.
        total_registered_predefined: Sum of category registered counts.
        total_active_registrations: Active registrations of the assembly.
        total_other_registrations: Active registrations outside predefined rosters.
        overall_registration_rate: Registered share of predefined participants as a percentage.
    """

    total_predefined_participants: int
    total_registered_predefined: int
    total_active_registrations: int
    total_other_registrations: int
    overall_registration_rate: float


@dataclass(frozen=True)
class RegistrationAnalyticsReport:
    """Full registration analytics report for one assembly.

    Attributes:
        assembly_id: Assembly identifier the report was computed for.
        summary: Global summary.
        comites_plenos: Full-member local committees of the assembly.
        comites_nao_plenos: Non-full-member local committees of the assembly.
        ebs: Organization-wide executive-board members.
        crs: Organization-wide regional coordinators.
        others: Registrations outside predefined rosters.
        last_updated: Computation timestamp in UTC.
    """

    assembly_id: str
    summary: AnalyticsSummary
    comites_plenos: CategoryAnalytics[ComiteRegistrationDetail]
    comites_nao_plenos: CategoryAnalytics[ComiteRegistrationDetail]
    ebs: CategoryAnalytics[BoardMemberRegistrationDetail]
    crs: CategoryAnalytics[BoardMemberRegistrationDetail]
    others: OtherRegistrationsAnalytics
    last_updated: datetime


@dataclass(frozen=True)
class ModalityStats:
    """Occupancy of one registration modality.

    Attributes:
        modality_id: Modality identifier.
        name: Modality name.
        price: Decimal price rendered as string.
        max_participants: Optional capacity.
        current_registrations: Active registrations in the modality.
        is_full: Capacity reached.
        is_near_full: At least 90% of capacity reached.
    """

    modality_id: str
    name: str
    price: str
    max_participants: int | None
    current_registrations: int
    is_full: bool
    is_near_full: bool


@dataclass(frozen=True)
class AssemblyCapacity:
    """Occupancy of the assembly as a whole.

    Attributes:
        max_participants: Optional assembly capacity.
        current_registrations: Active registrations of the assembly.
        is_full: Capacity reached.
        is_near_full: At least 90% of capacity reached.
    """

    max_participants: int | None
    current_registrations: int
    is_full: bool
    is_near_full: bool


@dataclass(frozen=True)
class RegistrationStatsReport:
    """Raw registration counters for one assembly.

    Attributes:
        assembly_id: Assembly identifier.
        total_participants: Roster rows of the assembly, duplicates included.
        total_registrations: Registrations of every status.
        active_registrations: Registrations not cancelled or rejected.
        registrations_by_type: Counts per declared participant type.
        registrations_by_status: Counts per registration status.
        participants_by_type: Roster row counts per participant type.
        modality_stats: Occupancy per modality.
        assembly_capacity: Occupancy of the assembly.
    """

    assembly_id: str
    total_participants: int
    total_registrations: int
    active_registrations: int
    registrations_by_type: dict[str, int]
    registrations_by_status: dict[str, int]
    participants_by_type: dict[str, int]
    modality_stats: list[ModalityStats]
    assembly_capacity: AssemblyCapacity


@dataclass(frozen=True)
class ComiteRosterEntry:
    """Drop-down entry for one deduplicated local committee.

    Attributes:
        id: Trimmed committee identifier.
        name: Display label `<id> - <escola>` or `<id>`.
        participant_id: Trimmed committee identifier.
        escola: School name.
        cidade: City.
        uf: Federative unit.
        ag_filiacao: Affiliation assembly label.
        status: Membership status, only set by status-aware listings.
    """

    id: str
    name: str
    participant_id: str
    escola: str
    cidade: str
    uf: str
    ag_filiacao: str
    status: str | None = None


@dataclass(frozen=True)
class BoardRosterEntry:
    """Drop-down entry for one deduplicated board or coordinator member.

    Attributes:
        id: Trimmed member identifier.
        name: Display label `<role> - <name>` or `<name>`.
        participant_id: Trimmed member identifier.
        participant_name: Member name.
        role: Member role.
    """

    id: str
    name: str
    participant_id: str
    participant_name: str
    role: str


class RegistrationAnalyticsPort(Protocol):
    """Port definition for assembly registration reporting services."""

    def analytics_compute_registration_report(self, assembly_id: str) -> RegistrationAnalyticsReport:
        """Compute the registration analytics report for one assembly.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            RegistrationAnalyticsReport: Full nested report.

        Raises:
            ValueError: Raised when assembly_id is blank or malformed.
            RuntimeError: Raised when any underlying fetch fails.
        """

    def analytics_compute_registration_stats(self, assembly_id: str) -> RegistrationStatsReport:
        """Compute raw registration counters for one assembly.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            RegistrationStatsReport: Counter report.

        Raises:
            ValueError: Raised when assembly_id is blank or malformed.
            RuntimeError: Raised when any underlying fetch fails.
        """


class RosterListingPort(Protocol):
    """Port definition for deduplicated roster drop-down listings."""

    def roster_list_comites(self, assembly_id: str | None = None, include_status: bool = False) -> list[ComiteRosterEntry]:
        """List deduplicated local committees sorted by identifier."""

    def roster_list_board_members(self, participant_type: str) -> list[BoardRosterEntry]:
        """List deduplicated board or coordinator members sorted by role."""
