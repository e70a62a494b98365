"""Analytics layer package for registration reporting and roster listings."""

from .interfaces import (
    AnalyticsSummary,
    AssemblyCapacity,
    BoardMemberRegistrationDetail,
    BoardRosterEntry,
    CategoryAnalytics,
    ComiteRegistrationDetail,
    ComiteRosterEntry,
    ModalityStats,
    OtherRegistrationsAnalytics,
    OtherRoleCount,
    RegistrationAnalyticsPort,
    RegistrationAnalyticsReport,
    RegistrationStatsReport,
    RosterListingPort,
)
from .registration_analytics import analytics_build_registration_report
from .registration_stats import analytics_build_registration_stats
from .rosters import RosterListingService, roster_build_board_entries, roster_build_comite_entries
from .service import RegistrationAnalyticsService

__all__ = [
    "AnalyticsSummary",
    "AssemblyCapacity",
    "BoardMemberRegistrationDetail",
    "BoardRosterEntry",
    "CategoryAnalytics",
    "ComiteRegistrationDetail",
    "ComiteRosterEntry",
    "ModalityStats",
    "OtherRegistrationsAnalytics",
    "OtherRoleCount",
    "RegistrationAnalyticsPort",
    "RegistrationAnalyticsReport",
    "RegistrationAnalyticsService",
    "RegistrationStatsReport",
    "RosterListingPort",
    "RosterListingService",
    "analytics_build_registration_report",
    "analytics_build_registration_stats",
    "roster_build_board_entries",
    "roster_build_comite_entries",
]
