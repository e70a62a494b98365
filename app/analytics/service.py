"""Assembly registration reporting service with concurrent roster fetches."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import TypeVar

from app.db import AssemblyRepositoryPort, ParticipantRepositoryPort, RegistrationRepositoryPort
from app.domain import DOMAIN_PARTICIPANT_TYPE_CR, DOMAIN_PARTICIPANT_TYPE_EB, domain_parse_assembly_id

from .interfaces import RegistrationAnalyticsPort, RegistrationAnalyticsReport, RegistrationStatsReport
from .registration_analytics import analytics_build_registration_report
from .registration_stats import analytics_build_registration_stats

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class RegistrationAnalyticsService(RegistrationAnalyticsPort):
    """Fetch roster and registration rows concurrently and aggregate them.

    Every fetch of one computation is submitted together and the aggregation
    starts only after all of them resolved. The first failed fetch fails the
    whole computation; no partial report is produced.
    """

    def __init__(
        self,
        participant_repository: ParticipantRepositoryPort,
        registration_repository: RegistrationRepositoryPort,
        assembly_repository: AssemblyRepositoryPort,
        fetch_workers: int = 4,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize analytics service dependencies.

        Args:
            participant_repository: DB-layer participant roster repository.
            registration_repository: DB-layer registration repository.
            assembly_repository: DB-layer assembly and modality repository.
            fetch_workers: Worker threads for concurrent fetches.
            clock: Optional UTC clock used to stamp reports.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if participant_repository is None:
            raise ValueError("participant_repository must not be None")
        if registration_repository is None:
            raise ValueError("registration_repository must not be None")
        if assembly_repository is None:
            raise ValueError("assembly_repository must not be None")
        if fetch_workers < 1:
            raise ValueError("fetch_workers must be greater than zero")
        self._participant_repository = participant_repository
        self._registration_repository = registration_repository
        self._assembly_repository = assembly_repository
        self._fetch_workers = fetch_workers
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def analytics_compute_registration_report(self, assembly_id: str) -> RegistrationAnalyticsReport:
        """Compute the registration analytics report for one assembly.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            RegistrationAnalyticsReport: Full nested report; all zeros for an unknown assembly.

        Raises:
            ValueError: Raised when assembly_id is blank or malformed.
            RuntimeError: Raised when any underlying fetch fails.
        """

        parsed_assembly_id = domain_parse_assembly_id(assembly_id)

        with ThreadPoolExecutor(max_workers=self._fetch_workers, thread_name_prefix="analytics-fetch") as executor:
            participants_future = executor.submit(
                self._participant_repository.db_participant_list_for_assembly,
                parsed_assembly_id,
            )
            registrations_future = executor.submit(
                self._registration_repository.db_registration_list_for_assembly,
                parsed_assembly_id,
            )
            eb_roster_future = executor.submit(
                self._participant_repository.db_participant_list_by_type,
                DOMAIN_PARTICIPANT_TYPE_EB,
            )
            cr_roster_future = executor.submit(
                self._participant_repository.db_participant_list_by_type,
                DOMAIN_PARTICIPANT_TYPE_CR,
            )

            assembly_participants = self._analytics_await(participants_future, "participants", parsed_assembly_id)
            assembly_registrations = self._analytics_await(registrations_future, "registrations", parsed_assembly_id)
            eb_roster = self._analytics_await(eb_roster_future, "eb_roster", parsed_assembly_id)
            cr_roster = self._analytics_await(cr_roster_future, "cr_roster", parsed_assembly_id)

        report = analytics_build_registration_report(
            assembly_id=str(parsed_assembly_id),
            assembly_participants=assembly_participants,
            assembly_registrations=assembly_registrations,
            eb_roster=eb_roster,
            cr_roster=cr_roster,
            computed_at_utc=self._clock(),
        )
        logger.info(
            "registration analytics computed assembly_id=%s predefined=%d registered=%d active=%d",
            report.assembly_id,
            report.summary.total_predefined_participants,
            report.summary.total_registered_predefined,
            report.summary.total_active_registrations,
        )
        return report

    def analytics_compute_registration_stats(self, assembly_id: str) -> RegistrationStatsReport:
        """Compute raw registration counters for one assembly.

        Args:
            assembly_id: Assembly identifier.

        Returns:
            RegistrationStatsReport: Counter report; capacity flags are false for an unknown assembly.

        Raises:
            ValueError: Raised when assembly_id is blank or malformed.
            RuntimeError: Raised when any underlying fetch fails.
        """

        parsed_assembly_id = domain_parse_assembly_id(assembly_id)

        with ThreadPoolExecutor(max_workers=self._fetch_workers, thread_name_prefix="analytics-fetch") as executor:
            assembly_future = executor.submit(self._assembly_repository.db_assembly_get_by_id, parsed_assembly_id)
            participants_future = executor.submit(
                self._participant_repository.db_participant_list_for_assembly,
                parsed_assembly_id,
            )
            registrations_future = executor.submit(
                self._registration_repository.db_registration_list_for_assembly,
                parsed_assembly_id,
            )
            modalities_future = executor.submit(
                self._assembly_repository.db_registration_modality_list_for_assembly,
                parsed_assembly_id,
            )

            assembly = self._analytics_await(assembly_future, "assembly", parsed_assembly_id)
            participants = self._analytics_await(participants_future, "participants", parsed_assembly_id)
            registrations = self._analytics_await(registrations_future, "registrations", parsed_assembly_id)
            modalities = self._analytics_await(modalities_future, "modalities", parsed_assembly_id)

        return analytics_build_registration_stats(
            assembly_id=str(parsed_assembly_id),
            assembly=assembly,
            participants=participants,
            registrations=registrations,
            modalities=modalities,
        )

    def _analytics_await(self, future: Future[ResultT], fetch_name: str, assembly_id: object) -> ResultT:
        """Wait for one fetch and log its failure before propagating it.

        Args:
            future: Submitted fetch.
            fetch_name: Fetch label for diagnostics.
            assembly_id: Assembly identifier for diagnostics.

        Returns:
            ResultT: Fetch result.

        Raises:
            RuntimeError: Re-raised when the fetch failed.
        """

        try:
            return future.result()
        except RuntimeError:
            logger.error("registration analytics fetch failed fetch=%s assembly_id=%s", fetch_name, assembly_id)
            raise


__all__ = ["RegistrationAnalyticsService"]
