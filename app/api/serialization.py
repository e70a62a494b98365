"""JSON serialization for API and CLI report payloads.

Report payloads use the camelCase field names consumed by existing dashboards;
they are part of the public contract and must stay stable.
"""

from __future__ import annotations

from datetime import datetime

from app.analytics import (
    BoardMemberRegistrationDetail,
    BoardRosterEntry,
    CategoryAnalytics,
    ComiteRegistrationDetail,
    ComiteRosterEntry,
    RegistrationAnalyticsReport,
    RegistrationStatsReport,
)
from app.assemblies import AssemblyReportData
from app.db import (
    AssemblyDeletionResult,
    AssemblyRecord,
    ParticipantRecord,
    RegistrationModalityRecord,
    RegistrationRecord,
)


def api_serialize_registration(registration: RegistrationRecord | None) -> dict[str, object] | None:
    """Serialize one registration row, or None.

    Args:
        registration: Typed registration row.

    Returns:
        dict[str, object] | None: JSON-serializable registration payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if registration is None:
        return None
    return {
        "registrationId": str(registration.registration_id),
        "assemblyId": str(registration.assembly_id),
        "participantId": registration.participant_id,
        "participantType": registration.participant_type,
        "participantRole": registration.participant_role,
        "status": registration.status,
        "modalityId": None if registration.modality_id is None else str(registration.modality_id),
        "createdAt": registration.created_at_utc.isoformat(),
    }


def api_serialize_registration_report(report: RegistrationAnalyticsReport) -> dict[str, object]:
    """Serialize one registration analytics report.

    Args:
        report: Typed analytics report.

    Returns:
        dict[str, object]: JSON-serializable nested report.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "assemblyId": report.assembly_id,
        "summary": {
            "totalPredefinedParticipants": report.summary.total_predefined_participants,
            "totalRegisteredPredefined": report.summary.total_registered_predefined,
            "totalActiveRegistrations": report.summary.total_active_registrations,
            "totalOtherRegistrations": report.summary.total_other_registrations,
            "overallRegistrationRate": report.summary.overall_registration_rate,
        },
        "comitesPlenos": _api_serialize_category(report.comites_plenos, _api_serialize_comite_detail),
        "comitesNaoPlenos": _api_serialize_category(report.comites_nao_plenos, _api_serialize_comite_detail),
        "ebs": _api_serialize_category(report.ebs, _api_serialize_board_detail),
        "crs": _api_serialize_category(report.crs, _api_serialize_board_detail),
        "others": {
            "total": report.others.total,
            "byRole": [{"role": role_count.role, "count": role_count.count} for role_count in report.others.by_role],
            "details": [api_serialize_registration(registration) for registration in report.others.details],
        },
        "lastUpdated": api_serialize_epoch_millis(report.last_updated),
    }


def api_serialize_registration_stats(report: RegistrationStatsReport) -> dict[str, object]:
    """Serialize one registration counter report.

    Args:
        report: Typed counter report.

    Returns:
        dict[str, object]: JSON-serializable counter payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "assemblyId": report.assembly_id,
        "totalParticipants": report.total_participants,
        "totalRegistrations": report.total_registrations,
        "activeRegistrations": report.active_registrations,
        "registrationsByType": dict(report.registrations_by_type),
        "registrationsByStatus": dict(report.registrations_by_status),
        "participantsByType": dict(report.participants_by_type),
        "modalityStats": [
            {
                "modalityId": modality.modality_id,
                "name": modality.name,
                "price": modality.price,
                "maxParticipants": modality.max_participants,
                "currentRegistrations": modality.current_registrations,
                "isFull": modality.is_full,
                "isNearFull": modality.is_near_full,
            }
            for modality in report.modality_stats
        ],
        "assemblyCapacity": {
            "maxParticipants": report.assembly_capacity.max_participants,
            "currentRegistrations": report.assembly_capacity.current_registrations,
            "isFull": report.assembly_capacity.is_full,
            "isNearFull": report.assembly_capacity.is_near_full,
        },
    }


def api_serialize_assembly(assembly: AssemblyRecord) -> dict[str, object]:
    """Serialize one assembly row."""

    return {
        "assemblyId": str(assembly.assembly_id),
        "name": assembly.name,
        "type": assembly.type,
        "location": assembly.location,
        "startDate": assembly.start_date.isoformat(),
        "endDate": assembly.end_date.isoformat(),
        "status": assembly.status,
        "createdBy": assembly.created_by,
        "createdAt": assembly.created_at_utc.isoformat(),
        "lastUpdated": assembly.last_updated_at_utc.isoformat(),
        "lastUpdatedBy": assembly.last_updated_by,
        "registrationOpen": assembly.registration_open,
        "registrationDeadline": (
            None if assembly.registration_deadline is None else assembly.registration_deadline.isoformat()
        ),
        "maxParticipants": assembly.max_participants,
        "description": assembly.description,
        "paymentRequired": assembly.payment_required,
    }


def api_serialize_participant(participant: ParticipantRecord) -> dict[str, object]:
    """Serialize one roster row."""

    return {
        "agParticipantId": str(participant.ag_participant_id),
        "assemblyId": str(participant.assembly_id),
        "type": participant.type,
        "participantId": participant.participant_id,
        "name": participant.name,
        "role": participant.role,
        "status": participant.status,
        "escola": participant.escola,
        "regional": participant.regional,
        "cidade": participant.cidade,
        "uf": participant.uf,
        "agFiliacao": participant.ag_filiacao,
        "createdAt": participant.created_at_utc.isoformat(),
    }


def api_serialize_registration_modality(modality: RegistrationModalityRecord) -> dict[str, object]:
    return {
        "modalityId": str(modality.modality_id),
        "assemblyId": str(modality.assembly_id),
        "name": modality.name,
        "price": modality.price,
        "maxParticipants": modality.max_participants,
    }


def api_serialize_assembly_report_data(report_data: AssemblyReportData) -> dict[str, object]:
    """Serialize one assembly with its roster, registrations and modalities.

    Args:
        report_data: Assembly and related rows.

    Returns:
        dict[str, object]: JSON-serializable export payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "assembly": api_serialize_assembly(report_data.assembly),
        "participants": [api_serialize_participant(participant) for participant in report_data.participants],
        "registrations": [api_serialize_registration(registration) for registration in report_data.registrations],
        "modalities": [api_serialize_registration_modality(modality) for modality in report_data.modalities],
    }


def api_serialize_assembly_deletion(deletion_result: AssemblyDeletionResult) -> dict[str, object]:
    """Serialize removed row counts of one assembly deletion."""

    return {
        "deletedAssembly": str(deletion_result.assembly_id),
        "deletedRegistrations": deletion_result.deleted_registrations,
        "deletedModalities": deletion_result.deleted_modalities,
        "deletedParticipants": deletion_result.deleted_participants,
    }


def api_serialize_comite_entry(entry: ComiteRosterEntry) -> dict[str, object]:
    """Serialize one committee drop-down entry; `status` only when resolved."""

    payload: dict[str, object] = {
        "id": entry.id,
        "name": entry.name,
        "participantId": entry.participant_id,
        "escola": entry.escola,
        "cidade": entry.cidade,
        "uf": entry.uf,
        "agFiliacao": entry.ag_filiacao,
    }
    if entry.status is not None:
        payload["status"] = entry.status
    return payload


def api_serialize_board_entry(entry: BoardRosterEntry) -> dict[str, object]:
    """Serialize one board or coordinator drop-down entry."""

    return {
        "id": entry.id,
        "name": entry.name,
        "participantId": entry.participant_id,
        "participantName": entry.participant_name,
        "role": entry.role,
    }


def api_serialize_epoch_millis(value: datetime) -> int:
    """Render a timestamp as integer epoch milliseconds."""

    return int(value.timestamp() * 1000)


def _api_serialize_category(category: CategoryAnalytics, serialize_detail) -> dict[str, object]:
    return {
        "total": category.total,
        "registered": category.registered,
        "unregistered": category.unregistered,
        "registrationRate": category.registration_rate,
        "details": [serialize_detail(detail) for detail in category.details],
    }


def _api_serialize_comite_detail(detail: ComiteRegistrationDetail) -> dict[str, object]:
    return {
        "participantId": detail.participant_id,
        "name": detail.name,
        "escola": detail.escola,
        "cidade": detail.cidade,
        "uf": detail.uf,
        "regional": detail.regional,
        "agFiliacao": detail.ag_filiacao,
        "isRegistered": detail.is_registered,
        "registrationCount": detail.registration_count,
        "registration": api_serialize_registration(detail.registration),
    }


def _api_serialize_board_detail(detail: BoardMemberRegistrationDetail) -> dict[str, object]:
    return {
        "participantId": detail.participant_id,
        "name": detail.name,
        "role": detail.role,
        "isRegistered": detail.is_registered,
        "registrationCount": detail.registration_count,
        "registration": api_serialize_registration(detail.registration),
    }


__all__ = [
    "api_serialize_assembly",
    "api_serialize_board_entry",
    "api_serialize_comite_entry",
    "api_serialize_epoch_millis",
    "api_serialize_participant",
    "api_serialize_registration",
    "api_serialize_registration_report",
    "api_serialize_registration_stats",
]
