"""Shared participant and registration normalization helpers.

This module centralizes the identifier, status and collation rules used by
analytics, roster listings and assembly administration so that every view
derived from participant rows agrees on what counts as the same participant.
"""

from __future__ import annotations

import unicodedata
from uuid import UUID

DOMAIN_PARTICIPANT_TYPE_COMITE = "comite"
DOMAIN_PARTICIPANT_TYPE_EB = "eb"
DOMAIN_PARTICIPANT_TYPE_CR = "cr"

DOMAIN_COMITE_STATUS_PLENO = "Pleno"
DOMAIN_COMITE_STATUS_NAO_PLENO = "Não-pleno"

DOMAIN_INACTIVE_REGISTRATION_STATUSES = frozenset({"cancelled", "rejected"})

DOMAIN_OTHER_ROLE_FALLBACK = "unknown"


def domain_normalize_participant_id(value: str | None) -> str | None:
    """Normalize one external participant identifier for equality checks.

    Args:
        value: Raw participant identifier.

    Returns:
        str | None: Trimmed identifier, or None when missing or blank.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None:
        return None
    normalized_value = value.strip()
    if not normalized_value:
        return None
    return normalized_value


def domain_normalize_optional_text(value: str | None) -> str:
    """Normalize optional text for detail projections.

    Args:
        value: Optional raw text value.

    Returns:
        str: Trimmed text, or empty string when missing.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None:
        return ""
    return value.strip()


def domain_resolve_comite_status(status: str | None) -> str:
    """Resolve the effective committee status, defaulting to non-full membership.

    Args:
        status: Optional free-text status from the participant row.

    Returns:
        str: NFC-normalized status text, `Não-pleno` when missing or blank.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if status is None or not status.strip():
        return DOMAIN_COMITE_STATUS_NAO_PLENO
    return unicodedata.normalize("NFC", status.strip())


def domain_registration_is_active(status: str | None) -> bool:
    """Return whether a registration status counts as active.

    Args:
        status: Registration status value.

    Returns:
        bool: False only for cancelled or rejected registrations.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return status not in DOMAIN_INACTIVE_REGISTRATION_STATUSES


def domain_resolve_other_role(participant_role: str | None, participant_type: str | None) -> str:
    """Resolve the grouping role for registrations outside predefined rosters.

    Args:
        participant_role: Optional role declared on the registration.
        participant_type: Optional participant type declared on the registration.

    Returns:
        str: Role, falling back to type and then to `unknown`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return participant_role or participant_type or DOMAIN_OTHER_ROLE_FALLBACK


def domain_pt_br_sort_key(value: str | None) -> str:
    """Build an accent- and case-insensitive collation key for Portuguese text.

    Args:
        value: Text to collate.

    Returns:
        str: Comparison key with diacritics removed and case folded.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    decomposed_value = unicodedata.normalize("NFKD", value or "")
    base_characters = "".join(character for character in decomposed_value if not unicodedata.combining(character))
    return base_characters.casefold()


def domain_parse_assembly_id(value: str | None) -> UUID:
    """Validate and parse one assembly identifier before any data access.

    Args:
        value: Raw assembly identifier text.

    Returns:
        UUID: Parsed assembly identifier.

    Raises:
        ValueError: Raised when the identifier is missing, blank or not a UUID.
    """

    normalized_value = (value or "").strip()
    if not normalized_value:
        raise ValueError("assembly_id must not be blank")
    try:
        return UUID(normalized_value)
    except ValueError as error:
        raise ValueError("assembly_id must be a valid UUID") from error


__all__ = [
    "DOMAIN_COMITE_STATUS_NAO_PLENO",
    "DOMAIN_COMITE_STATUS_PLENO",
    "DOMAIN_INACTIVE_REGISTRATION_STATUSES",
    "DOMAIN_OTHER_ROLE_FALLBACK",
    "DOMAIN_PARTICIPANT_TYPE_COMITE",
    "DOMAIN_PARTICIPANT_TYPE_CR",
    "DOMAIN_PARTICIPANT_TYPE_EB",
    "domain_normalize_optional_text",
    "domain_normalize_participant_id",
    "domain_parse_assembly_id",
    "domain_pt_br_sort_key",
    "domain_registration_is_active",
    "domain_resolve_comite_status",
    "domain_resolve_other_role",
]
