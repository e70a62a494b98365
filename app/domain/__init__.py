"""Domain models and normalization rules used across application layer boundaries."""

from .models import HealthStatus
from .participants import (
    DOMAIN_COMITE_STATUS_NAO_PLENO,
    DOMAIN_COMITE_STATUS_PLENO,
    DOMAIN_PARTICIPANT_TYPE_COMITE,
    DOMAIN_PARTICIPANT_TYPE_CR,
    DOMAIN_PARTICIPANT_TYPE_EB,
    domain_normalize_optional_text,
    domain_normalize_participant_id,
    domain_parse_assembly_id,
    domain_pt_br_sort_key,
    domain_registration_is_active,
    domain_resolve_comite_status,
    domain_resolve_other_role,
)

__all__ = [
    "HealthStatus",
    "DOMAIN_COMITE_STATUS_NAO_PLENO",
    "DOMAIN_COMITE_STATUS_PLENO",
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
