"""Alert storage module for farm alert lifecycle tracking.

Provides in-memory storage for managing alert lifecycle:
- Alert records with immutable content and a governed status
- Status transitions (new, read, snoozed, dismissed)
- Calendar-based snooze expiry
- Audit trail of applied changes
"""

from .errors import (
    AlertingError,
    NotFoundError,
    DuplicateAlertError,
    InvalidTransitionError,
    InvalidDurationError,
    InvalidPreferenceError,
    InvalidFilterError,
    InvalidAlertError,
)
from .models import (
    AlertCategory,
    AlertSeverity,
    AlertStatus,
    AuditAction,
    Alert,
    AlertAuditEntry,
)
from .snooze import SNOOZE_DURATIONS, compute_snooze_expiry
from .store import AlertStore
from .transitions import StatusTransitions

__all__ = [
    "AlertingError",
    "NotFoundError",
    "DuplicateAlertError",
    "InvalidTransitionError",
    "InvalidDurationError",
    "InvalidPreferenceError",
    "InvalidFilterError",
    "InvalidAlertError",
    "AlertCategory",
    "AlertSeverity",
    "AlertStatus",
    "AuditAction",
    "Alert",
    "AlertAuditEntry",
    "SNOOZE_DURATIONS",
    "compute_snooze_expiry",
    "AlertStore",
    "StatusTransitions",
]
