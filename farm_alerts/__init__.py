"""Alert lifecycle and notification preferences for the farm planner."""

from .alert_store import (
    AlertingError,
    NotFoundError,
    DuplicateAlertError,
    InvalidTransitionError,
    InvalidDurationError,
    InvalidPreferenceError,
    InvalidFilterError,
    InvalidAlertError,
    AlertCategory,
    AlertSeverity,
    AlertStatus,
    Alert,
    AlertAuditEntry,
    AlertStore,
    StatusTransitions,
    compute_snooze_expiry,
)
from .preferences import (
    DeliveryMethod,
    EmailSummaryFrequency,
    NotificationPreferences,
    is_deliverable,
    deliverable,
)
from .views import (
    AlertFilter,
    AlertSort,
    SortField,
    SortDirection,
    filter_and_sort,
    summarize,
    time_ago,
)
from .center import AlertCenter

__all__ = [
    # Errors
    "AlertingError",
    "NotFoundError",
    "DuplicateAlertError",
    "InvalidTransitionError",
    "InvalidDurationError",
    "InvalidPreferenceError",
    "InvalidFilterError",
    "InvalidAlertError",
    # Alert Store
    "AlertCategory",
    "AlertSeverity",
    "AlertStatus",
    "Alert",
    "AlertAuditEntry",
    "AlertStore",
    "StatusTransitions",
    "compute_snooze_expiry",
    # Preferences
    "DeliveryMethod",
    "EmailSummaryFrequency",
    "NotificationPreferences",
    "is_deliverable",
    "deliverable",
    # Views
    "AlertFilter",
    "AlertSort",
    "SortField",
    "SortDirection",
    "filter_and_sort",
    "summarize",
    "time_ago",
    # Facade
    "AlertCenter",
]
