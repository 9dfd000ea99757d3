"""Alert center: the API the planner screens call into.

Collaborators submit alerts, ask for the filtered list and the unread
badge count, act on single alerts, and save notification preferences.
Everything runs synchronously against in-memory state.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable

from .alert_store import (
    Alert,
    AlertAuditEntry,
    AlertStatus,
    AlertStore,
    InvalidPreferenceError,
    StatusTransitions,
)
from .alert_store.transitions import utc_now
from .preferences import NotificationPreferences, deliverable
from .views import AlertFilter, AlertSort, filter_and_sort, summarize

logger = logging.getLogger(__name__)


class AlertCenter:
    """Composes the store, transitions, views and preference gate."""

    def __init__(
        self,
        store: AlertStore | None = None,
        preferences: NotificationPreferences | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize alert center.

        Args:
            store: Alert store to operate on. Defaults to an empty store.
            preferences: Starting preferences. Defaults to
                         NotificationPreferences.defaults().
            clock: Returns "now" as an aware datetime. Defaults to UTC wall clock.
        """
        self.store = store if store is not None else AlertStore()
        self.preferences = preferences or NotificationPreferences.defaults()
        self.clock = clock or utc_now
        self.transitions = StatusTransitions(self.store, clock=self.clock)

    # Inbound operations

    def submit_alert(self, alert_data: Alert | dict[str, Any]) -> Alert:
        """Add a new alert from a collaborator; it always starts as new.

        Raises:
            DuplicateAlertError: If the ID is already stored.
            InvalidAlertError: If the payload is malformed (unknown category or
                               severity, missing timestamp, non-text title).
        """
        if isinstance(alert_data, Alert):
            payload = alert_data.to_dict()
        else:
            payload = dict(alert_data)
        payload["status"] = AlertStatus.NEW.value
        payload["snoozedUntil"] = None
        if not payload.get("timestamp") and not payload.get("createdAt"):
            payload["timestamp"] = self.clock().isoformat()

        return self.store.add(Alert.from_dict(payload))

    def view_alert(self, alert_id: str) -> Alert:
        """Open an alert: marks it read and returns the updated record."""
        return self.transitions.mark_read(alert_id)

    def dismiss_alert(self, alert_id: str) -> Alert:
        return self.transitions.dismiss(alert_id)

    def snooze_alert(self, alert_id: str, duration_token: str) -> Alert:
        return self.transitions.snooze(alert_id, duration_token)

    def mark_all_read(self) -> list[Alert]:
        return self.transitions.mark_all_read()

    def save_preferences(
        self, preferences: NotificationPreferences | dict[str, Any]
    ) -> NotificationPreferences:
        """Replace notification preferences wholesale.

        Raises:
            InvalidPreferenceError: If the payload is malformed; the current
                                    preferences are kept.
        """
        try:
            if isinstance(preferences, dict):
                preferences = NotificationPreferences.from_dict(preferences)
            elif isinstance(preferences, NotificationPreferences):
                # Rebuild so changes made after construction are checked too
                preferences = replace(preferences)
            else:
                raise InvalidPreferenceError(
                    f"Expected preferences mapping, got {type(preferences).__name__}"
                )
        except InvalidPreferenceError as e:
            logger.warning(f"Refused preferences update: {e}")
            raise

        self.preferences = preferences
        logger.info(
            f"Notification preferences saved (enabled={preferences.enabled}, "
            f"delivery={preferences.delivery_method.value})"
        )
        return preferences

    def get_filtered_view(
        self,
        alert_filter: AlertFilter | dict[str, Any] | None = None,
        sort: AlertSort | dict[str, Any] | None = None,
    ) -> list[Alert]:
        """Filtered, sorted list for display; dismissed alerts never appear."""
        if not isinstance(alert_filter, AlertFilter):
            alert_filter = AlertFilter.from_dict(alert_filter)
        if not isinstance(sort, AlertSort):
            sort = AlertSort.from_dict(sort)
        return filter_and_sort(self.store.all(), alert_filter, sort)

    def unread_count(self) -> int:
        """Number of new alerts among those not dismissed."""
        return len(self.store.with_status(AlertStatus.NEW))

    # Supporting queries

    def get_alert(self, alert_id: str) -> Alert:
        """Look up an alert without changing its status."""
        return self.store.get(alert_id)

    def stats(self) -> dict[str, int]:
        return summarize(self.store.all())

    def deliverable_alerts(self) -> list[Alert]:
        """Non-dismissed alerts that pass the preference gate, in store order."""
        active = [a for a in self.store.all() if a.status != AlertStatus.DISMISSED]
        return deliverable(active, self.preferences)

    def expired_snoozes(self) -> list[Alert]:
        """Snoozed alerts whose expiry has passed. They are not woken."""
        now = self.clock()
        return [a for a in self.store.with_status(AlertStatus.SNOOZED) if a.is_snooze_expired(now)]

    def audit_log(self, alert_id: str | None = None) -> list[AlertAuditEntry]:
        return self.store.get_audit_log(alert_id)
