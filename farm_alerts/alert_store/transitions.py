"""Alert status transitions.

    new ──read──▶ read ──snooze──┐
     │                           ▼
     ├──────snooze──────────▶ snoozed ◀─ snooze (re-snooze replaces the expiry)
     │                           │
     └──dismiss──────────────────┴──▶ dismissed (terminal)

Marking a snoozed alert read brings it back as read and clears the
expiry. Dismissing a dismissed alert is a no-op; any other action on a
dismissed alert raises InvalidTransitionError. Snoozed alerts are never
woken automatically.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from .errors import InvalidTransitionError
from .models import Alert, AlertStatus, AuditAction
from .snooze import compute_snooze_expiry
from .store import AlertStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StatusTransitions:
    """Validates and applies status changes to alerts in an AlertStore."""

    def __init__(self, store: AlertStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    def mark_read(self, alert_id: str) -> Alert:
        """Move a new (or snoozed) alert to read. Already-read is a no-op."""
        alert = self.store.get(alert_id)
        self._reject_if_dismissed(alert, "mark read")

        if alert.status == AlertStatus.READ:
            logger.debug(f"Alert {alert_id} already read")
            return alert

        return self._apply(alert, AlertStatus.READ, AuditAction.READ)

    def dismiss(self, alert_id: str) -> Alert:
        """Dismiss an alert. Dismissing twice is a no-op."""
        alert = self.store.get(alert_id)

        if alert.status == AlertStatus.DISMISSED:
            logger.debug(f"Alert {alert_id} already dismissed")
            return alert

        return self._apply(alert, AlertStatus.DISMISSED, AuditAction.DISMISSED)

    def snooze(self, alert_id: str, duration_token: str) -> Alert:
        """Snooze an alert, computing the expiry from the duration token.

        Re-snoozing replaces the previous expiry rather than extending it.
        """
        alert = self.store.get(alert_id)
        self._reject_if_dismissed(alert, "snooze")

        now = self.clock()
        snoozed_until = compute_snooze_expiry(now, duration_token)
        return self._apply(
            alert,
            AlertStatus.SNOOZED,
            AuditAction.SNOOZED,
            snoozed_until=snoozed_until,
            now=now,
            details=f"Snoozed for {duration_token} until {snoozed_until.isoformat()}",
        )

    def mark_all_read(self) -> list[Alert]:
        """Move every new alert to read; returns the alerts that changed."""
        now = self.clock()
        changed = [
            self._apply(alert, AlertStatus.READ, AuditAction.READ, now=now, quiet=True)
            for alert in self.store.with_status(AlertStatus.NEW)
        ]
        logger.info(f"Marked {len(changed)} alert(s) read")
        return changed

    def _reject_if_dismissed(self, alert: Alert, action: str) -> None:
        if alert.status == AlertStatus.DISMISSED:
            logger.warning(f"Rejected {action} on dismissed alert {alert.id}")
            raise InvalidTransitionError(alert.id, alert.status.value, action)

    def _apply(
        self,
        alert: Alert,
        new_status: AlertStatus,
        audit_action: AuditAction,
        snoozed_until: datetime | None = None,
        now: datetime | None = None,
        details: str | None = None,
        quiet: bool = False,
    ) -> Alert:
        """Store the new status; snoozed_until is cleared unless snoozing."""
        updated = replace(alert, status=new_status, snoozed_until=snoozed_until)
        self.store._put(updated)
        self.store._record(alert.id, audit_action, now or self.clock(), details)
        if not quiet:
            logger.info(f"Alert {alert.id}: {alert.status.value} -> {new_status.value}")
        return updated
