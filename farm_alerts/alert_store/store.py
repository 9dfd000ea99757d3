"""In-memory alert storage."""

import logging
from datetime import datetime

from .errors import DuplicateAlertError, NotFoundError
from .models import Alert, AlertAuditEntry, AuditAction, AlertStatus

logger = logging.getLogger(__name__)


class AlertStore:
    """Canonical collection of alerts, kept in insertion order.

    Alerts are never removed; dismissal is a status. Status changes go
    through ``StatusTransitions``, which is the only caller of ``_put``.
    """

    def __init__(self, alerts: list[Alert] | None = None):
        """Initialize alert store.

        Args:
            alerts: Optional alerts to load, e.g. restored from a snapshot.
        """
        self._alerts: dict[str, Alert] = {}
        self._audit: list[AlertAuditEntry] = []
        for alert in alerts or []:
            self.add(alert)

    def __len__(self) -> int:
        return len(self._alerts)

    def __contains__(self, alert_id: str) -> bool:
        return alert_id in self._alerts

    # Core alert operations

    def add(self, alert: Alert) -> Alert:
        """Insert a new alert.

        Raises:
            DuplicateAlertError: If an alert with the same ID is stored.
        """
        if alert.id in self._alerts:
            raise DuplicateAlertError(alert.id)

        self._alerts[alert.id] = alert
        self._record(
            alert.id,
            AuditAction.CREATED,
            alert.created_at,
            f"{alert.category.value}/{alert.severity.value}: {alert.title}",
        )
        logger.info(f"Alert {alert.id} added ({alert.category.value}, {alert.severity.value})")
        return alert

    def get(self, alert_id: str) -> Alert:
        """Get an alert by ID.

        Raises:
            NotFoundError: If no such alert is stored.
        """
        try:
            return self._alerts[alert_id]
        except KeyError:
            raise NotFoundError(alert_id) from None

    def all(self) -> list[Alert]:
        """Every alert, dismissed included, in insertion order."""
        return list(self._alerts.values())

    def with_status(self, status: AlertStatus) -> list[Alert]:
        return [a for a in self._alerts.values() if a.status == status]

    def get_audit_log(self, alert_id: str | None = None) -> list[AlertAuditEntry]:
        """Audit trail, optionally for one alert, oldest first."""
        if alert_id is None:
            return list(self._audit)
        return [entry for entry in self._audit if entry.alert_id == alert_id]

    def to_list(self) -> list[dict]:
        """Serialize all alerts for an external persistence layer."""
        return [alert.to_dict() for alert in self._alerts.values()]

    @classmethod
    def from_list(cls, rows: list[dict]) -> "AlertStore":
        return cls([Alert.from_dict(row) for row in rows])

    # Internal helpers used by StatusTransitions

    def _put(self, alert: Alert) -> None:
        """Replace a stored record in place, keeping its position."""
        if alert.id not in self._alerts:
            raise NotFoundError(alert.id)
        self._alerts[alert.id] = alert

    def _record(
        self,
        alert_id: str,
        action: AuditAction,
        performed_at: datetime,
        details: str | None = None,
    ) -> None:
        self._audit.append(
            AlertAuditEntry(
                alert_id=alert_id,
                action=action,
                performed_at=performed_at,
                details=details,
            )
        )
