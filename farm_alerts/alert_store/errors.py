"""Exceptions raised by the alert store, transitions, views and preferences."""


class AlertingError(Exception):
    """Base exception for alerting operations."""

    def __init__(self, message: str, alert_id: str | None = None):
        super().__init__(message)
        self.alert_id = alert_id


class NotFoundError(AlertingError, KeyError):
    """No alert with the requested ID is stored."""

    def __init__(self, alert_id: str):
        super().__init__(f"Alert {alert_id} not found", alert_id=alert_id)

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class DuplicateAlertError(AlertingError):
    """An alert with the same ID is already stored."""

    def __init__(self, alert_id: str):
        super().__init__(f"Alert {alert_id} already exists", alert_id=alert_id)


class InvalidTransitionError(AlertingError):
    """A status change was requested on a dismissed alert."""

    def __init__(self, alert_id: str, from_status: str, action: str):
        super().__init__(
            f"Cannot {action} alert {alert_id}: status is {from_status}",
            alert_id=alert_id,
        )
        self.from_status = from_status
        self.action = action


class InvalidDurationError(AlertingError, ValueError):
    """Unrecognised snooze duration token."""

    def __init__(self, token: str, alert_id: str | None = None):
        super().__init__(f"Unknown snooze duration: {token!r}", alert_id=alert_id)
        self.token = token


class InvalidPreferenceError(AlertingError, ValueError):
    """Malformed notification preferences payload."""


class InvalidFilterError(AlertingError, ValueError):
    """Unrecognised category/severity/status value or sort field in a view request."""


class InvalidAlertError(AlertingError, ValueError):
    """Alert record or payload is malformed (missing fields, wrong types, broken snooze state)."""
