"""Data models for farm alerts."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
import uuid

from .errors import InvalidAlertError, InvalidFilterError


class AlertCategory(Enum):
    """What part of the farm an alert is about."""
    WEATHER = "weather"
    TASK = "task"
    HEALTH = "health"
    OPPORTUNITY = "opportunity"

    @classmethod
    def display_name(cls, category: "AlertCategory") -> str:
        """Get human-readable label for a category."""
        return {
            cls.WEATHER: "Weather Alert",
            cls.TASK: "Task Reminder",
            cls.HEALTH: "Health Notice",
            cls.OPPORTUNITY: "Opportunity",
        }[category]

    @classmethod
    def parse(cls, value: "AlertCategory | str") -> "AlertCategory":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidFilterError(f"Unknown alert category: {value!r}") from None


class AlertSeverity(Enum):
    """How urgently an alert wants attention."""
    NOTICE = "notice"
    HEADS_UP = "heads-up"
    IMPORTANT = "important"

    @property
    def rank(self) -> int:
        """Ordinal used for sorting: important > heads-up > notice."""
        return _SEVERITY_RANK[self]

    @classmethod
    def display_name(cls, severity: "AlertSeverity") -> str:
        return {
            cls.NOTICE: "Notice",
            cls.HEADS_UP: "Heads-up",
            cls.IMPORTANT: "Important",
        }[severity]

    @classmethod
    def parse(cls, value: "AlertSeverity | str") -> "AlertSeverity":
        """Parse a severity, accepting the high/medium/low synonyms."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _SEVERITY_SYNONYMS.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidFilterError(f"Unknown alert severity: {value!r}") from None


_SEVERITY_RANK = {
    AlertSeverity.NOTICE: 1,
    AlertSeverity.HEADS_UP: 2,
    AlertSeverity.IMPORTANT: 3,
}

_SEVERITY_SYNONYMS = {
    "low": AlertSeverity.NOTICE.value,
    "medium": AlertSeverity.HEADS_UP.value,
    "high": AlertSeverity.IMPORTANT.value,
    "heads_up": AlertSeverity.HEADS_UP.value,
}


class AlertStatus(Enum):
    """Alert lifecycle status."""
    NEW = "new"              # Submitted, not yet looked at
    READ = "read"            # Opened by the user
    SNOOZED = "snoozed"      # Hidden until snoozed_until (no automatic wake)
    DISMISSED = "dismissed"  # Terminal, kept for history

    @classmethod
    def display_name(cls, status: "AlertStatus") -> str:
        return status.value.capitalize()

    @classmethod
    def parse(cls, value: "AlertStatus | str") -> "AlertStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidFilterError(f"Unknown alert status: {value!r}") from None


class AuditAction(Enum):
    """Actions tracked in the audit trail."""
    CREATED = "created"
    READ = "read"
    SNOOZED = "snoozed"
    DISMISSED = "dismissed"


def generate_alert_id() -> str:
    """Generate a unique alert ID."""
    return str(uuid.uuid4())[:8]


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Alert:
    """A single notice surfaced to the farmer.

    Records are immutable; status changes produce a new record through
    ``StatusTransitions``. ``snoozed_until`` is set if and only if the
    status is ``SNOOZED``.
    """
    id: str
    category: AlertCategory
    severity: AlertSeverity
    title: str
    short_description: str
    timestamp: datetime
    status: AlertStatus = AlertStatus.NEW
    full_description: str | None = None
    affected_modules: tuple[str, ...] = ()
    icon: str = ""
    created_at: datetime | None = None
    expires_at: datetime | None = None
    snoozed_until: datetime | None = None
    action_label: str | None = None
    action_link: str | None = None
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        # Normalise loosely-typed input so enum and datetime fields are exact
        try:
            object.__setattr__(self, "category", AlertCategory.parse(self.category))
            object.__setattr__(self, "severity", AlertSeverity.parse(self.severity))
            object.__setattr__(self, "status", AlertStatus.parse(self.status))
        except InvalidFilterError as e:
            raise InvalidAlertError(f"Alert {self.id}: {e}", alert_id=self.id) from None
        for name in ("title", "short_description"):
            value = getattr(self, name)
            if value is None:
                object.__setattr__(self, name, "")
            elif not isinstance(value, str):
                raise InvalidAlertError(
                    f"Alert {self.id}: {name} must be text, got {type(value).__name__}",
                    alert_id=self.id,
                )
        if self.full_description is not None and not isinstance(self.full_description, str):
            raise InvalidAlertError(
                f"Alert {self.id}: full_description must be text, "
                f"got {type(self.full_description).__name__}",
                alert_id=self.id,
            )
        object.__setattr__(self, "affected_modules", tuple(self.affected_modules))
        object.__setattr__(self, "metadata", dict(self.metadata or {}))
        try:
            timestamp = parse_timestamp(self.timestamp)
            created_at = parse_timestamp(self.created_at)
            expires_at = parse_timestamp(self.expires_at)
            snoozed_until = parse_timestamp(self.snoozed_until)
        except (ValueError, AttributeError) as e:
            raise InvalidAlertError(
                f"Alert {self.id}: bad timestamp ({e})", alert_id=self.id
            ) from None
        if timestamp is None:
            raise InvalidAlertError(f"Alert {self.id} has no timestamp", alert_id=self.id)
        object.__setattr__(self, "timestamp", timestamp)
        object.__setattr__(self, "created_at", created_at or timestamp)
        object.__setattr__(self, "expires_at", expires_at)
        object.__setattr__(self, "snoozed_until", snoozed_until)

        if (self.status == AlertStatus.SNOOZED) != (self.snoozed_until is not None):
            raise InvalidAlertError(
                f"Alert {self.id}: snoozed_until must be set exactly when status is snoozed "
                f"(status={self.status.value}, snoozed_until={self.snoozed_until})",
                alert_id=self.id,
            )

    @property
    def is_active(self) -> bool:
        """Anything not dismissed."""
        return self.status != AlertStatus.DISMISSED

    def is_snooze_expired(self, now: datetime) -> bool:
        """Check if a snoozed alert has passed its expiry.

        Purely informational: snoozed alerts stay snoozed until a user
        action changes their status.
        """
        if self.status != AlertStatus.SNOOZED:
            return False
        return now >= self.snoozed_until

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase payload used by the planner screens."""
        return {
            "id": self.id,
            "category": self.category.value,
            "severity": self.severity.value,
            "status": self.status.value,
            "title": self.title,
            "shortDescription": self.short_description,
            "fullDescription": self.full_description,
            "affectedModules": list(self.affected_modules),
            "icon": self.icon,
            "timestamp": format_timestamp(self.timestamp),
            "createdAt": format_timestamp(self.created_at),
            "expiresAt": format_timestamp(self.expires_at),
            "snoozedUntil": format_timestamp(self.snoozed_until),
            "actionLabel": self.action_label,
            "actionLink": self.action_link,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Alert":
        """Create from a camelCase payload.

        Accepts ``message`` as an alias of ``shortDescription``. An ID is
        generated when the payload has none.
        """
        if not isinstance(data, dict):
            raise InvalidAlertError(f"Alert payload must be a mapping, got {type(data).__name__}")
        alert_id = str(data.get("id") or generate_alert_id())
        if not data.get("category") or not data.get("severity"):
            raise InvalidAlertError(
                f"Alert {alert_id} payload needs both category and severity", alert_id=alert_id
            )
        timestamp = data.get("timestamp") or data.get("createdAt")
        if not timestamp:
            raise InvalidAlertError(f"Alert {alert_id} payload needs a timestamp", alert_id=alert_id)

        short_description = data.get("shortDescription")
        if short_description is None:
            short_description = data.get("message")

        return cls(
            id=alert_id,
            category=data["category"],
            severity=data["severity"],
            status=data.get("status") or AlertStatus.NEW,
            title=data.get("title"),
            short_description=short_description,
            full_description=data.get("fullDescription"),
            affected_modules=tuple(data.get("affectedModules") or ()),
            icon=data.get("icon") or "",
            timestamp=timestamp,
            created_at=data.get("createdAt"),
            expires_at=data.get("expiresAt"),
            snoozed_until=data.get("snoozedUntil"),
            action_label=data.get("actionLabel"),
            action_link=data.get("actionLink"),
            metadata=data.get("metadata") or {},
        )


@dataclass(frozen=True)
class AlertAuditEntry:
    """Audit trail entry for an applied alert change."""
    alert_id: str
    action: AuditAction
    performed_at: datetime
    details: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "alert_id": self.alert_id,
            "action": self.action.value,
            "performed_at": self.performed_at.isoformat(),
            "details": self.details,
        }
