"""Derived views over alerts: filtering, sorting and summary counts.

Views are computed on demand and never mutate the alerts they are given.
Dismissed alerts are left out of every filtered view, whatever the status
filter asks for.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable

from .alert_store import (
    Alert,
    AlertCategory,
    AlertStatus,
    InvalidFilterError,
)
from .config import config

logger = logging.getLogger(__name__)

ALL = "all"


class SortField(Enum):
    TIMESTAMP = "timestamp"
    SEVERITY = "severity"
    TITLE = "title"
    CATEGORY = "category"
    STATUS = "status"


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.ASC if self == SortDirection.DESC else SortDirection.DESC


def _parse_enum(enum_cls, value, what: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise InvalidFilterError(f"Unknown {what}: {value!r}") from None


@dataclass(frozen=True)
class AlertFilter:
    """Display filter for the alerts list.

    ``None`` for category or status means "all". ``modules`` restricts to
    alerts tagged with at least one of the given modules; empty means no
    restriction.
    """
    category: AlertCategory | None = None
    status: AlertStatus | None = None
    search_text: str = ""
    modules: tuple[str, ...] = ()

    def __post_init__(self):
        if self.category is not None:
            object.__setattr__(self, "category", AlertCategory.parse(self.category))
        if self.status is not None:
            object.__setattr__(self, "status", AlertStatus.parse(self.status))
        object.__setattr__(self, "search_text", self.search_text or "")
        object.__setattr__(self, "modules", tuple(self.modules or ()))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "AlertFilter":
        """Parse {category, status, searchText, modules}; "all" means unrestricted."""
        data = data or {}
        category = data.get("category", ALL)
        status = data.get("status", ALL)
        return cls(
            category=None if category in (None, ALL) else category,
            status=None if status in (None, ALL) else status,
            search_text=data.get("searchText", ""),
            modules=tuple(data.get("modules") or ()),
        )

    def matches(self, alert: Alert) -> bool:
        if alert.status == AlertStatus.DISMISSED:
            return False
        if self.category is not None and alert.category != self.category:
            return False
        if self.status is not None and alert.status != self.status:
            return False
        if self.search_text:
            needle = self.search_text.lower()
            if needle not in alert.title.lower() and needle not in alert.short_description.lower():
                return False
        if self.modules:
            wanted = {m.lower() for m in self.modules}
            if not any(m.lower() in wanted for m in alert.affected_modules):
                return False
        return True


@dataclass(frozen=True)
class AlertSort:
    """Sort key and direction for the alerts list."""
    field: SortField | str = config.DEFAULT_SORT_FIELD
    direction: SortDirection | str = config.DEFAULT_SORT_DIRECTION

    def __post_init__(self):
        object.__setattr__(self, "field", _parse_enum(SortField, self.field, "sort field"))
        object.__setattr__(
            self, "direction", _parse_enum(SortDirection, self.direction, "sort direction")
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "AlertSort":
        data = data or {}
        return cls(
            field=data.get("field", config.DEFAULT_SORT_FIELD),
            direction=data.get("direction", config.DEFAULT_SORT_DIRECTION),
        )

    def toggled(self, sort_field: SortField | str) -> "AlertSort":
        """Header click: same field flips direction, a new field starts descending."""
        sort_field = _parse_enum(SortField, sort_field, "sort field")
        if sort_field == self.field:
            return AlertSort(field=self.field, direction=self.direction.flipped())
        return AlertSort(field=sort_field, direction=SortDirection.DESC)


_SORT_KEYS: dict[SortField, Callable[[Alert], Any]] = {
    SortField.TIMESTAMP: lambda a: a.timestamp.timestamp(),
    SortField.SEVERITY: lambda a: a.severity.rank,
    SortField.TITLE: lambda a: a.title.lower(),
    SortField.CATEGORY: lambda a: a.category.value,
    SortField.STATUS: lambda a: a.status.value,
}


def filter_and_sort(
    alerts: Iterable[Alert],
    alert_filter: AlertFilter | None = None,
    sort: AlertSort | None = None,
) -> list[Alert]:
    """Return a fresh, filtered and stably sorted list of alerts.

    Equal keys keep their incoming relative order in both directions.
    """
    alert_filter = alert_filter or AlertFilter()
    sort = sort or AlertSort()

    matched = [alert for alert in alerts if alert_filter.matches(alert)]
    # sorted() stays stable with reverse=True
    result = sorted(
        matched,
        key=_SORT_KEYS[sort.field],
        reverse=sort.direction == SortDirection.DESC,
    )
    logger.debug(
        f"View: {len(result)} alert(s) by {sort.field.value} {sort.direction.value}"
    )
    return result


# Stat keys as shown on the alerts screen tiles
_CATEGORY_STAT_KEYS = {
    AlertCategory.WEATHER: "weather",
    AlertCategory.TASK: "tasks",
    AlertCategory.HEALTH: "health",
    AlertCategory.OPPORTUNITY: "opportunities",
}


def summarize(alerts: Iterable[Alert]) -> dict[str, int]:
    """Counts over non-dismissed alerts.

    Keys: total, new, weather, tasks, health, opportunities.
    """
    active = [a for a in alerts if a.status != AlertStatus.DISMISSED]
    stats = {
        "total": len(active),
        "new": sum(1 for a in active if a.status == AlertStatus.NEW),
    }
    for category, key in _CATEGORY_STAT_KEYS.items():
        stats[key] = sum(1 for a in active if a.category == category)
    return stats


def time_ago(timestamp: datetime, now: datetime) -> str:
    """Short relative age, as shown on alert cards."""
    hours = int((now - timestamp).total_seconds() // 3600)
    days = hours // 24

    if hours < 1:
        return "Just now"
    if hours < config.RECENT_HOURS:
        return f"{hours}h ago"
    if days <= 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    return timestamp.date().isoformat()
