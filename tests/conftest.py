"""Shared fixtures for farm alert tests."""

import pytest
from datetime import datetime, timedelta, timezone

from farm_alerts import Alert, AlertCategory, AlertCenter, AlertSeverity, AlertStore

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_alert(
    alert_id: str,
    category: AlertCategory = AlertCategory.WEATHER,
    severity: AlertSeverity = AlertSeverity.NOTICE,
    hours_ago: float = 1,
    **kwargs,
) -> Alert:
    """Build an alert with sensible defaults."""
    kwargs.setdefault("title", f"Alert {alert_id}")
    kwargs.setdefault("short_description", f"Description for {alert_id}")
    return Alert(
        id=alert_id,
        category=category,
        severity=severity,
        timestamp=NOW - timedelta(hours=hours_ago),
        **kwargs,
    )


@pytest.fixture
def now():
    """Fixed reference time."""
    return NOW


@pytest.fixture
def clock():
    """Clock returning the fixed reference time."""
    return lambda: NOW


@pytest.fixture
def store():
    """Empty alert store."""
    return AlertStore()


@pytest.fixture
def center(store, clock):
    """Alert center over the empty store with a fixed clock."""
    return AlertCenter(store=store, clock=clock)
