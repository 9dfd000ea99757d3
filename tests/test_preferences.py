"""Tests for notification preferences and the delivery gate."""

import pytest

from farm_alerts import (
    AlertCategory,
    DeliveryMethod,
    EmailSummaryFrequency,
    InvalidPreferenceError,
    NotificationPreferences,
    deliverable,
    is_deliverable,
)

from conftest import make_alert


def payload(**overrides):
    """Settings-screen payload with everything switched on."""
    data = {
        "enabled": True,
        "categories": {"weather": True, "task": True, "health": True, "opportunity": True},
        "deliveryMethod": "in-app",
        "emailSummaryFrequency": "daily",
    }
    data.update(overrides)
    return data


class TestNotificationPreferences:
    """Tests for NotificationPreferences parsing and defaults."""

    def test_defaults(self):
        """Test defaults turn everything on with in-app delivery."""
        prefs = NotificationPreferences.defaults()

        assert prefs.enabled is True
        assert all(prefs.category_enabled(c) for c in AlertCategory)
        assert prefs.delivery_method == DeliveryMethod.IN_APP
        assert prefs.email_summary_frequency == EmailSummaryFrequency.DAILY

    def test_round_trip(self):
        """Test to_dict reproduces the payload it was built from."""
        data = payload(deliveryMethod="both", emailSummaryFrequency="weekly")
        assert NotificationPreferences.from_dict(data).to_dict() == data

    def test_email_summary_only_with_email_delivery(self):
        """Test summary frequency is ignored for in-app only delivery."""
        in_app = NotificationPreferences.from_dict(payload())
        email = NotificationPreferences.from_dict(payload(deliveryMethod="email"))

        assert in_app.email_summary is None
        assert email.email_summary == EmailSummaryFrequency.DAILY

    def test_unknown_category_rejected(self):
        """Test unknown category key raises InvalidPreferenceError."""
        data = payload()
        data["categories"]["orchard"] = True

        with pytest.raises(InvalidPreferenceError, match="orchard"):
            NotificationPreferences.from_dict(data)

    def test_missing_category_rejected(self):
        """Test a partial category map is refused."""
        with pytest.raises(InvalidPreferenceError, match="health"):
            NotificationPreferences.from_dict(
                payload(categories={"weather": True, "task": True, "opportunity": True})
            )

    @pytest.mark.parametrize("bad", [
        {"enabled": "yes"},
        {"categories": ["weather"]},
        {"categories": {"weather": 1, "task": True, "health": True, "opportunity": True}},
        {"deliveryMethod": "sms"},
        {"emailSummaryFrequency": "hourly"},
    ])
    def test_malformed_payload_rejected(self, bad):
        """Test malformed fields raise InvalidPreferenceError."""
        with pytest.raises(InvalidPreferenceError):
            NotificationPreferences.from_dict(payload(**bad))

    def test_constructor_normalises_string_keys(self):
        """Test category names given as strings become AlertCategory members."""
        prefs = NotificationPreferences(
            categories={"weather": False, "task": True, "health": True, "opportunity": True},
            delivery_method="both",
            email_summary_frequency="weekly",
        )

        assert set(prefs.categories) == set(AlertCategory)
        assert prefs.category_enabled(AlertCategory.WEATHER) is False
        assert prefs.category_enabled(AlertCategory.TASK) is True
        assert prefs.delivery_method == DeliveryMethod.BOTH
        assert prefs.email_summary == EmailSummaryFrequency.WEEKLY

    @pytest.mark.parametrize("kwargs", [
        {"enabled": 1},
        {"categories": {"weather": True, "orchard": True}},
        {"categories": {"weather": True, "task": True, "health": True}},
        {"categories": {c: "on" for c in AlertCategory}},
        {"categories": None},
        {"delivery_method": "sms"},
        {"email_summary_frequency": "hourly"},
    ])
    def test_constructor_validates(self, kwargs):
        """Test direct construction applies the same checks as from_dict."""
        with pytest.raises(InvalidPreferenceError):
            NotificationPreferences(**kwargs)

    def test_non_mapping_rejected(self):
        """Test non-dict payload raises InvalidPreferenceError."""
        with pytest.raises(InvalidPreferenceError):
            NotificationPreferences.from_dict(["enabled"])


class TestPreferenceGate:
    """Tests for is_deliverable."""

    def test_category_switched_off(self):
        """Test weather alerts are held back when weather is off."""
        prefs = NotificationPreferences.from_dict(
            payload(categories={"weather": False, "task": True, "health": True, "opportunity": True})
        )
        weather = make_alert("a", category=AlertCategory.WEATHER)
        task = make_alert("b", category=AlertCategory.TASK)

        assert is_deliverable(weather, prefs) is False
        assert is_deliverable(task, prefs) is True

    def test_master_switch_off(self):
        """Test nothing is deliverable when notifications are disabled."""
        prefs = NotificationPreferences.from_dict(payload(enabled=False))

        for category in AlertCategory:
            assert is_deliverable(make_alert("a", category=category), prefs) is False

    def test_deliverable_keeps_order(self):
        """Test deliverable() filters without reordering."""
        prefs = NotificationPreferences.from_dict(
            payload(categories={"weather": True, "task": False, "health": True, "opportunity": True})
        )
        alerts = [
            make_alert("w", category=AlertCategory.WEATHER),
            make_alert("t", category=AlertCategory.TASK),
            make_alert("h", category=AlertCategory.HEALTH),
        ]

        assert [a.id for a in deliverable(alerts, prefs)] == ["w", "h"]
