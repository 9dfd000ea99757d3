"""Notification preferences and the delivery gate.

The gate decides whether an alert may be delivered to the user. It never
touches the store: a suppressed alert still exists and shows up again as
soon as its category is switched back on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from .alert_store import Alert, AlertCategory, InvalidPreferenceError
from .config import config


class DeliveryMethod(Enum):
    IN_APP = "in-app"
    EMAIL = "email"
    BOTH = "both"

    @property
    def includes_email(self) -> bool:
        return self in (DeliveryMethod.EMAIL, DeliveryMethod.BOTH)


class EmailSummaryFrequency(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    NONE = "none"


def _all_categories_on() -> dict[AlertCategory, bool]:
    return {category: True for category in AlertCategory}


@dataclass
class NotificationPreferences:
    """User-scoped notification settings.

    Category keys may be given as AlertCategory members or their string
    values; they are normalised to members. Every category must be present
    with a boolean value.

    Raises:
        InvalidPreferenceError: If any field is malformed.
    """
    enabled: bool = True
    categories: dict[AlertCategory, bool] = field(default_factory=_all_categories_on)
    delivery_method: DeliveryMethod = DeliveryMethod.IN_APP
    email_summary_frequency: EmailSummaryFrequency | None = EmailSummaryFrequency.DAILY

    def __post_init__(self):
        if not isinstance(self.enabled, bool):
            raise InvalidPreferenceError(f"'enabled' must be a boolean, got {self.enabled!r}")

        if not isinstance(self.categories, dict):
            raise InvalidPreferenceError("'categories' must map each category to a boolean")
        categories: dict[AlertCategory, bool] = {}
        for key, value in self.categories.items():
            try:
                category = key if isinstance(key, AlertCategory) else AlertCategory(key)
            except ValueError:
                raise InvalidPreferenceError(f"Unknown alert category: {key!r}") from None
            if not isinstance(value, bool):
                raise InvalidPreferenceError(
                    f"Category {category.value} must be a boolean, got {value!r}"
                )
            categories[category] = value
        missing = [c.value for c in AlertCategory if c not in categories]
        if missing:
            raise InvalidPreferenceError(f"Missing categories: {', '.join(missing)}")
        self.categories = categories

        try:
            self.delivery_method = DeliveryMethod(self.delivery_method)
        except ValueError:
            raise InvalidPreferenceError(
                f"Unknown delivery method: {self.delivery_method!r}"
            ) from None

        if self.email_summary_frequency is not None:
            try:
                self.email_summary_frequency = EmailSummaryFrequency(self.email_summary_frequency)
            except ValueError:
                raise InvalidPreferenceError(
                    f"Unknown email summary frequency: {self.email_summary_frequency!r}"
                ) from None

    @property
    def email_summary(self) -> EmailSummaryFrequency | None:
        """Summary frequency, only when delivery includes email."""
        if not self.delivery_method.includes_email:
            return None
        return self.email_summary_frequency

    def category_enabled(self, category: AlertCategory) -> bool:
        return self.categories.get(category, False)

    @classmethod
    def defaults(cls) -> "NotificationPreferences":
        """Everything on, delivered per the configured method."""
        return cls.from_dict({
            "enabled": True,
            "categories": {category.value: True for category in AlertCategory},
            "deliveryMethod": config.DELIVERY_METHOD,
            "emailSummaryFrequency": config.EMAIL_SUMMARY_FREQUENCY,
        })

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "categories": {
                category.value: self.category_enabled(category) for category in AlertCategory
            },
            "deliveryMethod": self.delivery_method.value,
            "emailSummaryFrequency": (
                self.email_summary_frequency.value if self.email_summary_frequency else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NotificationPreferences":
        """Build preferences from a settings-screen payload.

        Raises:
            InvalidPreferenceError: If the payload is malformed.
        """
        if not isinstance(data, dict):
            raise InvalidPreferenceError("Preferences payload must be a mapping")

        return cls(
            enabled=data.get("enabled", True),
            categories=data.get("categories"),
            delivery_method=data.get("deliveryMethod", DeliveryMethod.IN_APP.value),
            email_summary_frequency=data.get("emailSummaryFrequency") or None,
        )


def is_deliverable(alert: Alert, preferences: NotificationPreferences) -> bool:
    """Whether an alert of this category may be delivered to the user."""
    if not preferences.enabled:
        return False
    return preferences.category_enabled(alert.category)


def deliverable(alerts: Iterable[Alert], preferences: NotificationPreferences) -> list[Alert]:
    """Filter alerts by the preference gate, keeping their order."""
    return [alert for alert in alerts if is_deliverable(alert, preferences)]
