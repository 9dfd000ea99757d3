"""Sample farm alerts for demos and tests.

Ages are relative to ``now`` so "time ago" text stays meaningful. Statuses
are already mixed (read, snoozed), so these are loaded straight into the
store rather than submitted.
"""

from datetime import datetime, timedelta

from .alert_store import Alert, AlertCategory, AlertSeverity, AlertStatus
from .center import AlertCenter

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)


def sample_alerts(now: datetime) -> list[Alert]:
    """The eight alerts shown on a fresh planner install."""
    return [
        Alert(
            id="alert-1",
            category=AlertCategory.WEATHER,
            severity=AlertSeverity.IMPORTANT,
            title="Frost Risk Tonight",
            short_description=(
                "Overnight temperatures may drop below freezing. "
                "Orchard trees in bloom could be affected."
            ),
            full_description=(
                "Tonight's forecast shows temperatures dropping to 28°F between 2am and 6am. "
                "Consider wind machines, smudge pots, or overhead irrigation."
            ),
            affected_modules=("Orchard",),
            icon="🌡️",
            timestamp=now - 2 * HOUR,
            action_label="View Orchard",
            action_link="orchard",
            metadata={"weatherCondition": "Clear, calm night", "temperatureF": 28},
        ),
        Alert(
            id="alert-2",
            category=AlertCategory.OPPORTUNITY,
            severity=AlertSeverity.HEADS_UP,
            title="Ideal Sap Flow Starting",
            short_description=(
                "Good conditions expected for the next 3-4 days. "
                "Temperatures cycling above and below freezing."
            ),
            affected_modules=("Maple Sugaring",),
            icon="🍁",
            timestamp=now - 5 * HOUR,
            action_label="View Sugar Bush",
            action_link="maple",
            metadata={"weatherCondition": "Freeze-thaw cycle", "temperatureF": 45},
        ),
        Alert(
            id="alert-3",
            category=AlertCategory.TASK,
            severity=AlertSeverity.HEADS_UP,
            title="Hive Inspections Due",
            short_description=(
                "3 hives haven't been inspected in over 2 weeks. "
                "Good weather this weekend for inspection."
            ),
            affected_modules=("Beekeeping",),
            icon="🐝",
            timestamp=now - 1 * DAY,
            action_label="View Hives",
            action_link="beekeeping",
            metadata={"taskType": "Hive Inspection"},
        ),
        Alert(
            id="alert-4",
            category=AlertCategory.HEALTH,
            severity=AlertSeverity.NOTICE,
            status=AlertStatus.READ,
            title="Medication Withdrawal Period",
            short_description=(
                "Withdrawal period for flock treatment ends in 3 days. "
                "Eggs can be consumed after this date."
            ),
            affected_modules=("Poultry",),
            icon="🦠",
            timestamp=now - 2 * DAY,
            metadata={"taskType": "Medication Withdrawal"},
        ),
        Alert(
            id="alert-5",
            category=AlertCategory.TASK,
            severity=AlertSeverity.NOTICE,
            status=AlertStatus.READ,
            title="Pruning Window Closing",
            short_description=(
                "Dormant pruning season for fruit trees ends in 3-4 weeks as buds begin to swell."
            ),
            affected_modules=("Orchard",),
            icon="✂️",
            timestamp=now - 3 * DAY,
            action_label="View Trees",
            action_link="orchard",
            metadata={"taskType": "Dormant Pruning"},
        ),
        Alert(
            id="alert-6",
            category=AlertCategory.OPPORTUNITY,
            severity=AlertSeverity.HEADS_UP,
            status=AlertStatus.READ,
            title="Good Planting Window Approaching",
            short_description=(
                "Soil conditions and temperatures favorable for tree planting in 2-3 weeks."
            ),
            affected_modules=("Orchard", "Trees"),
            icon="🌱",
            timestamp=now - 4 * DAY,
            action_label="View Tree Inventory",
            action_link="trees",
        ),
        Alert(
            id="alert-7",
            category=AlertCategory.WEATHER,
            severity=AlertSeverity.NOTICE,
            status=AlertStatus.SNOOZED,
            title="Heat Stress Possible Tomorrow",
            short_description=(
                "High temperatures forecast (85°F+). Monitor chickens for signs of heat stress."
            ),
            affected_modules=("Poultry",),
            icon="🌡️",
            timestamp=now - 5 * DAY,
            snoozed_until=now + 2 * DAY,
            action_label="View Flock",
            action_link="poultry",
            metadata={"weatherCondition": "Hot and humid", "temperatureF": 88},
        ),
        Alert(
            id="alert-8",
            category=AlertCategory.OPPORTUNITY,
            severity=AlertSeverity.HEADS_UP,
            title="Peak Bloom Overlap for Pollination",
            short_description=(
                "Your apple varieties are blooming simultaneously. "
                "Excellent cross-pollination opportunity."
            ),
            affected_modules=("Orchard", "Beekeeping"),
            icon="🌸",
            timestamp=now - 12 * HOUR,
            action_label="View Orchard",
            action_link="orchard",
        ),
    ]


def load_sample_alerts(center: AlertCenter, now: datetime | None = None) -> list[Alert]:
    """Seed an alert center's store with the sample alerts."""
    now = now or center.clock()
    return [center.store.add(alert) for alert in sample_alerts(now)]
