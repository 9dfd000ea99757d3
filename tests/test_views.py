"""Tests for filtered and sorted alert views."""

import pytest
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from farm_alerts import (
    AlertCategory,
    AlertFilter,
    AlertSeverity,
    AlertSort,
    AlertStatus,
    InvalidFilterError,
    SortDirection,
    SortField,
    filter_and_sort,
    summarize,
    time_ago,
)

from conftest import NOW, make_alert


@pytest.fixture
def alerts():
    """A mixed bag of alerts in a known insertion order."""
    return [
        make_alert("frost", AlertCategory.WEATHER, AlertSeverity.IMPORTANT, hours_ago=2,
                   title="Frost Risk Tonight", affected_modules=("Orchard",)),
        make_alert("sap", AlertCategory.OPPORTUNITY, AlertSeverity.HEADS_UP, hours_ago=5,
                   title="ideal sap flow", short_description="Freeze-thaw cycle ahead",
                   affected_modules=("Maple Sugaring",)),
        make_alert("hives", AlertCategory.TASK, AlertSeverity.HEADS_UP, hours_ago=24,
                   title="Hive Inspections Due", status=AlertStatus.READ,
                   affected_modules=("Beekeeping",)),
        make_alert("heat", AlertCategory.WEATHER, AlertSeverity.NOTICE, hours_ago=120,
                   title="Heat Stress", status=AlertStatus.SNOOZED,
                   snoozed_until=NOW + timedelta(days=2), affected_modules=("Poultry",)),
        make_alert("meds", AlertCategory.HEALTH, AlertSeverity.NOTICE, hours_ago=48,
                   title="Medication Withdrawal", status=AlertStatus.DISMISSED),
    ]


def ids(alerts):
    return [a.id for a in alerts]


class TestFiltering:
    """Tests for AlertFilter matching."""

    def test_all_excludes_dismissed(self, alerts):
        """Test the unrestricted view drops dismissed alerts."""
        result = filter_and_sort(alerts, AlertFilter(), AlertSort("timestamp", "desc"))
        assert "meds" not in ids(result)
        assert len(result) == 4

    def test_explicit_dismissed_filter_still_empty(self, alerts):
        """Test asking for dismissed alerts returns nothing."""
        result = filter_and_sort(alerts, AlertFilter(status=AlertStatus.DISMISSED))
        assert result == []

    def test_category_filter(self, alerts):
        """Test category filter keeps only that category."""
        result = filter_and_sort(alerts, AlertFilter(category="weather"), AlertSort("timestamp", "desc"))
        assert ids(result) == ["frost", "heat"]

    def test_status_filter(self, alerts):
        """Test status filter keeps only that status."""
        result = filter_and_sort(alerts, AlertFilter(status="snoozed"))
        assert ids(result) == ["heat"]

    def test_search_is_case_insensitive_on_title(self, alerts):
        """Test search matches title regardless of case."""
        result = filter_and_sort(alerts, AlertFilter(search_text="SAP"))
        assert ids(result) == ["sap"]

    def test_search_matches_short_description(self, alerts):
        """Test search also looks at the short description."""
        result = filter_and_sort(alerts, AlertFilter(search_text="freeze-thaw"))
        assert ids(result) == ["sap"]

    def test_search_no_match(self, alerts):
        """Test search with no hits returns empty list."""
        assert filter_and_sort(alerts, AlertFilter(search_text="tractor")) == []

    def test_search_skips_untitled_alert(self, alerts):
        """Test an alert submitted without title text does not break search."""
        untitled = make_alert("blank", title=None, short_description=None)

        result = filter_and_sort(alerts + [untitled], AlertFilter(search_text="frost"))
        assert ids(result) == ["frost"]

    def test_module_filter(self, alerts):
        """Test module tags restrict the view case-insensitively."""
        result = filter_and_sort(alerts, AlertFilter(modules=("orchard", "poultry")), AlertSort("timestamp", "desc"))
        assert ids(result) == ["frost", "heat"]

    def test_filters_combine(self, alerts):
        """Test category, status and search must all match."""
        result = filter_and_sort(
            alerts,
            AlertFilter(category=AlertCategory.WEATHER, status=AlertStatus.NEW, search_text="frost"),
        )
        assert ids(result) == ["frost"]

    def test_from_dict_all_means_unrestricted(self):
        """Test 'all' parses to no restriction."""
        f = AlertFilter.from_dict({"category": "all", "status": "all", "searchText": ""})
        assert f.category is None
        assert f.status is None

    def test_from_dict_unknown_category(self):
        """Test unknown filter value raises InvalidFilterError."""
        with pytest.raises(InvalidFilterError):
            AlertFilter.from_dict({"category": "orchard"})


class TestSorting:
    """Tests for sort order."""

    def test_timestamp_desc_newest_first(self, alerts):
        """Test timestamp desc puts the most recent first."""
        result = filter_and_sort(alerts, sort=AlertSort(SortField.TIMESTAMP, SortDirection.DESC))
        assert ids(result) == ["frost", "sap", "hives", "heat"]

    def test_timestamp_asc_is_exact_reverse(self, alerts):
        """Test asc and desc are mirror images when keys are distinct."""
        desc = filter_and_sort(alerts, sort=AlertSort("timestamp", "desc"))
        asc = filter_and_sort(alerts, sort=AlertSort("timestamp", "asc"))
        assert ids(asc) == list(reversed(ids(desc)))

    def test_timestamp_compares_instants_not_strings(self):
        """Test timestamps in different zones sort by actual instant."""
        tokyo = timezone(timedelta(hours=9))
        # 10:00 Tokyo is 01:00 UTC, earlier than 11:00 UTC
        b = replace(make_alert("tokyo"), timestamp=datetime(2025, 3, 1, 10, 0, tzinfo=tokyo))
        a = replace(make_alert("utc"), timestamp=datetime(2025, 3, 1, 11, 0, tzinfo=timezone.utc))

        result = filter_and_sort([b, a], sort=AlertSort("timestamp", "desc"))
        assert ids(result) == ["utc", "tokyo"]

    def test_severity_desc(self, alerts):
        """Test severity ranks important > heads-up > notice, ties stable."""
        result = filter_and_sort(alerts, sort=AlertSort("severity", "desc"))
        assert ids(result) == ["frost", "sap", "hives", "heat"]

    def test_severity_asc_keeps_tie_order(self, alerts):
        """Test ascending severity keeps equal-rank alerts in input order."""
        result = filter_and_sort(alerts, sort=AlertSort("severity", "asc"))
        assert ids(result) == ["heat", "sap", "hives", "frost"]

    def test_title_case_insensitive(self, alerts):
        """Test title sort ignores case."""
        result = filter_and_sort(alerts, sort=AlertSort("title", "asc"))
        assert ids(result) == ["frost", "heat", "hives", "sap"]

    def test_title_sort_with_untitled_alert(self, alerts):
        """Test an empty title sorts ahead of every titled alert."""
        untitled = make_alert("blank", title=None)

        result = filter_and_sort(alerts + [untitled], sort=AlertSort("title", "asc"))
        assert ids(result) == ["blank", "frost", "heat", "hives", "sap"]

    def test_category_sort(self, alerts):
        """Test category sorts by value, ties in input order."""
        result = filter_and_sort(alerts, sort=AlertSort("category", "asc"))
        assert ids(result) == ["sap", "hives", "frost", "heat"]

    def test_status_sort_desc(self, alerts):
        """Test status sorts by value."""
        result = filter_and_sort(alerts, sort=AlertSort("status", "desc"))
        assert ids(result) == ["heat", "hives", "frost", "sap"]

    def test_sort_is_idempotent(self, alerts):
        """Test sorting a sorted view again changes nothing."""
        sort = AlertSort("severity", "desc")
        once = filter_and_sort(alerts, sort=sort)
        assert filter_and_sort(once, sort=sort) == once

    def test_input_not_mutated(self, alerts):
        """Test the view is a fresh list and the input order is kept."""
        original = list(alerts)
        result = filter_and_sort(alerts, sort=AlertSort("title", "asc"))

        assert alerts == original
        assert result is not alerts

    def test_unknown_field_rejected(self):
        """Test unknown sort field raises InvalidFilterError."""
        with pytest.raises(InvalidFilterError):
            AlertSort("priority", "desc")

    def test_toggle_same_field_flips(self):
        """Test clicking the active column flips direction."""
        sort = AlertSort("timestamp", "desc").toggled("timestamp")
        assert sort == AlertSort(SortField.TIMESTAMP, SortDirection.ASC)

    def test_toggle_new_field_starts_desc(self):
        """Test clicking another column selects it descending."""
        sort = AlertSort("timestamp", "asc").toggled(SortField.TITLE)
        assert sort == AlertSort(SortField.TITLE, SortDirection.DESC)


class TestSummaries:
    """Tests for summary counts and relative time text."""

    def test_summarize(self, alerts):
        """Test counts ignore dismissed alerts."""
        stats = summarize(alerts)

        assert stats == {
            "total": 4,
            "new": 2,
            "weather": 2,
            "tasks": 1,
            "health": 0,
            "opportunities": 1,
        }

    @pytest.mark.parametrize("age,expected", [
        (timedelta(minutes=30), "Just now"),
        (timedelta(hours=5), "5h ago"),
        (timedelta(hours=30), "Yesterday"),
        (timedelta(days=3), "3 days ago"),
        (timedelta(days=10), "2025-02-19"),
    ])
    def test_time_ago(self, age, expected):
        """Test relative age text at each threshold."""
        assert time_ago(NOW - age, NOW) == expected

    def test_time_ago_future_is_just_now(self):
        """Test timestamps slightly in the future read as just now."""
        assert time_ago(NOW + timedelta(minutes=5), NOW) == "Just now"
