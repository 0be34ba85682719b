#!/usr/bin/env python3
"""
Tests for reminder evaluation.

Covers:
1. Mileage dimension - overdue at/after last + interval, soon within 500
2. Day dimension - overdue at/after due day, soon within 7 days
3. Either dimension alone can make a reminder overdue
4. Disabled reminders never alert
5. Batch evaluation shares one timestamp
"""

from datetime import date, datetime, timedelta

import pytest
from garage import (
    MaintenanceReminder,
    Status,
    Vehicle,
    evaluate,
    evaluate_all,
    evaluate_fleet,
    evaluate_vehicle,
)

NOW = datetime(2024, 6, 1, 9, 0)


def make_reminder(**kwargs) -> MaintenanceReminder:
    defaults = dict(id=1, vehicle_id=7, name="Oil Change")
    defaults.update(kwargs)
    return MaintenanceReminder(**defaults)


class TestMileageDimension:
    """Mileage-only reminders."""

    @pytest.fixture
    def reminder(self):
        return make_reminder(interval_miles=5000, last_service_miles=10000)

    def test_soon_within_500(self, reminder):
        alert = evaluate(reminder, 14800, NOW)
        assert alert.miles_to_go == 200
        assert alert.status == Status.SOON

    def test_overdue_at_threshold(self, reminder):
        alert = evaluate(reminder, 15000, NOW)
        assert alert.miles_to_go == 0
        assert alert.status == Status.OVERDUE

    def test_overdue_past_threshold(self, reminder):
        alert = evaluate(reminder, 15250, NOW)
        assert alert.miles_to_go == -250
        assert alert.status == Status.OVERDUE

    def test_upcoming_far_away(self, reminder):
        alert = evaluate(reminder, 12000, NOW)
        assert alert.miles_to_go == 3000
        assert alert.status == Status.UPCOMING

    def test_days_untouched_when_disabled(self, reminder):
        assert evaluate(reminder, 14800, NOW).days_until_due == 0


class TestDayDimension:
    """Day-only reminders."""

    def test_overdue_five_days(self):
        reminder = make_reminder(
            interval_days=90, last_service_date=NOW - timedelta(days=95)
        )
        alert = evaluate(reminder, 0, NOW)
        assert alert.days_until_due == -5
        assert alert.status == Status.OVERDUE

    def test_overdue_on_due_day(self):
        reminder = make_reminder(interval_days=30, last_service_date=NOW - timedelta(days=30))
        alert = evaluate(reminder, 0, NOW)
        assert alert.days_until_due == 0
        assert alert.status == Status.OVERDUE

    def test_soon_within_week(self):
        reminder = make_reminder(interval_days=30, last_service_date=NOW - timedelta(days=25))
        alert = evaluate(reminder, 0, NOW)
        assert alert.days_until_due == 5
        assert alert.status == Status.SOON

    def test_upcoming_a_week_out(self):
        reminder = make_reminder(interval_days=30, last_service_date=NOW - timedelta(days=23))
        alert = evaluate(reminder, 0, NOW)
        assert alert.days_until_due == 7
        assert alert.status == Status.UPCOMING

    def test_date_last_service_means_midnight(self):
        reminder = make_reminder(interval_days=10, last_service_date=date(2024, 5, 25))
        # Due 2024-06-04 00:00; 2 days 15 hours away
        alert = evaluate(reminder, 0, NOW)
        assert alert.days_until_due == 2
        assert alert.status == Status.SOON

    def test_missing_last_service_date_is_ignored(self):
        reminder = make_reminder(interval_days=30, last_service_date=None)
        alert = evaluate(reminder, 0, NOW)
        assert alert.status == Status.UPCOMING
        assert alert.days_until_due == 0

    def test_miles_untouched_when_disabled(self):
        reminder = make_reminder(interval_days=30, last_service_date=NOW)
        assert evaluate(reminder, 99999, NOW).miles_to_go == 0


class TestCombinedDimensions:
    """Reminders with both intervals active."""

    def test_overdue_by_miles_alone(self):
        """Overdue on mileage even though the date is months away."""
        reminder = make_reminder(
            interval_miles=5000,
            last_service_miles=10000,
            interval_days=365,
            last_service_date=NOW - timedelta(days=10),
        )
        alert = evaluate(reminder, 16000, NOW)
        assert alert.status == Status.OVERDUE
        assert alert.days_until_due == 355

    def test_overdue_by_days_alone(self):
        reminder = make_reminder(
            interval_miles=5000,
            last_service_miles=10000,
            interval_days=90,
            last_service_date=NOW - timedelta(days=100),
        )
        alert = evaluate(reminder, 10100, NOW)
        assert alert.status == Status.OVERDUE
        assert alert.miles_to_go == 4900

    def test_overdue_days_beats_soon_miles(self):
        reminder = make_reminder(
            interval_miles=5000,
            last_service_miles=10000,
            interval_days=90,
            last_service_date=NOW - timedelta(days=100),
        )
        assert evaluate(reminder, 14900, NOW).status == Status.OVERDUE

    def test_soon_days_with_upcoming_miles(self):
        reminder = make_reminder(
            interval_miles=5000,
            last_service_miles=10000,
            interval_days=90,
            last_service_date=NOW - timedelta(days=85),
        )
        assert evaluate(reminder, 11000, NOW).status == Status.SOON

    def test_soon_miles_is_not_downgraded_by_upcoming_days(self):
        """Evaluation order doesn't matter: the later day check can't lower SOON."""
        reminder = make_reminder(
            interval_miles=5000,
            last_service_miles=10000,
            interval_days=365,
            last_service_date=NOW,
        )
        assert evaluate(reminder, 14700, NOW).status == Status.SOON


class TestDisabledReminder:
    """Reminders with both intervals at 0."""

    def test_never_alerts(self):
        reminder = make_reminder(last_service_date=date(2000, 1, 1))
        alert = evaluate(reminder, 10**7, NOW)
        assert alert.status == Status.UPCOMING
        assert alert.miles_to_go == 0
        assert alert.days_until_due == 0

    def test_omitted_from_evaluate_all(self):
        assert evaluate_all([make_reminder()], 10**7, NOW) == []


class TestEvaluateAll:
    """Tests for evaluate_all filtering."""

    def test_filters_upcoming_and_keeps_order(self):
        reminders = [
            make_reminder(id=1, name="Oil", interval_miles=5000, last_service_miles=0),
            make_reminder(id=2, name="Tires", interval_miles=7500, last_service_miles=0),
            make_reminder(id=3, name="Coolant", interval_miles=4000, last_service_miles=0),
        ]
        alerts = evaluate_all(reminders, 4800, NOW)
        assert [a.reminder_id for a in alerts] == [1, 3]
        assert [a.status for a in alerts] == [Status.SOON, Status.OVERDUE]

    def test_alert_identity_fields(self):
        reminder = make_reminder(id=4, vehicle_id=9, name="Brakes", interval_miles=100)
        alert = evaluate_all([reminder], 100, NOW, vehicle_name="2015 Subaru BRZ")[0]
        assert alert.vehicle_id == 9
        assert alert.reminder_id == 4
        assert alert.reminder_name == "Brakes"
        assert alert.vehicle_name == "2015 Subaru BRZ"

    def test_tracked_dimensions(self):
        alert = evaluate(make_reminder(interval_miles=100), 0, NOW)
        assert alert.miles_tracked is True
        assert alert.days_tracked is False

        alert = evaluate(make_reminder(interval_days=30, last_service_date=date(2024, 5, 1)), 0, NOW)
        assert alert.miles_tracked is False
        assert alert.days_tracked is True

    def test_no_service_date_leaves_days_untracked(self):
        alert = evaluate(make_reminder(interval_days=30), 0, NOW)
        assert alert.days_tracked is False
        assert alert.status == Status.UPCOMING


class TestEvaluateVehicle:
    """Tests for evaluate_vehicle."""

    def test_labels_alerts_with_vehicle(self):
        corolla = Vehicle(
            id=2, make="Toyota", model="Corolla", year=2019, odometer=81400, mileage_unit="km"
        )
        oil = make_reminder(vehicle_id=2, interval_miles=8000, last_service_miles=73500)

        alert = evaluate_vehicle(corolla, [oil], NOW)[0]

        assert alert.status == Status.SOON
        assert alert.miles_to_go == 100
        assert alert.vehicle_name == "2019 Toyota Corolla"
        assert alert.distance_unit == "km"


class TestEvaluateFleet:
    """Tests for evaluate_fleet."""

    def test_each_vehicle_uses_own_odometer(self):
        brz = Vehicle(id=1, make="Subaru", model="BRZ", year=2015, odometer=15000)
        corolla = Vehicle(id=2, make="Toyota", model="Corolla", year=2019, odometer=1000)
        oil_brz = make_reminder(id=1, vehicle_id=1, interval_miles=5000, last_service_miles=10000)
        oil_corolla = make_reminder(id=1, vehicle_id=2, interval_miles=5000, last_service_miles=0)

        alerts = evaluate_fleet([(brz, [oil_brz]), (corolla, [oil_corolla])], NOW)

        assert len(alerts) == 1
        assert alerts[0].vehicle_id == 1
        assert alerts[0].vehicle_name == "2015 Subaru BRZ"

    def test_same_now_for_every_vehicle(self):
        due = NOW - timedelta(days=30)
        vehicles = [
            (Vehicle(id=i, make="M", model="X", year=2020), [
                make_reminder(id=1, vehicle_id=i, interval_days=30, last_service_date=due)
            ])
            for i in range(1, 4)
        ]
        alerts = evaluate_fleet(vehicles, NOW)
        assert {a.days_until_due for a in alerts} == {0}
        assert all(a.status == Status.OVERDUE for a in alerts)
