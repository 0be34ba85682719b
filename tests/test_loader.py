#!/usr/bin/env python3
"""Tests for YAML loading and saving utilities."""

from datetime import date

import pytest
import yaml

from garage import (
    Expense,
    FuelEntry,
    Garage,
    MaintenanceReminder,
    OdometerRegressionError,
    ReminderNotFoundError,
    Vehicle,
    VehicleNotFoundError,
    add_reminder,
    complete_reminder,
    delete_reminder,
    load_garage,
    save_expense,
    save_fuel_entry,
    save_odometer,
    share_vehicle,
    unshare_vehicle,
)
from garage.loader import parse_date

# =============================================================================
# load_garage tests
# =============================================================================


class TestLoadGarage:
    """Tests for load_garage."""

    def test_loads_vehicles(self, garage_file):
        garage = load_garage(garage_file)

        assert isinstance(garage, Garage)
        assert [v.id for v in garage.vehicles] == [1, 2]
        brz = garage.get_vehicle(1)
        assert isinstance(brz, Vehicle)
        assert brz.name == "2015 Subaru BRZ"
        assert brz.odometer == 14800
        assert brz.owner_id == 1
        assert brz.shared_with == (2,)
        assert garage.get_vehicle(2).mileage_unit == "km"

    def test_loads_records_with_vehicle_id(self, garage_file):
        records = load_garage(garage_file).get(1)

        assert len(records.reminders) == 3
        assert len(records.fuel_entries) == 2
        assert len(records.expenses) == 3
        assert all(r.vehicle_id == 1 for r in records.reminders)
        assert all(f.vehicle_id == 1 for f in records.fuel_entries)
        assert all(e.vehicle_id == 1 for e in records.expenses)

    def test_parses_dates_quoted_or_not(self, garage_file):
        garage = load_garage(garage_file)
        assert garage.get_reminder(1, 1).last_service_date == date(2024, 1, 1)
        assert garage.get_reminder(1, 2).last_service_date == date(2024, 2, 27)
        assert garage.get(1).fuel_entries[0].date == date(2024, 1, 5)

    def test_missing_intervals_default_to_zero(self, garage_file):
        garage = load_garage(garage_file)
        assert garage.get_reminder(1, 1).interval_days == 0
        assert garage.get_reminder(1, 2).interval_miles == 0

    def test_optional_fields(self, garage_file):
        records = load_garage(garage_file).get(1)
        assert records.fuel_entries[0].location == "Shell"
        assert records.fuel_entries[1].location is None
        assert records.expenses[2].notes == "Downtown"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_garage(path).vehicles == []

    def test_unknown_vehicle(self, garage_file):
        with pytest.raises(VehicleNotFoundError):
            load_garage(garage_file).get(99)

    def test_unknown_reminder(self, garage_file):
        with pytest.raises(ReminderNotFoundError):
            load_garage(garage_file).get_reminder(1, 99)


class TestVisibility:
    """Tests for owned/shared vehicle lookup."""

    def test_owner_sees_own(self, garage_file):
        garage = load_garage(garage_file)
        assert [v.id for v in garage.vehicles_for_user(1)] == [1]

    def test_shared_user_sees_shared(self, garage_file):
        garage = load_garage(garage_file)
        assert [v.id for v in garage.vehicles_for_user(2)] == [1, 2]

    def test_stranger_sees_nothing(self, garage_file):
        assert load_garage(garage_file).vehicles_for_user(3) == []

    def test_no_user_sees_all(self, garage_file):
        assert len(load_garage(garage_file).records_for_user(None)) == 2

    def test_get_hides_vehicle_from_stranger(self, garage_file):
        garage = load_garage(garage_file)
        with pytest.raises(VehicleNotFoundError):
            garage.get(1, user_id=3)
        with pytest.raises(VehicleNotFoundError):
            garage.get_reminder(1, 1, user_id=3)

    def test_get_allows_shared_user(self, garage_file):
        assert load_garage(garage_file).get_vehicle(1, user_id=2).id == 1


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_string(self):
        assert parse_date("2024-03-01") == date(2024, 3, 1)

    def test_datetime_string_truncates(self):
        assert parse_date("2024-03-01T18:45:00Z") == date(2024, 3, 1)

    def test_date_passthrough(self):
        assert parse_date(date(2024, 3, 1)) == date(2024, 3, 1)

    def test_empty(self):
        assert parse_date(None) is None
        assert parse_date("") is None

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("not a date")


# =============================================================================
# Write tests
# =============================================================================


class TestSaveFuelEntry:
    """Tests for save_fuel_entry."""

    def make_entry(self, odometer, vehicle_id=1):
        return FuelEntry(
            id=0,
            vehicle_id=vehicle_id,
            date=date(2024, 3, 5),
            gallons=11,
            price=33,
            odometer=odometer,
            location="Costco",
        )

    def test_appends_with_next_id(self, garage_file):
        saved = save_fuel_entry(garage_file, self.make_entry(1800))
        assert saved.id == 3

        records = load_garage(garage_file).get(1)
        assert len(records.fuel_entries) == 3
        assert records.fuel_entries[-1].odometer == 1800
        assert records.fuel_entries[-1].location == "Costco"

    def test_writes_iso_date(self, garage_file):
        save_fuel_entry(garage_file, self.make_entry(1800))
        data = yaml.safe_load(garage_file.read_text())
        assert data["vehicles"][0]["fuel"][-1]["date"] == "2024-03-05"

    def test_rejects_odometer_regression(self, garage_file):
        with pytest.raises(OdometerRegressionError):
            save_fuel_entry(garage_file, self.make_entry(1200))
        assert len(load_garage(garage_file).get(1).fuel_entries) == 2

    def test_raises_vehicle_odometer(self, garage_file):
        save_fuel_entry(garage_file, self.make_entry(15500))
        assert load_garage(garage_file).get_vehicle(1).odometer == 15500

    def test_keeps_higher_vehicle_odometer(self, garage_file):
        save_fuel_entry(garage_file, self.make_entry(1800))
        assert load_garage(garage_file).get_vehicle(1).odometer == 14800

    def test_first_fillup_for_vehicle(self, garage_file):
        saved = save_fuel_entry(garage_file, self.make_entry(81500, vehicle_id=2))
        assert saved.id == 1
        assert load_garage(garage_file).get_vehicle(2).odometer == 81500

    def test_unknown_vehicle(self, garage_file):
        with pytest.raises(VehicleNotFoundError):
            save_fuel_entry(garage_file, self.make_entry(1800, vehicle_id=42))


class TestSaveExpense:
    """Tests for save_expense."""

    def test_appends_expense(self, garage_file):
        expense = Expense(
            id=0, vehicle_id=1, category="Tolls", amount=4.5, date=date(2024, 3, 1), notes="Bridge"
        )
        saved = save_expense(garage_file, expense)

        assert saved.id == 4
        loaded = load_garage(garage_file).get(1).expenses[-1]
        assert loaded.category == "Tolls"
        assert loaded.amount == 4.5
        assert loaded.notes == "Bridge"

    def test_preserves_other_vehicles(self, garage_file):
        expense = Expense(id=0, vehicle_id=2, category="Wash", amount=12, date=date(2024, 3, 1))
        save_expense(garage_file, expense)
        garage = load_garage(garage_file)
        assert len(garage.get(1).expenses) == 3
        assert len(garage.get(2).expenses) == 1


class TestReminders:
    """Tests for reminder write operations."""

    def test_complete_overwrites_last_service(self, garage_file):
        complete_reminder(garage_file, 1, 1, date(2024, 6, 1), 15100)

        reminder = load_garage(garage_file).get_reminder(1, 1)
        assert reminder.last_service_date == date(2024, 6, 1)
        assert reminder.last_service_miles == 15100
        assert reminder.interval_miles == 5000

    def test_complete_returns_updated_reminder(self, garage_file):
        done = complete_reminder(garage_file, 1, 3, date(2024, 6, 1), 14800)
        assert done == load_garage(garage_file).get_reminder(1, 3)
        assert done.interval_days == 730
        assert done.last_service_miles == 14800

    def test_complete_accepts_string_date(self, garage_file):
        complete_reminder(garage_file, 1, 2, "2024-06-01", 15000)
        assert load_garage(garage_file).get_reminder(1, 2).last_service_date == date(2024, 6, 1)

    def test_complete_unknown_reminder(self, garage_file):
        with pytest.raises(ReminderNotFoundError):
            complete_reminder(garage_file, 1, 9, date(2024, 6, 1), 15000)

    def test_add_reminder(self, garage_file):
        reminder = MaintenanceReminder(
            id=0, vehicle_id=2, name="Brake Fluid", interval_days=730, last_service_date=date(2024, 1, 1)
        )
        saved = add_reminder(garage_file, reminder)

        assert saved.id == 1
        loaded = load_garage(garage_file).get_reminder(2, 1)
        assert loaded.name == "Brake Fluid"
        assert loaded.interval_days == 730
        assert loaded.interval_miles == 0

    def test_add_disabled_reminder_rejected(self, garage_file):
        with pytest.raises(ValueError):
            add_reminder(garage_file, MaintenanceReminder(id=0, vehicle_id=1, name="Wash"))
        assert len(load_garage(garage_file).get(1).reminders) == 3

    def test_delete_reminder(self, garage_file):
        delete_reminder(garage_file, 1, 2)
        ids = [r.id for r in load_garage(garage_file).get(1).reminders]
        assert ids == [1, 3]

    def test_delete_unknown_reminder(self, garage_file):
        with pytest.raises(ReminderNotFoundError):
            delete_reminder(garage_file, 1, 9)


class TestSharing:
    """Tests for share_vehicle and unshare_vehicle."""

    def test_share(self, garage_file):
        vehicle = share_vehicle(garage_file, 2, 1)
        assert vehicle.shared_with == (1,)
        assert load_garage(garage_file).get_vehicle(2).is_visible_to(1)

    def test_share_twice_is_noop(self, garage_file):
        share_vehicle(garage_file, 1, 2)
        assert load_garage(garage_file).get_vehicle(1).shared_with == (2,)

    def test_share_with_owner_is_noop(self, garage_file):
        assert share_vehicle(garage_file, 1, 1).users == (1, 2)

    def test_unshare(self, garage_file):
        vehicle = unshare_vehicle(garage_file, 1, 2)
        assert vehicle.shared_with == ()
        assert [v.id for v in load_garage(garage_file).vehicles_for_user(2)] == [2]

    def test_unshare_owner_rejected(self, garage_file):
        with pytest.raises(ValueError):
            unshare_vehicle(garage_file, 1, 1)

    def test_unknown_vehicle(self, garage_file):
        with pytest.raises(VehicleNotFoundError):
            share_vehicle(garage_file, 9, 1)


class TestSaveOdometer:
    """Tests for save_odometer."""

    def test_updates_odometer(self, garage_file):
        save_odometer(garage_file, 1, 15000)
        assert load_garage(garage_file).get_vehicle(1).odometer == 15000

    def test_rejects_lower_reading(self, garage_file):
        with pytest.raises(OdometerRegressionError):
            save_odometer(garage_file, 1, 14000)

    def test_preserves_key_order(self, garage_file):
        save_odometer(garage_file, 1, 15000)
        data = yaml.safe_load(garage_file.read_text())
        assert list(data["vehicles"][0])[:4] == ["id", "make", "model", "year"]
