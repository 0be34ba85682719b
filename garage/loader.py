"""YAML loading and saving utilities for garage data."""

import logging
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dateutil import parser as date_parser

from .exceptions import OdometerRegressionError, ReminderNotFoundError, VehicleNotFoundError
from .expense import Expense
from .fuel_entry import FuelEntry
from .reminder import MaintenanceReminder
from .report import VehicleRecords
from .vehicle import MILES, Vehicle

_logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Garage:
    """All vehicles in a garage file together with their records."""

    def __init__(self, records: Optional[List[VehicleRecords]] = None):
        self.records = records or []

    @property
    def vehicles(self) -> List[Vehicle]:
        return [r.vehicle for r in self.records]

    def get(self, vehicle_id: int, user_id: Optional[int] = None) -> VehicleRecords:
        """
        Records for one vehicle; raises VehicleNotFoundError.

        With a user_id, vehicles that user cannot see are reported as not found.
        """
        for r in self.records:
            if r.vehicle.id == vehicle_id:
                if user_id is not None and not r.vehicle.is_visible_to(user_id):
                    break
                return r
        raise VehicleNotFoundError(vehicle_id)

    def get_vehicle(self, vehicle_id: int, user_id: Optional[int] = None) -> Vehicle:
        return self.get(vehicle_id, user_id).vehicle

    def get_reminder(
        self, vehicle_id: int, reminder_id: int, user_id: Optional[int] = None
    ) -> MaintenanceReminder:
        for reminder in self.get(vehicle_id, user_id).reminders:
            if reminder.id == reminder_id:
                return reminder
        raise ReminderNotFoundError(vehicle_id, reminder_id)

    def records_for_user(self, user_id: Optional[int]) -> List[VehicleRecords]:
        """Vehicles the user owns or that are shared with them (all when user_id is None)."""
        if user_id is None:
            return list(self.records)
        return [r for r in self.records if r.vehicle.is_visible_to(user_id)]

    def vehicles_for_user(self, user_id: Optional[int]) -> List[Vehicle]:
        return [r.vehicle for r in self.records_for_user(user_id)]


# =============================================================================
# Parsing
# =============================================================================


def parse_date(value: Any) -> Optional[date]:
    """Accept YAML dates, datetimes or ISO strings; None stays None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(str(value)).date()


def _parse_reminder(dct: Dict[str, Any], vehicle_id: int) -> MaintenanceReminder:
    return MaintenanceReminder(
        id=dct["id"],
        vehicle_id=vehicle_id,
        name=dct["name"],
        interval_miles=dct.get("intervalMiles") or 0,
        interval_days=dct.get("intervalDays") or 0,
        last_service_date=parse_date(dct.get("lastServiceDate")),
        last_service_miles=dct.get("lastServiceMiles") or 0,
    )


def _parse_fuel_entry(dct: Dict[str, Any], vehicle_id: int) -> FuelEntry:
    return FuelEntry(
        id=dct["id"],
        vehicle_id=vehicle_id,
        date=parse_date(dct["date"]),
        gallons=dct["gallons"],
        price=dct["price"],
        odometer=dct["odometer"],
        location=dct.get("location"),
        notes=dct.get("notes"),
    )


def _parse_expense(dct: Dict[str, Any], vehicle_id: int) -> Expense:
    return Expense(
        id=dct["id"],
        vehicle_id=vehicle_id,
        category=dct["category"],
        amount=dct["amount"],
        date=parse_date(dct["date"]),
        notes=dct.get("notes"),
    )


def _parse_vehicle(dct: Dict[str, Any]) -> VehicleRecords:
    vehicle = Vehicle(
        id=dct["id"],
        make=dct["make"],
        model=dct["model"],
        year=dct["year"],
        odometer=dct.get("odometer") or 0,
        mileage_unit=dct.get("mileageUnit") or MILES,
        fuel_type=dct.get("fuelType"),
        owner_id=dct.get("ownerId"),
        shared_with=tuple(dct.get("sharedWith") or ()),
    )
    return VehicleRecords(
        vehicle=vehicle,
        reminders=[_parse_reminder(r, vehicle.id) for r in dct.get("reminders") or []],
        fuel_entries=[_parse_fuel_entry(f, vehicle.id) for f in dct.get("fuel") or []],
        expenses=[_parse_expense(e, vehicle.id) for e in dct.get("expenses") or []],
    )


def load_garage(filename: PathLike) -> Garage:
    """Load a garage from a YAML file."""
    data = _read(filename)
    garage = Garage([_parse_vehicle(v) for v in data.get("vehicles") or []])
    _logger.debug("Loaded %d vehicles from %s", len(garage.records), filename)
    return garage


# =============================================================================
# Saving
# =============================================================================


def _read(filename: PathLike) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write(filename: PathLike, data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _find_vehicle(data: Dict[str, Any], vehicle_id: int) -> Dict[str, Any]:
    for v in data.get("vehicles") or []:
        if v.get("id") == vehicle_id:
            return v
    raise VehicleNotFoundError(vehicle_id)


def _find_reminder(vehicle: Dict[str, Any], reminder_id: int) -> Dict[str, Any]:
    for r in vehicle.get("reminders") or []:
        if r.get("id") == reminder_id:
            return r
    raise ReminderNotFoundError(vehicle["id"], reminder_id)


def _next_id(items: List[Dict[str, Any]]) -> int:
    return max((i.get("id") or 0 for i in items), default=0) + 1


def _date_str(value: Union[date, datetime, str]) -> str:
    return parse_date(value).isoformat()


def _check_odometer(reading: float, previous: float) -> None:
    if reading < previous:
        raise OdometerRegressionError(reading, previous)


def save_fuel_entry(filename: PathLike, entry: FuelEntry) -> FuelEntry:
    """
    Append a fill-up to its vehicle and return it with its assigned id.

    The fill-up may not be below the highest recorded fill-up odometer.
    When it is above the vehicle's current odometer, the vehicle's reading
    is raised to match.
    """
    data = _read(filename)
    vehicle = _find_vehicle(data, entry.vehicle_id)
    fuel = vehicle.get("fuel") or []
    vehicle["fuel"] = fuel

    if fuel:
        _check_odometer(entry.odometer, max(f["odometer"] for f in fuel))

    entry_id = _next_id(fuel)
    entry_dict: Dict[str, Any] = {
        "id": entry_id,
        "date": _date_str(entry.date),
        "gallons": entry.gallons,
        "price": entry.price,
        "odometer": entry.odometer,
    }
    if entry.location is not None:
        entry_dict["location"] = entry.location
    if entry.notes is not None:
        entry_dict["notes"] = entry.notes
    fuel.append(entry_dict)

    if entry.odometer > (vehicle.get("odometer") or 0):
        vehicle["odometer"] = entry.odometer

    _write(filename, data)
    _logger.debug("Saved fill-up %d for vehicle %d", entry_id, entry.vehicle_id)
    return FuelEntry(
        id=entry_id,
        vehicle_id=entry.vehicle_id,
        date=parse_date(entry.date),
        gallons=entry.gallons,
        price=entry.price,
        odometer=entry.odometer,
        location=entry.location,
        notes=entry.notes,
    )


def save_expense(filename: PathLike, expense: Expense) -> Expense:
    """Append an expense to its vehicle and return it with its assigned id."""
    data = _read(filename)
    vehicle = _find_vehicle(data, expense.vehicle_id)
    expenses = vehicle.get("expenses") or []
    vehicle["expenses"] = expenses

    expense_id = _next_id(expenses)
    expense_dict: Dict[str, Any] = {
        "id": expense_id,
        "category": expense.category,
        "amount": expense.amount,
        "date": _date_str(expense.date),
    }
    if expense.notes is not None:
        expense_dict["notes"] = expense.notes
    expenses.append(expense_dict)

    _write(filename, data)
    _logger.debug("Saved expense %d for vehicle %d", expense_id, expense.vehicle_id)
    return Expense(
        id=expense_id,
        vehicle_id=expense.vehicle_id,
        category=expense.category,
        amount=expense.amount,
        date=parse_date(expense.date),
        notes=expense.notes,
    )


def _reminder_dict(reminder: MaintenanceReminder) -> Dict[str, Any]:
    d: Dict[str, Any] = {"id": reminder.id, "name": reminder.name}
    if reminder.interval_miles:
        d["intervalMiles"] = reminder.interval_miles
    if reminder.interval_days:
        d["intervalDays"] = reminder.interval_days
    if reminder.last_service_date is not None:
        d["lastServiceDate"] = _date_str(reminder.last_service_date)
    d["lastServiceMiles"] = reminder.last_service_miles
    return d


def add_reminder(filename: PathLike, reminder: MaintenanceReminder) -> MaintenanceReminder:
    """Append a reminder to its vehicle and return it with its assigned id."""
    if reminder.is_disabled:
        raise ValueError("Reminder needs an interval in miles or days")

    data = _read(filename)
    vehicle = _find_vehicle(data, reminder.vehicle_id)
    reminders = vehicle.get("reminders") or []
    vehicle["reminders"] = reminders

    saved = replace(
        reminder,
        id=_next_id(reminders),
        last_service_date=parse_date(reminder.last_service_date),
    )
    reminders.append(_reminder_dict(saved))

    _write(filename, data)
    _logger.debug("Added reminder %d to vehicle %d", saved.id, saved.vehicle_id)
    return saved


def delete_reminder(filename: PathLike, vehicle_id: int, reminder_id: int) -> None:
    """Remove a reminder from a vehicle."""
    data = _read(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    reminder = _find_reminder(vehicle, reminder_id)
    vehicle["reminders"].remove(reminder)
    _write(filename, data)
    _logger.debug("Deleted reminder %d from vehicle %d", reminder_id, vehicle_id)


def complete_reminder(
    filename: PathLike,
    vehicle_id: int,
    reminder_id: int,
    service_date: Union[date, datetime, str],
    service_miles: float,
) -> MaintenanceReminder:
    """
    Record that a reminder's service was performed.

    Overwrites lastServiceDate/lastServiceMiles with the given values and
    returns the updated reminder.
    """
    data = _read(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    raw = _find_reminder(vehicle, reminder_id)

    done = _parse_reminder(raw, vehicle_id).completed(parse_date(service_date), service_miles)
    vehicle["reminders"][vehicle["reminders"].index(raw)] = _reminder_dict(done)

    _write(filename, data)
    _logger.debug("Completed reminder %d on vehicle %d", reminder_id, vehicle_id)
    return done


def save_odometer(filename: PathLike, vehicle_id: int, odometer: float) -> None:
    """Update a vehicle's current odometer. Readings never go backwards."""
    data = _read(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    _check_odometer(odometer, vehicle.get("odometer") or 0)
    vehicle["odometer"] = odometer
    _write(filename, data)


def share_vehicle(filename: PathLike, vehicle_id: int, user_id: int) -> Vehicle:
    """Give another user access to a vehicle. Sharing twice is a no-op."""
    data = _read(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    shared = vehicle.get("sharedWith") or []
    if user_id != vehicle.get("ownerId") and user_id not in shared:
        shared.append(user_id)
        _logger.debug("Shared vehicle %d with user %d", vehicle_id, user_id)
    vehicle["sharedWith"] = shared
    _write(filename, data)
    return _parse_vehicle(vehicle).vehicle


def unshare_vehicle(filename: PathLike, vehicle_id: int, user_id: int) -> Vehicle:
    """Revoke a user's access to a vehicle. The owner cannot be removed."""
    data = _read(filename)
    vehicle = _find_vehicle(data, vehicle_id)
    if user_id == vehicle.get("ownerId"):
        raise ValueError(f"User {user_id} owns vehicle {vehicle_id} and cannot be removed")
    shared = vehicle.get("sharedWith") or []
    if user_id in shared:
        shared.remove(user_id)
        _logger.debug("Removed user %d from vehicle %d", user_id, vehicle_id)
    vehicle["sharedWith"] = shared
    _write(filename, data)
    return _parse_vehicle(vehicle).vehicle
