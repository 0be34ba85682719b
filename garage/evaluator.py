"""
Reminder evaluation.

Each reminder is checked on two independent dimensions, distance since
the last service and days since the last service. Each dimension yields
its own status and the reminder takes the more urgent of the two, so a
reminder is OVERDUE as soon as either threshold is crossed.

``now`` is always passed in. Batch callers sample the clock once and hand
the same value to every vehicle.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from .calculations import (
    DateLike,
    calc_days_until,
    calc_next_service_date,
    calc_next_service_miles,
    check_days_status,
    check_miles_status,
)
from .reminder import MaintenanceReminder
from .reminder_alert import ReminderAlert
from .status import Status
from .vehicle import MILES, Vehicle


def evaluate(
    reminder: MaintenanceReminder,
    current_odometer: float,
    now: DateLike,
    vehicle_name: Optional[str] = None,
    distance_unit: str = MILES,
) -> ReminderAlert:
    """Classify a single reminder. Reminders with both intervals at 0 stay UPCOMING."""
    miles_status = days_status = Status.UPCOMING
    miles_to_go = 0.0
    days_until = 0

    next_miles = calc_next_service_miles(
        reminder.last_service_miles, reminder.interval_miles
    )
    if next_miles is not None:
        miles_to_go = next_miles - current_odometer
        miles_status = check_miles_status(miles_to_go)

    next_date = calc_next_service_date(
        reminder.last_service_date, reminder.interval_days
    )
    if next_date is not None:
        days_until = calc_days_until(next_date, now)
        days_status = check_days_status(days_until)

    return ReminderAlert(
        vehicle_id=reminder.vehicle_id,
        reminder_id=reminder.id,
        reminder_name=reminder.name,
        status=Status.worst(miles_status, days_status),
        miles_to_go=miles_to_go,
        days_until_due=days_until,
        vehicle_name=vehicle_name,
        distance_unit=distance_unit,
        miles_tracked=next_miles is not None,
        days_tracked=next_date is not None,
    )


def evaluate_all(
    reminders: Iterable[MaintenanceReminder],
    current_odometer: float,
    now: DateLike,
    vehicle_name: Optional[str] = None,
    distance_unit: str = MILES,
) -> List[ReminderAlert]:
    """Alerts for the reminders that are SOON or OVERDUE, in input order."""
    alerts = (
        evaluate(r, current_odometer, now, vehicle_name, distance_unit)
        for r in reminders
    )
    return [a for a in alerts if a.is_due]


def evaluate_vehicle(
    vehicle: Vehicle, reminders: Iterable[MaintenanceReminder], now: DateLike
) -> List[ReminderAlert]:
    """evaluate_all against a vehicle's odometer, labelled with its name and unit."""
    return evaluate_all(
        reminders, vehicle.odometer, now, vehicle.name, vehicle.distance_label
    )


def evaluate_fleet(
    vehicles: Iterable[Tuple[Vehicle, Sequence[MaintenanceReminder]]],
    now: DateLike,
) -> List[ReminderAlert]:
    """Due alerts for many vehicles, each against its own odometer and the shared ``now``."""
    alerts: List[ReminderAlert] = []
    for vehicle, reminders in vehicles:
        alerts.extend(evaluate_vehicle(vehicle, reminders, now))
    return alerts
