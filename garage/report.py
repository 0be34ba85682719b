"""
Per-vehicle reports and fleet comparisons.

Composes the evaluator and the statistics aggregators. Nothing here
computes beyond sums of already-aggregated totals and a deterministic sort.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional, Sequence

from .calculations import DateLike, safe_ratio
from .evaluator import evaluate_fleet, evaluate_vehicle
from .expense import Expense
from .fuel_entry import FuelEntry
from .reminder import MaintenanceReminder
from .reminder_alert import ReminderAlert
from .stats import ExpenseStatsSummary, FuelStatsSummary, expense_stats, fuel_stats
from .vehicle import Vehicle

_logger = logging.getLogger(__name__)

MAINTENANCE_CATEGORY = "Maintenance"

SORT_KEYS = (
    "name",
    "total_cost",
    "total_distance",
    "average_efficiency",
    "cost_per_distance",
    "fuel_count",
    "expense_count",
    "due_reminders",
)


class VehicleRecords(NamedTuple):
    """Everything the persistence layer knows about one vehicle."""

    vehicle: Vehicle
    reminders: Sequence[MaintenanceReminder]
    fuel_entries: Sequence[FuelEntry]
    expenses: Sequence[Expense]


@dataclass(frozen=True)
class VehicleReport:
    vehicle: Vehicle
    fuel: FuelStatsSummary
    expenses: ExpenseStatsSummary
    total_cost: float
    maintenance_cost: float
    other_costs: float
    alerts: List[ReminderAlert] = field(default_factory=list)


@dataclass(frozen=True)
class VehicleComparison:
    vehicle: Vehicle
    total_cost: float
    total_distance: float
    average_efficiency: float
    cost_per_distance: float
    fuel_count: int
    expense_count: int
    due_reminders: int

    @property
    def name(self) -> str:
        return self.vehicle.name


@dataclass(frozen=True)
class FleetComparison:
    vehicles: List[VehicleComparison]
    total_cost: float
    sort_by: str
    descending: bool


def build_vehicle_report(
    vehicle: Vehicle,
    fuel_entries: Iterable[FuelEntry],
    expenses: Iterable[Expense],
    reminders: Iterable[MaintenanceReminder] = (),
    now: Optional[DateLike] = None,
) -> VehicleReport:
    """
    Detailed report for one vehicle.

    Alerts are only evaluated when ``now`` is given.
    """
    fuel = fuel_stats(fuel_entries)
    expense = expense_stats(expenses)
    maintenance = expense.category_total(MAINTENANCE_CATEGORY)
    alerts = (
        evaluate_vehicle(vehicle, reminders, now)
        if now is not None
        else []
    )
    _logger.debug(
        "Report for vehicle %s: %d fill-ups, %d expenses, %d alerts",
        vehicle.id,
        fuel.entry_count,
        expense.expense_count,
        len(alerts),
    )
    return VehicleReport(
        vehicle=vehicle,
        fuel=fuel,
        expenses=expense,
        total_cost=fuel.total_cost + expense.total_cost,
        maintenance_cost=maintenance,
        other_costs=expense.total_cost - maintenance,
        alerts=alerts,
    )


def _compare_one(records: VehicleRecords, now: DateLike) -> VehicleComparison:
    fuel = fuel_stats(records.fuel_entries)
    expense = expense_stats(records.expenses)
    due = evaluate_vehicle(records.vehicle, records.reminders, now)
    return VehicleComparison(
        vehicle=records.vehicle,
        total_cost=fuel.total_cost + expense.total_cost,
        total_distance=fuel.total_distance,
        average_efficiency=fuel.average_efficiency,
        # Fuel spend only; expenses don't scale with distance.
        cost_per_distance=safe_ratio(fuel.total_cost, fuel.total_distance),
        fuel_count=fuel.entry_count,
        expense_count=expense.expense_count,
        due_reminders=len(due),
    )


def compare_vehicles(
    rows: Iterable[VehicleRecords],
    now: DateLike,
    sort_by: str = "total_cost",
    descending: bool = True,
) -> FleetComparison:
    """Side-by-side totals for several vehicles, sorted by ``sort_by`` then vehicle id."""
    if sort_by not in SORT_KEYS:
        raise ValueError(
            f"Unknown sort key '{sort_by}' (expected one of: {', '.join(SORT_KEYS)})"
        )

    comparisons = [_compare_one(r, now) for r in rows]
    # Two stable passes so the id tie-break stays ascending in either direction.
    comparisons.sort(key=lambda c: c.vehicle.id)
    comparisons.sort(key=lambda c: getattr(c, sort_by), reverse=descending)

    _logger.debug("Compared %d vehicles by %s", len(comparisons), sort_by)
    return FleetComparison(
        vehicles=comparisons,
        total_cost=sum(c.total_cost for c in comparisons),
        sort_by=sort_by,
        descending=descending,
    )


def fleet_alerts(rows: Iterable[VehicleRecords], now: DateLike) -> List[ReminderAlert]:
    """Due alerts across vehicles, most urgent first, then by vehicle and reminder id."""
    alerts = evaluate_fleet(((r.vehicle, r.reminders) for r in rows), now)
    alerts.sort(key=lambda a: (-a.status.value, a.vehicle_id, a.reminder_id))
    return alerts
