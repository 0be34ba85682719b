"""
Vehicle cost and maintenance tracking.

This package provides:
- Snapshots: Vehicle, MaintenanceReminder, FuelEntry, Expense
- Status: alert tiers (UPCOMING, SOON, OVERDUE)
- Evaluator: classifies reminders into ReminderAlerts
- Stats: fuel and expense totals with monthly trends
- Report: per-vehicle reports and fleet comparisons
- Search: free-text lookup over fill-ups and expenses
- Loader: YAML persistence
"""

from .status import Status
from .vehicle import Vehicle
from .reminder import MaintenanceReminder
from .fuel_entry import FuelEntry
from .expense import Expense
from .reminder_alert import ReminderAlert
from .calculations import (
    SOON_DAYS,
    SOON_MILES,
    calc_days_until,
    calc_next_service_date,
    calc_next_service_miles,
    check_days_status,
    check_miles_status,
    month_key,
    safe_ratio,
)
from .evaluator import evaluate, evaluate_all, evaluate_fleet, evaluate_vehicle
from .stats import (
    CategoryTotal,
    ExpenseStatsSummary,
    ExpenseTrendPoint,
    FuelStatsSummary,
    FuelTrendPoint,
    expense_stats,
    fuel_stats,
)
from .report import (
    SORT_KEYS,
    FleetComparison,
    VehicleComparison,
    VehicleRecords,
    VehicleReport,
    build_vehicle_report,
    compare_vehicles,
    fleet_alerts,
)
from .search import SearchResults, search_records
from .encoding import to_plain
from .exceptions import (
    GarageError,
    OdometerRegressionError,
    ReminderNotFoundError,
    VehicleNotFoundError,
)
from .loader import (
    Garage,
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

__all__ = [
    "Status",
    "Vehicle",
    "MaintenanceReminder",
    "FuelEntry",
    "Expense",
    "ReminderAlert",
    "SOON_DAYS",
    "SOON_MILES",
    "calc_days_until",
    "calc_next_service_date",
    "calc_next_service_miles",
    "check_days_status",
    "check_miles_status",
    "month_key",
    "safe_ratio",
    "evaluate",
    "evaluate_all",
    "evaluate_fleet",
    "evaluate_vehicle",
    "CategoryTotal",
    "ExpenseStatsSummary",
    "ExpenseTrendPoint",
    "FuelStatsSummary",
    "FuelTrendPoint",
    "expense_stats",
    "fuel_stats",
    "SORT_KEYS",
    "FleetComparison",
    "VehicleComparison",
    "VehicleRecords",
    "VehicleReport",
    "build_vehicle_report",
    "compare_vehicles",
    "fleet_alerts",
    "SearchResults",
    "search_records",
    "to_plain",
    "GarageError",
    "OdometerRegressionError",
    "ReminderNotFoundError",
    "VehicleNotFoundError",
    "Garage",
    "add_reminder",
    "complete_reminder",
    "delete_reminder",
    "load_garage",
    "save_expense",
    "save_fuel_entry",
    "save_odometer",
    "share_vehicle",
    "unshare_vehicle",
]
