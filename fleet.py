#!/usr/bin/env python3
"""
Unified CLI for vehicle cost and maintenance tracking.

Commands:
  alerts          - Show maintenance reminders that are due soon or overdue
  fuel-stats      - Fuel totals, efficiency and monthly trend for a vehicle
  expense-stats   - Expense totals by category and month for a vehicle
  report          - Combined cost report for a vehicle
  compare         - Compare totals across vehicles
  log-fuel        - Add a fill-up
  log-expense     - Add an expense
  complete        - Mark a reminder's service as done
  add-reminder    - Add a maintenance reminder
  delete-reminder - Remove a maintenance reminder
  update-odometer - Update current vehicle odometer
  export-csv      - Detailed CSV export of every vehicle's records
  search          - Find fill-ups and expenses by text
  share           - Share a vehicle with another user
  unshare         - Stop sharing a vehicle with a user
  users           - List the users of a vehicle
"""

import argparse
import csv
import io
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from garage import (
    SORT_KEYS,
    Expense,
    FuelEntry,
    GarageError,
    MaintenanceReminder,
    ReminderAlert,
    Status,
    add_reminder,
    build_vehicle_report,
    compare_vehicles,
    complete_reminder,
    delete_reminder,
    fleet_alerts,
    expense_stats,
    fuel_stats,
    load_garage,
    save_expense,
    save_fuel_entry,
    save_odometer,
    search_records,
    share_vehicle,
    to_plain,
    unshare_vehicle,
)
from garage.loader import parse_date

_logger = logging.getLogger("fleet")

ALERT_HEADERS = ["Status", "Vehicle", "Reminder", "Distance To Go", "Time To Go", "Detail"]

# =============================================================================
# Formatting helpers
# =============================================================================


def format_distance(distance: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{distance:,.0f}" if distance is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_efficiency(value: float) -> str:
    return f"{value:.2f}" if value else "-"


def format_days(days: int) -> str:
    """Format days until due (e.g., '3mo 15d' or '-2mo 5d')."""
    sign = "-" if days < 0 else ""
    days = abs(days)
    months = days // 30
    if months > 0:
        return f"{sign}{months}mo {days % 30}d"
    return f"{sign}{days}d"


def describe_alert(alert: ReminderAlert) -> str:
    """One-line explanation of why a reminder is flagged."""
    unit = alert.distance_unit
    parts = []
    if alert.miles_tracked:
        if alert.miles_to_go < 0:
            parts.append(f"{-alert.miles_to_go:,.0f} {unit} past due")
        elif alert.miles_to_go > 0:
            parts.append(f"due in {alert.miles_to_go:,.0f} {unit}")
    if alert.days_tracked:
        if alert.days_until_due < 0:
            parts.append(f"{-alert.days_until_due} days past due")
        elif alert.days_until_due > 0:
            parts.append(f"due in {alert.days_until_due} days")
    return ", ".join(parts) or "due now"


def parse_now(value: Optional[str]) -> datetime:
    """--now argument as a datetime; current time when omitted."""
    if value:
        return datetime.combine(parse_date(value), datetime.min.time())
    return datetime.now()


# =============================================================================
# Alerts command
# =============================================================================


def make_alert_table(alerts: List[ReminderAlert]) -> List[List[str]]:
    """Convert alerts to table rows."""
    return [
        [
            a.status.label.upper(),
            a.vehicle_name or a.vehicle_id,
            a.reminder_name,
            format_distance(a.miles_to_go) if a.miles_tracked else "-",
            format_days(a.days_until_due) if a.days_tracked else "-",
            describe_alert(a),
        ]
        for a in alerts
    ]


def cmd_alerts(args):
    """Show reminders that are due soon or overdue."""
    garage = load_garage(args.garage_file)
    now = parse_now(args.now)

    if args.vehicle is not None:
        rows = [garage.get(args.vehicle, args.user)]
    else:
        rows = garage.records_for_user(args.user)

    alerts = fleet_alerts(rows, now)
    if args.status:
        wanted = Status.from_label(args.status)
        alerts = [a for a in alerts if a.status == wanted]
    print(f"As of: {now:%Y-%m-%d %H:%M}")
    print(f"Vehicles checked: {len(rows)}")
    print()

    if not alerts:
        print("Nothing due.")
        return 0

    overdue = sum(1 for a in alerts if a.status == Status.OVERDUE)
    print(f"Overdue: {overdue}  Due soon: {len(alerts) - overdue}")
    print()
    print(tabulate(make_alert_table(alerts), headers=ALERT_HEADERS, tablefmt="simple"))
    return 0


# =============================================================================
# Stats commands
# =============================================================================


def cmd_fuel_stats(args):
    """Fuel totals and monthly trend for one vehicle."""
    garage = load_garage(args.garage_file)
    records = garage.get(args.vehicle_id)
    vehicle = records.vehicle
    stats = fuel_stats(records.fuel_entries)

    print(f"Vehicle: {vehicle.name}")
    print(f"Fill-ups: {stats.entry_count}")
    if stats.most_recent:
        last = stats.most_recent
        print(f"Last fill-up: {last.date} @ {format_distance(last.odometer)} {vehicle.distance_label}")
    print(f"Total cost: {format_cost(stats.total_cost)}")
    print(f"Total fuel: {stats.total_gallons:,.2f}")
    print(f"Total distance: {format_distance(stats.total_distance)} {vehicle.distance_label}")
    print(f"Average {vehicle.efficiency_label}: {format_efficiency(stats.average_efficiency)}")
    print()

    if not stats.monthly_trend:
        return 0

    rows = [
        [
            p.month,
            format_cost(p.cost),
            f"{p.gallons:,.2f}",
            format_distance(p.distance),
            format_efficiency(p.efficiency),
        ]
        for p in stats.monthly_trend
    ]
    headers = ["Month", "Cost", "Fuel", "Distance", vehicle.efficiency_label]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_expense_stats(args):
    """Expense totals by category and month for one vehicle."""
    garage = load_garage(args.garage_file)
    records = garage.get(args.vehicle_id)
    stats = expense_stats(records.expenses)

    print(f"Vehicle: {records.vehicle.name}")
    print(f"Expenses: {stats.expense_count}")
    print(f"Total cost: {format_cost(stats.total_cost)}")
    print()

    if not stats.categories:
        return 0

    rows = [[c.category, c.count, format_cost(c.total)] for c in stats.categories]
    print(tabulate(rows, headers=["Category", "Count", "Total"], tablefmt="simple"))
    print()

    rows = [
        [
            p.month,
            format_cost(p.total),
            ", ".join(f"{name} {format_cost(amt)}" for name, amt in p.categories.items()),
        ]
        for p in stats.monthly_trend
    ]
    print(tabulate(rows, headers=["Month", "Total", "Breakdown"], tablefmt="simple"))
    return 0


# =============================================================================
# Report command
# =============================================================================


def cmd_report(args):
    """Combined cost report for one vehicle."""
    garage = load_garage(args.garage_file)
    records = garage.get(args.vehicle_id)
    report = build_vehicle_report(
        records.vehicle,
        records.fuel_entries,
        records.expenses,
        records.reminders,
        now=parse_now(args.now),
    )

    if args.json:
        print(json.dumps(to_plain(report), indent=2))
        return 0

    vehicle = report.vehicle
    print(f"Vehicle: {vehicle.name}")
    print(f"Odometer: {format_distance(vehicle.odometer)} {vehicle.distance_label}")
    print()
    rows = [
        ["Fuel", format_cost(report.fuel.total_cost)],
        ["Maintenance", format_cost(report.maintenance_cost)],
        ["Other", format_cost(report.other_costs)],
        ["Total", format_cost(report.total_cost)],
    ]
    print(tabulate(rows, headers=["Cost", "Amount"], tablefmt="simple"))
    print()
    print(f"Distance tracked: {format_distance(report.fuel.total_distance)} {vehicle.distance_label}")
    print(f"Average {vehicle.efficiency_label}: {format_efficiency(report.fuel.average_efficiency)}")
    print(f"Fuel cost per {vehicle.distance_label}: {format_cost(report.fuel.cost_per_distance)}")

    if report.alerts:
        print()
        print(tabulate(make_alert_table(report.alerts), headers=ALERT_HEADERS, tablefmt="simple"))
    return 0


# =============================================================================
# Compare command
# =============================================================================


def cmd_compare(args):
    """Compare totals across the user's vehicles."""
    garage = load_garage(args.garage_file)
    comparison = compare_vehicles(
        garage.records_for_user(args.user),
        now=parse_now(args.now),
        sort_by=args.sort,
        descending=not args.asc,
    )

    if not comparison.vehicles:
        print("No vehicles found.")
        return 0

    rows = [
        [
            c.name,
            format_cost(c.total_cost),
            format_distance(c.total_distance),
            format_efficiency(c.average_efficiency),
            format_cost(c.cost_per_distance),
            c.fuel_count,
            c.expense_count,
            c.due_reminders,
        ]
        for c in comparison.vehicles
    ]
    headers = [
        "Vehicle",
        "Total Cost",
        "Distance",
        "Efficiency",
        "Fuel $/Dist",
        "Fill-ups",
        "Expenses",
        "Due",
    ]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    print()
    print(f"Fleet total: {format_cost(comparison.total_cost)}")
    return 0


# =============================================================================
# Write commands
# =============================================================================


def cmd_log_fuel(args):
    """Add a fill-up."""
    garage = load_garage(args.garage_file)
    vehicle = garage.get_vehicle(args.vehicle_id)
    entry = FuelEntry(
        id=0,
        vehicle_id=vehicle.id,
        date=parse_date(args.date) or date.today(),
        gallons=args.gallons,
        price=args.price,
        odometer=args.odometer,
        location=args.location,
        notes=args.notes,
    )

    print(f"Adding fill-up to {vehicle.name}:")
    print(f"  Date:     {entry.date}")
    print(f"  Odometer: {format_distance(entry.odometer)}")
    print(f"  Fuel:     {entry.gallons:,.2f}")
    print(f"  Cost:     {format_cost(entry.price)}")
    if entry.location:
        print(f"  Location: {entry.location}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fuel_entry(args.garage_file, entry)
    print("Fill-up saved.")

    # New odometer can trip mileage reminders
    garage = load_garage(args.garage_file)
    alerts = fleet_alerts([garage.get(vehicle.id)], datetime.now())
    for alert in alerts:
        print(f"  {alert.status.label.upper()}: {alert.reminder_name} ({describe_alert(alert)})")
    return 0


def cmd_log_expense(args):
    """Add an expense."""
    garage = load_garage(args.garage_file)
    vehicle = garage.get_vehicle(args.vehicle_id)
    expense = Expense(
        id=0,
        vehicle_id=vehicle.id,
        category=args.category,
        amount=args.amount,
        date=parse_date(args.date) or date.today(),
        notes=args.notes,
    )

    print(f"Adding expense to {vehicle.name}:")
    print(f"  Date:     {expense.date}")
    print(f"  Category: {expense.category}")
    print(f"  Amount:   {format_cost(expense.amount)}")
    if expense.notes:
        print(f"  Notes:    {expense.notes}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_expense(args.garage_file, expense)
    print("Expense saved.")
    return 0


def cmd_complete(args):
    """Mark a reminder's service as done."""
    garage = load_garage(args.garage_file)
    vehicle = garage.get_vehicle(args.vehicle_id)
    reminder = garage.get_reminder(args.vehicle_id, args.reminder_id)
    service_date = parse_date(args.date) or date.today()
    service_miles = args.miles if args.miles is not None else vehicle.odometer

    print(f"Vehicle:  {vehicle.name}")
    print(f"Reminder: {reminder.name}")
    print(f"Serviced: {service_date} @ {format_distance(service_miles)} {vehicle.distance_label}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    done = complete_reminder(args.garage_file, vehicle.id, reminder.id, service_date, service_miles)
    print(f"Reminder completed. Last service now {done.last_service_date}.")
    return 0


def cmd_update_odometer(args):
    """Update current vehicle odometer."""
    garage = load_garage(args.garage_file)
    vehicle = garage.get_vehicle(args.vehicle_id)

    print(f"Vehicle: {vehicle.name}")
    print(f"Current odometer: {format_distance(vehicle.odometer)}")
    print(f"New odometer:     {format_distance(args.odometer)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_odometer(args.garage_file, vehicle.id, args.odometer)
    print("Odometer updated.")
    return 0


def cmd_add_reminder(args):
    """Add a maintenance reminder."""
    garage = load_garage(args.garage_file)
    vehicle = garage.get_vehicle(args.vehicle_id)
    reminder = MaintenanceReminder(
        id=0,
        vehicle_id=vehicle.id,
        name=args.name,
        interval_miles=args.miles or 0,
        interval_days=args.days or 0,
        last_service_date=parse_date(args.last_date) or date.today(),
        last_service_miles=(
            args.last_miles if args.last_miles is not None else vehicle.odometer
        ),
    )

    print(f"Adding reminder to {vehicle.name}:")
    print(f"  Name:     {reminder.name}")
    if reminder.interval_miles:
        print(f"  Every:    {format_distance(reminder.interval_miles)} {vehicle.distance_label}")
    if reminder.interval_days:
        print(f"  Every:    {reminder.interval_days} days")
    print(f"  Last:     {reminder.last_service_date} @ {format_distance(reminder.last_service_miles)}")
    print()

    if reminder.is_disabled:
        print("Error: Reminder needs --miles or --days")
        return 1

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    saved = add_reminder(args.garage_file, reminder)
    print(f"Reminder {saved.id} added.")
    return 0


def cmd_delete_reminder(args):
    """Remove a maintenance reminder."""
    garage = load_garage(args.garage_file)
    vehicle = garage.get_vehicle(args.vehicle_id)
    reminder = garage.get_reminder(args.vehicle_id, args.reminder_id)

    print(f"Removing '{reminder.name}' from {vehicle.name}")
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    delete_reminder(args.garage_file, vehicle.id, reminder.id)
    print("Reminder deleted.")
    return 0


# =============================================================================
# Search and sharing commands
# =============================================================================


def cmd_search(args):
    """Find fill-ups and expenses whose text matches the query."""
    garage = load_garage(args.garage_file)
    results = search_records(garage.records_for_user(args.user), args.query)

    print(f"Matches for '{args.query}': {results.count}")
    if results.fuel_entries:
        print()
        rows = [
            [
                f.vehicle_id,
                f.date,
                format_distance(f.odometer),
                format_cost(f.price),
                f.location or "",
                f.notes or "",
            ]
            for f in results.fuel_entries
        ]
        headers = ["Vehicle", "Date", "Odometer", "Cost", "Location", "Notes"]
        print(tabulate(rows, headers=headers, tablefmt="simple"))
    if results.expenses:
        print()
        rows = [
            [e.vehicle_id, e.date, e.category, format_cost(e.amount), e.notes or ""]
            for e in results.expenses
        ]
        headers = ["Vehicle", "Date", "Category", "Amount", "Notes"]
        print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_share(args):
    """Share a vehicle with another user."""
    vehicle = share_vehicle(args.garage_file, args.vehicle_id, args.user_id)
    print(f"{vehicle.name} users: {', '.join(str(u) for u in vehicle.users)}")
    return 0


def cmd_unshare(args):
    """Stop sharing a vehicle with a user."""
    vehicle = unshare_vehicle(args.garage_file, args.vehicle_id, args.user_id)
    print(f"{vehicle.name} users: {', '.join(str(u) for u in vehicle.users)}")
    return 0


def cmd_users(args):
    """List the owner and shared users of a vehicle."""
    garage = load_garage(args.garage_file)
    vehicle = garage.get_vehicle(args.vehicle_id)
    rows = [[u, "owner" if u == vehicle.owner_id else "shared"] for u in vehicle.users]
    print(f"Vehicle: {vehicle.name}")
    if not rows:
        print("No users.")
        return 0
    print(tabulate(rows, headers=["User", "Access"], tablefmt="simple"))
    return 0


# =============================================================================
# Export command
# =============================================================================


def export_csv(garage, user_id: Optional[int] = None) -> str:
    """Detailed export: every fill-up and expense per vehicle, with totals."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    grand_total = 0.0

    for records in garage.records_for_user(user_id):
        vehicle = records.vehicle
        writer.writerow([f"VEHICLE: {vehicle.name}"])
        writer.writerow(["Current Odometer", f"{vehicle.odometer:.1f}", vehicle.mileage_unit])
        writer.writerow([])
        writer.writerow(["Date", "Odometer", "Fuel", "Price", "Location"])
        fuel_total = 0.0
        for f in sorted(records.fuel_entries, key=lambda f: (f.date, f.odometer)):
            writer.writerow(
                [f.date.isoformat(), f"{f.odometer:.1f}", f"{f.gallons:.2f}", f"{f.price:.2f}", f.location or ""]
            )
            fuel_total += f.price
        writer.writerow([])
        writer.writerow(["Date", "Category", "Amount", "Notes"])
        expense_total = 0.0
        for e in sorted(records.expenses, key=lambda e: e.date):
            writer.writerow([e.date.isoformat(), e.category, f"{e.amount:.2f}", e.notes or ""])
            expense_total += e.amount
        writer.writerow([])
        writer.writerow(["Vehicle Total", f"{fuel_total + expense_total:.2f}"])
        writer.writerow([])
        grand_total += fuel_total + expense_total

    writer.writerow(["GRAND TOTAL", f"{grand_total:.2f}"])
    return out.getvalue()


def cmd_export_csv(args):
    """Write the detailed CSV export to a file or stdout."""
    garage = load_garage(args.garage_file)
    text = export_csv(garage, args.user)
    if args.output:
        args.output.write_text(text)
        print(f"Exported to {args.output}")
    else:
        sys.stdout.write(text)
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle cost and maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s garage.yaml alerts
  %(prog)s garage.yaml alerts --user 1 --now 2024-06-01
  %(prog)s garage.yaml fuel-stats 1
  %(prog)s garage.yaml report 1 --json
  %(prog)s garage.yaml compare --user 1 --sort average_efficiency
  %(prog)s garage.yaml log-fuel 1 --gallons 11.2 --price 42.10 --odometer 58210
  %(prog)s garage.yaml log-expense 1 Insurance 480 --date 2024-03-01
  %(prog)s garage.yaml complete 1 2 --miles 58210
  %(prog)s garage.yaml update-odometer 1 58400
  %(prog)s garage.yaml add-reminder 1 "Oil Change" --miles 5000 --days 180
  %(prog)s garage.yaml search shell --user 1
  %(prog)s garage.yaml share 1 2
""",
    )
    parser.add_argument("garage_file", type=Path, help="Path to garage YAML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    alerts_parser = subparsers.add_parser(
        "alerts", help="Show reminders that are due soon or overdue"
    )
    alerts_parser.add_argument("--vehicle", type=int, help="Only this vehicle id")
    alerts_parser.add_argument("--user", type=int, help="Vehicles owned by or shared with user")
    alerts_parser.add_argument("--now", type=str, help="Evaluate as of date (YYYY-MM-DD)")
    alerts_parser.add_argument(
        "--status", choices=[s.label for s in Status], help="Only alerts with this status"
    )

    fuel_parser = subparsers.add_parser("fuel-stats", help="Fuel statistics for a vehicle")
    fuel_parser.add_argument("vehicle_id", type=int)

    expense_parser = subparsers.add_parser(
        "expense-stats", help="Expense statistics for a vehicle"
    )
    expense_parser.add_argument("vehicle_id", type=int)

    report_parser = subparsers.add_parser("report", help="Combined report for a vehicle")
    report_parser.add_argument("vehicle_id", type=int)
    report_parser.add_argument("--now", type=str, help="Evaluate reminders as of date")
    report_parser.add_argument("--json", action="store_true", help="Print JSON")

    compare_parser = subparsers.add_parser("compare", help="Compare vehicles")
    compare_parser.add_argument("--user", type=int, help="Vehicles owned by or shared with user")
    compare_parser.add_argument(
        "--sort", choices=SORT_KEYS, default="total_cost", help="Sort key (default: total_cost)"
    )
    compare_parser.add_argument("--asc", action="store_true", help="Sort ascending")
    compare_parser.add_argument("--now", type=str, help="Evaluate reminders as of date")

    log_fuel_parser = subparsers.add_parser("log-fuel", help="Add a fill-up")
    log_fuel_parser.add_argument("vehicle_id", type=int)
    log_fuel_parser.add_argument("--gallons", type=float, required=True)
    log_fuel_parser.add_argument("--price", type=float, required=True, help="Total paid")
    log_fuel_parser.add_argument("--odometer", type=float, required=True)
    log_fuel_parser.add_argument("--date", type=str, help="YYYY-MM-DD (default: today)")
    log_fuel_parser.add_argument("--location", type=str)
    log_fuel_parser.add_argument("--notes", type=str)
    log_fuel_parser.add_argument("--dry-run", action="store_true")

    log_expense_parser = subparsers.add_parser("log-expense", help="Add an expense")
    log_expense_parser.add_argument("vehicle_id", type=int)
    log_expense_parser.add_argument("category", type=str, help="e.g. 'Insurance', 'Maintenance'")
    log_expense_parser.add_argument("amount", type=float)
    log_expense_parser.add_argument("--date", type=str, help="YYYY-MM-DD (default: today)")
    log_expense_parser.add_argument("--notes", type=str)
    log_expense_parser.add_argument("--dry-run", action="store_true")

    complete_parser = subparsers.add_parser("complete", help="Mark a reminder as serviced")
    complete_parser.add_argument("vehicle_id", type=int)
    complete_parser.add_argument("reminder_id", type=int)
    complete_parser.add_argument("--date", type=str, help="YYYY-MM-DD (default: today)")
    complete_parser.add_argument("--miles", type=float, help="Default: current odometer")
    complete_parser.add_argument("--dry-run", action="store_true")

    odometer_parser = subparsers.add_parser("update-odometer", help="Update current odometer")
    odometer_parser.add_argument("vehicle_id", type=int)
    odometer_parser.add_argument("odometer", type=float)
    odometer_parser.add_argument("--dry-run", action="store_true")

    add_reminder_parser = subparsers.add_parser("add-reminder", help="Add a maintenance reminder")
    add_reminder_parser.add_argument("vehicle_id", type=int)
    add_reminder_parser.add_argument("name", type=str, help="e.g. 'Oil Change'")
    add_reminder_parser.add_argument("--miles", type=float, help="Interval in distance units")
    add_reminder_parser.add_argument("--days", type=int, help="Interval in days")
    add_reminder_parser.add_argument("--last-date", type=str, help="Last service (default: today)")
    add_reminder_parser.add_argument(
        "--last-miles", type=float, help="Last service odometer (default: current odometer)"
    )
    add_reminder_parser.add_argument("--dry-run", action="store_true")

    delete_reminder_parser = subparsers.add_parser(
        "delete-reminder", help="Remove a maintenance reminder"
    )
    delete_reminder_parser.add_argument("vehicle_id", type=int)
    delete_reminder_parser.add_argument("reminder_id", type=int)
    delete_reminder_parser.add_argument("--dry-run", action="store_true")

    export_parser = subparsers.add_parser("export-csv", help="Detailed CSV export")
    export_parser.add_argument("--user", type=int, help="Vehicles owned by or shared with user")
    export_parser.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")

    search_parser = subparsers.add_parser("search", help="Find fill-ups and expenses by text")
    search_parser.add_argument("query", type=str)
    search_parser.add_argument("--user", type=int, help="Vehicles owned by or shared with user")

    share_parser = subparsers.add_parser("share", help="Share a vehicle with a user")
    share_parser.add_argument("vehicle_id", type=int)
    share_parser.add_argument("user_id", type=int)

    unshare_parser = subparsers.add_parser("unshare", help="Stop sharing a vehicle with a user")
    unshare_parser.add_argument("vehicle_id", type=int)
    unshare_parser.add_argument("user_id", type=int)

    users_parser = subparsers.add_parser("users", help="List the users of a vehicle")
    users_parser.add_argument("vehicle_id", type=int)

    return parser


COMMANDS = {
    "alerts": cmd_alerts,
    "fuel-stats": cmd_fuel_stats,
    "expense-stats": cmd_expense_stats,
    "report": cmd_report,
    "compare": cmd_compare,
    "log-fuel": cmd_log_fuel,
    "log-expense": cmd_log_expense,
    "complete": cmd_complete,
    "update-odometer": cmd_update_odometer,
    "add-reminder": cmd_add_reminder,
    "delete-reminder": cmd_delete_reminder,
    "export-csv": cmd_export_csv,
    "search": cmd_search,
    "share": cmd_share,
    "unshare": cmd_unshare,
    "users": cmd_users,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if not args.garage_file.exists():
        print(f"Error: File not found: {args.garage_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except (GarageError, ValueError) as e:
        _logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
