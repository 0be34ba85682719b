"""Flask JSON API for vehicle cost and maintenance tracking."""

import logging
import os
from datetime import date, datetime
from pathlib import Path

from flask import Flask, abort, jsonify, request

# Add parent directory to path for garage imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from garage import (
    SORT_KEYS,
    Expense,
    FuelEntry,
    GarageError,
    MaintenanceReminder,
    ReminderNotFoundError,
    Status,
    VehicleNotFoundError,
    add_reminder,
    build_vehicle_report,
    compare_vehicles,
    complete_reminder,
    delete_reminder,
    evaluate_vehicle,
    expense_stats,
    fleet_alerts,
    fuel_stats,
    load_garage,
    save_expense,
    save_fuel_entry,
    search_records,
    share_vehicle,
    to_plain,
    unshare_vehicle,
)
from garage.loader import parse_date

_logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
app.config["GARAGE_FILE"] = os.environ.get(
    "GARAGE_FILE", str(Path(__file__).parent.parent / "garage.yaml")
)


def get_garage():
    return load_garage(app.config["GARAGE_FILE"])


def current_user():
    """Acting user id from the X-User-Id header (None = all vehicles)."""
    user = request.headers.get("X-User-Id")
    if not user:
        return None
    try:
        return int(user)
    except ValueError:
        abort(400, description="Invalid X-User-Id header")


def visible_records(vehicle_id: int):
    """Records for a vehicle the acting user can see; 404 otherwise."""
    return get_garage().get(vehicle_id, current_user())


def require_owner(vehicle):
    user = current_user()
    if user is not None and user != vehicle.owner_id:
        abort(403, description="Only the owner can change who shares this vehicle")


def request_now() -> datetime:
    """One timestamp per request: ?now=YYYY-MM-DD, else the wall clock."""
    value = request.args.get("now")
    if not value:
        return datetime.now()
    try:
        return datetime.combine(parse_date(value), datetime.min.time())
    except ValueError:
        abort(400, description=f"Invalid now: {value}")


def require_number(payload, key, positive=True):
    value = payload.get(key)
    try:
        number = float(value)
    except (TypeError, ValueError):
        abort(400, description=f"Invalid {key}")
    if positive and number <= 0:
        abort(400, description=f"{key} must be greater than 0")
    return number


def optional_number(payload, key, default=0):
    if payload.get(key) is None:
        return default
    return require_number(payload, key, positive=False)


def request_date(payload, key) -> date:
    try:
        return parse_date(payload.get(key)) or date.today()
    except ValueError:
        abort(400, description=f"Invalid {key}")


@app.errorhandler(VehicleNotFoundError)
@app.errorhandler(ReminderNotFoundError)
def not_found(error):
    return jsonify(error=str(error)), 404


@app.errorhandler(GarageError)
@app.errorhandler(ValueError)
def bad_request(error):
    _logger.debug("Rejected request: %s", error)
    return jsonify(error=str(error)), 400


@app.errorhandler(400)
@app.errorhandler(403)
@app.errorhandler(404)
def http_error(error):
    return jsonify(error=error.description), error.code


@app.route("/health")
def health():
    return jsonify(status="healthy")


@app.route("/api/vehicles")
def list_vehicles():
    """Vehicles visible to the acting user."""
    garage = get_garage()
    return jsonify(to_plain(garage.vehicles_for_user(current_user())))


@app.route("/api/vehicles/<int:vehicle_id>/reminders/due")
def vehicle_reminders_due(vehicle_id: int):
    """Due and overdue alerts for one vehicle."""
    records = visible_records(vehicle_id)
    alerts = evaluate_vehicle(records.vehicle, records.reminders, request_now())
    return jsonify(vehicle=to_plain(records.vehicle), alerts=to_plain(alerts))


@app.route("/api/alerts")
def all_alerts():
    """Due and overdue alerts across the acting user's vehicles, optionally ?status=overdue|soon."""
    status = request.args.get("status")
    if status and status not in [s.label for s in Status]:
        abort(400, description=f"Invalid status: {status}")

    garage = get_garage()
    alerts = fleet_alerts(garage.records_for_user(current_user()), request_now())
    if status:
        alerts = [a for a in alerts if a.status == Status.from_label(status)]
    return jsonify(alerts=to_plain(alerts))


@app.route(
    "/api/vehicles/<int:vehicle_id>/reminders/<int:reminder_id>/complete",
    methods=["POST"],
)
def complete(vehicle_id: int, reminder_id: int):
    """Record a reminder's service."""
    payload = request.get_json(silent=True) or {}
    garage = get_garage()
    vehicle = garage.get_vehicle(vehicle_id, current_user())
    garage.get_reminder(vehicle_id, reminder_id)
    service_date = request_date(payload, "service_date")
    service_miles = optional_number(payload, "service_miles", vehicle.odometer)

    done = complete_reminder(
        app.config["GARAGE_FILE"], vehicle_id, reminder_id, service_date, service_miles
    )
    _logger.info("Completed reminder %d on vehicle %d", reminder_id, vehicle_id)
    return jsonify(message="Reminder completed", reminder=to_plain(done))


@app.route("/api/vehicles/<int:vehicle_id>/stats/fuel")
def vehicle_fuel_stats(vehicle_id: int):
    records = visible_records(vehicle_id)
    return jsonify(to_plain(fuel_stats(records.fuel_entries)))


@app.route("/api/vehicles/<int:vehicle_id>/stats/expenses")
def vehicle_expense_stats(vehicle_id: int):
    records = visible_records(vehicle_id)
    return jsonify(to_plain(expense_stats(records.expenses)))


@app.route("/api/vehicles/<int:vehicle_id>/report")
def vehicle_report(vehicle_id: int):
    """Detailed cost report with current alerts."""
    records = visible_records(vehicle_id)
    report = build_vehicle_report(
        records.vehicle,
        records.fuel_entries,
        records.expenses,
        records.reminders,
        now=request_now(),
    )
    return jsonify(to_plain(report))


@app.route("/api/reports/comparison")
def comparison_report():
    """Fleet comparison, sorted by ?sort= (default total_cost) and ?order=asc|desc."""
    sort_by = request.args.get("sort", "total_cost")
    if sort_by not in SORT_KEYS:
        abort(400, description=f"Invalid sort: {sort_by}")
    order = request.args.get("order", "desc").lower()

    garage = get_garage()
    comparison = compare_vehicles(
        garage.records_for_user(current_user()),
        now=request_now(),
        sort_by=sort_by,
        descending=order != "asc",
    )
    return jsonify(to_plain(comparison))


@app.route("/api/vehicles/<int:vehicle_id>/fuel", methods=["POST"])
def create_fuel_entry(vehicle_id: int):
    """Add a fill-up and return it with any alerts it triggers."""
    payload = request.get_json(silent=True) or {}
    visible_records(vehicle_id)

    entry = FuelEntry(
        id=0,
        vehicle_id=vehicle_id,
        date=request_date(payload, "date"),
        gallons=require_number(payload, "gallons"),
        price=require_number(payload, "price"),
        odometer=require_number(payload, "odometer"),
        location=payload.get("location"),
        notes=payload.get("notes"),
    )
    saved = save_fuel_entry(app.config["GARAGE_FILE"], entry)

    records = visible_records(vehicle_id)
    alerts = evaluate_vehicle(records.vehicle, records.reminders, request_now())
    return jsonify(entry=to_plain(saved), alerts=to_plain(alerts)), 201


@app.route("/api/vehicles/<int:vehicle_id>/expenses", methods=["POST"])
def create_expense(vehicle_id: int):
    """Add an expense."""
    payload = request.get_json(silent=True) or {}
    visible_records(vehicle_id)

    category = payload.get("category")
    if not category:
        abort(400, description="category is required")

    expense = Expense(
        id=0,
        vehicle_id=vehicle_id,
        category=category,
        amount=require_number(payload, "amount"),
        date=request_date(payload, "date"),
        notes=payload.get("notes"),
    )
    saved = save_expense(app.config["GARAGE_FILE"], expense)
    return jsonify(to_plain(saved)), 201


@app.route("/api/vehicles/<int:vehicle_id>/reminders", methods=["POST"])
def create_reminder(vehicle_id: int):
    """Add a reminder; last service defaults to today at the current odometer."""
    payload = request.get_json(silent=True) or {}
    vehicle = visible_records(vehicle_id).vehicle

    name = payload.get("name")
    if not name:
        abort(400, description="name is required")

    reminder = MaintenanceReminder(
        id=0,
        vehicle_id=vehicle_id,
        name=name,
        interval_miles=optional_number(payload, "interval_miles"),
        interval_days=int(optional_number(payload, "interval_days")),
        last_service_date=request_date(payload, "last_service_date"),
        last_service_miles=optional_number(payload, "last_service_miles", vehicle.odometer),
    )
    saved = add_reminder(app.config["GARAGE_FILE"], reminder)
    return jsonify(to_plain(saved)), 201


@app.route(
    "/api/vehicles/<int:vehicle_id>/reminders/<int:reminder_id>", methods=["DELETE"]
)
def remove_reminder(vehicle_id: int, reminder_id: int):
    garage = get_garage()
    garage.get_reminder(vehicle_id, reminder_id, current_user())
    delete_reminder(app.config["GARAGE_FILE"], vehicle_id, reminder_id)
    return jsonify(message="Reminder deleted")


@app.route("/api/search")
def search():
    """Fill-ups and expenses matching ?q= across the acting user's vehicles."""
    garage = get_garage()
    results = search_records(garage.records_for_user(current_user()), request.args.get("q", ""))
    return jsonify(
        fuel=to_plain(results.fuel_entries),
        expenses=to_plain(results.expenses),
        count=results.count,
    )


@app.route("/api/vehicles/<int:vehicle_id>/users")
def vehicle_users(vehicle_id: int):
    vehicle = visible_records(vehicle_id).vehicle
    return jsonify(owner=vehicle.owner_id, users=list(vehicle.users))


@app.route("/api/vehicles/<int:vehicle_id>/share", methods=["POST"])
def share(vehicle_id: int):
    """Share a vehicle with the user in the body's user_id."""
    payload = request.get_json(silent=True) or {}
    require_owner(visible_records(vehicle_id).vehicle)

    try:
        user_id = int(payload.get("user_id"))
    except (TypeError, ValueError):
        abort(400, description="Invalid user_id")

    vehicle = share_vehicle(app.config["GARAGE_FILE"], vehicle_id, user_id)
    _logger.info("Shared vehicle %d with user %d", vehicle_id, user_id)
    return jsonify(to_plain(vehicle)), 201


@app.route("/api/vehicles/<int:vehicle_id>/users/<int:user_id>", methods=["DELETE"])
def unshare(vehicle_id: int, user_id: int):
    require_owner(visible_records(vehicle_id).vehicle)
    vehicle = unshare_vehicle(app.config["GARAGE_FILE"], vehicle_id, user_id)
    return jsonify(to_plain(vehicle))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
