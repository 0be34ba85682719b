"""Exception hierarchy for garage persistence errors."""


class GarageError(Exception):
    """Base exception for garage file errors."""


class VehicleNotFoundError(GarageError, KeyError):
    """No vehicle with the requested id."""

    def __init__(self, vehicle_id: int):
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle {vehicle_id} not found")

    def __str__(self) -> str:
        return self.args[0]


class ReminderNotFoundError(GarageError, KeyError):
    """No reminder with the requested id on the vehicle."""

    def __init__(self, vehicle_id: int, reminder_id: int):
        self.vehicle_id = vehicle_id
        self.reminder_id = reminder_id
        super().__init__(f"Reminder {reminder_id} not found on vehicle {vehicle_id}")

    def __str__(self) -> str:
        return self.args[0]


class OdometerRegressionError(GarageError, ValueError):
    """A new odometer reading is lower than one already recorded."""

    def __init__(self, reading: float, previous: float):
        self.reading = reading
        self.previous = previous
        super().__init__(
            f"Odometer {reading:,.0f} cannot be less than previous reading {previous:,.0f}"
        )
