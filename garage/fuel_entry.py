"""FuelEntry class for fill-up records."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class FuelEntry:
    """A single fill-up. ``price`` is the total paid, not per gallon."""

    id: int
    vehicle_id: int
    date: date
    gallons: float
    price: float
    odometer: float
    location: Optional[str] = None
    notes: Optional[str] = None
