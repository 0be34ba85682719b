"""ReminderAlert dataclass for evaluated reminder status."""

from dataclasses import dataclass
from typing import Optional

from .status import Status
from .vehicle import MILES


@dataclass(frozen=True)
class ReminderAlert:
    """
    Evaluated status of one reminder against a vehicle's odometer and a point in time.

    ``miles_tracked``/``days_tracked`` say whether each dimension was
    evaluated at all; an untracked dimension reports 0 to go.
    """

    vehicle_id: int
    reminder_id: int
    reminder_name: str
    status: Status
    miles_to_go: float = 0
    days_until_due: int = 0
    vehicle_name: Optional[str] = None
    distance_unit: str = MILES
    miles_tracked: bool = False
    days_tracked: bool = False

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.SOON)
