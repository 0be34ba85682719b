"""MaintenanceReminder snapshot."""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Union


@dataclass(frozen=True)
class MaintenanceReminder:
    """
    A recurring service keyed on distance, elapsed days, or both.

    An interval of 0 disables that dimension.
    """

    id: int
    vehicle_id: int
    name: str
    interval_miles: float = 0
    interval_days: int = 0
    last_service_date: Optional[Union[date, datetime]] = None
    last_service_miles: float = 0

    @property
    def is_disabled(self) -> bool:
        return self.interval_miles <= 0 and self.interval_days <= 0

    def completed(
        self, service_date: Union[date, datetime], service_miles: float
    ) -> "MaintenanceReminder":
        """Copy of this reminder with the last service overwritten."""
        return replace(
            self, last_service_date=service_date, last_service_miles=service_miles
        )
