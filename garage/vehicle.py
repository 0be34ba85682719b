"""Vehicle snapshot."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

MILES = "mi"
KILOMETERS = "km"


@dataclass(frozen=True)
class Vehicle:
    """Identification and latest odometer reading for one vehicle."""

    id: int
    make: str
    model: str
    year: int
    odometer: float = 0
    mileage_unit: str = MILES
    fuel_type: Optional[str] = None
    owner_id: Optional[int] = None
    shared_with: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.year} {self.make} {self.model}"

    @property
    def distance_label(self) -> str:
        return "km" if self.mileage_unit == KILOMETERS else "mi"

    @property
    def efficiency_label(self) -> str:
        return "km/L" if self.mileage_unit == KILOMETERS else "mpg"

    @property
    def users(self) -> Tuple[int, ...]:
        """Owner first, then the users the vehicle is shared with."""
        owner = (self.owner_id,) if self.owner_id is not None else ()
        return owner + tuple(u for u in self.shared_with if u != self.owner_id)

    def is_visible_to(self, user_id: int) -> bool:
        """True if the user owns the vehicle or it is shared with them."""
        return self.owner_id == user_id or user_id in self.shared_with
