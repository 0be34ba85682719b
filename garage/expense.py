"""Expense class for ad-hoc vehicle costs."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Expense:
    """A cost that isn't fuel. ``category`` is a free-form label."""

    id: int
    vehicle_id: int
    category: str
    amount: float
    date: date
    notes: Optional[str] = None
