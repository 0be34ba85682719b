"""Free-text search over fill-ups and expenses."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .expense import Expense
from .fuel_entry import FuelEntry
from .report import VehicleRecords


@dataclass(frozen=True)
class SearchResults:
    query: str
    fuel_entries: List[FuelEntry] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.fuel_entries) + len(self.expenses)


def _matches(query: str, *fields: Optional[str]) -> bool:
    return any(query in f.casefold() for f in fields if f)


def search_records(rows: Iterable[VehicleRecords], query: str) -> SearchResults:
    """
    Case-insensitive substring match.

    Fill-ups match on location or notes, expenses on category or notes.
    Results keep vehicle order, then record order within each vehicle.
    """
    needle = (query or "").strip().casefold()
    if not needle:
        raise ValueError("Search query is required")

    fuel: List[FuelEntry] = []
    expenses: List[Expense] = []
    for records in rows:
        fuel.extend(f for f in records.fuel_entries if _matches(needle, f.location, f.notes))
        expenses.extend(e for e in records.expenses if _matches(needle, e.category, e.notes))
    return SearchResults(query=query, fuel_entries=fuel, expenses=expenses)
