"""
Fuel and expense statistics.

Both aggregators accept records in any order and sort their own working
copy. Monthly trends are emitted as lists sorted by month key so the
output never depends on input or dict iteration order.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .calculations import as_datetime, month_key, safe_ratio
from .expense import Expense
from .fuel_entry import FuelEntry


@dataclass(frozen=True)
class FuelTrendPoint:
    month: str
    cost: float = 0.0
    gallons: float = 0.0
    distance: float = 0.0
    efficiency: float = 0.0


@dataclass(frozen=True)
class ExpenseTrendPoint:
    month: str
    total: float = 0.0
    categories: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total: float
    count: int


@dataclass(frozen=True)
class FuelStatsSummary:
    """Totals and monthly trend for one vehicle's fill-ups."""

    total_cost: float = 0.0
    total_gallons: float = 0.0
    total_distance: float = 0.0
    average_efficiency: float = 0.0
    cost_per_distance: float = 0.0
    entry_count: int = 0
    most_recent: Optional[FuelEntry] = None
    monthly_trend: List[FuelTrendPoint] = field(default_factory=list)


@dataclass(frozen=True)
class ExpenseStatsSummary:
    """Totals, per-category breakdown and monthly trend for one vehicle's expenses."""

    total_cost: float = 0.0
    expense_count: int = 0
    categories: List[CategoryTotal] = field(default_factory=list)
    monthly_trend: List[ExpenseTrendPoint] = field(default_factory=list)

    def category_total(self, category: str) -> float:
        for cat in self.categories:
            if cat.category == category:
                return cat.total
        return 0.0


def _fuel_order(entry: FuelEntry):
    return (as_datetime(entry.date), entry.odometer)


def fuel_stats(entries: Iterable[FuelEntry]) -> FuelStatsSummary:
    """
    Summarize fill-ups.

    Distance comes from consecutive odometer readings in date order. Each
    stretch between two fill-ups is credited to the month of the earlier
    one, while cost and gallons stay with the entry's own month, so bucket
    cost and gallons always add up to the totals.
    """
    ordered = sorted(entries, key=_fuel_order)
    if not ordered:
        return FuelStatsSummary()

    first, last = ordered[0], ordered[-1]
    total_distance = last.odometer - first.odometer

    buckets: Dict[str, Dict[str, float]] = {}
    for i, entry in enumerate(ordered):
        bucket = buckets.setdefault(
            month_key(entry.date), {"cost": 0.0, "gallons": 0.0, "distance": 0.0}
        )
        bucket["cost"] += entry.price
        bucket["gallons"] += entry.gallons
        if i + 1 < len(ordered):
            bucket["distance"] += ordered[i + 1].odometer - entry.odometer

    trend = [
        FuelTrendPoint(
            month=month,
            cost=b["cost"],
            gallons=b["gallons"],
            distance=b["distance"],
            efficiency=safe_ratio(b["distance"], b["gallons"]),
        )
        for month, b in sorted(buckets.items())
    ]
    # Totals are the bucket sums.
    total_cost = sum(p.cost for p in trend)
    total_gallons = sum(p.gallons for p in trend)

    return FuelStatsSummary(
        total_cost=total_cost,
        total_gallons=total_gallons,
        total_distance=total_distance,
        average_efficiency=safe_ratio(total_distance, total_gallons),
        cost_per_distance=safe_ratio(total_cost, total_distance),
        entry_count=len(ordered),
        most_recent=last,
        monthly_trend=trend,
    )


def expense_stats(expenses: Iterable[Expense]) -> ExpenseStatsSummary:
    """Summarize expenses. Categories match exactly (case-sensitive) and are listed by name."""
    ordered = sorted(expenses, key=lambda e: as_datetime(e.date))

    totals: Dict[str, float] = {}
    counts: Dict[str, int] = {}
    monthly: Dict[str, Dict[str, float]] = {}

    for e in ordered:
        totals[e.category] = totals.get(e.category, 0.0) + e.amount
        counts[e.category] = counts.get(e.category, 0) + 1
        month = monthly.setdefault(month_key(e.date), {})
        month[e.category] = month.get(e.category, 0.0) + e.amount

    categories = [
        CategoryTotal(category=name, total=totals[name], count=counts[name])
        for name in sorted(totals)
    ]
    trend = [
        ExpenseTrendPoint(
            month=key,
            total=sum(cats[name] for name in sorted(cats)),
            categories={name: cats[name] for name in sorted(cats)},
        )
        for key, cats in sorted(monthly.items())
    ]
    total_cost = sum(p.total for p in trend)

    return ExpenseStatsSummary(
        total_cost=total_cost,
        expense_count=len(ordered),
        categories=categories,
        monthly_trend=trend,
    )
