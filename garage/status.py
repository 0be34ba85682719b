"""Status enum for maintenance alert urgency."""

from enum import Enum


class Status(Enum):
    """Reminder alert tiers. Higher value = more urgent."""

    UPCOMING = 1
    SOON = 2
    OVERDUE = 3

    @property
    def label(self) -> str:
        """Lowercase name used on the wire."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "Status":
        return cls[label.upper()]

    @staticmethod
    def worst(*statuses: "Status") -> "Status":
        """Most urgent of the given statuses (UPCOMING when none given)."""
        return max(statuses, key=lambda s: s.value, default=Status.UPCOMING)
