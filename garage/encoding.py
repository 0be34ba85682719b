"""Conversion of result objects into plain, JSON-safe data."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any


def to_plain(obj: Any) -> Any:
    """
    Recursively convert dataclasses, enums and dates into dicts, labels and ISO strings.

    Enums with a ``label`` (like Status) use it; other enums use their name.
    Tuples become lists.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_plain(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, Enum):
        return getattr(obj, "label", obj.name)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {str(k): to_plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_plain(v) for v in obj]
    return obj
