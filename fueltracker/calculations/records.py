"""
Value types consumed by the calculation core.

The persistence layer owns refuel entries; the core only ever sees these
immutable snapshots, built once per query from the stored rows.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, List, Mapping, Union


class ThemeMode(str, Enum):
    """Appearance preference stored alongside unit settings."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


@dataclass(frozen=True)
class RefuelRecord:
    """A single refuel event. Volume is always stored in liters."""

    id: Any
    date: datetime
    odometer: float
    volume: float
    unit_price: float

    @property
    def total_cost(self) -> float:
        return self.volume * self.unit_price


@dataclass(frozen=True)
class AppSettings:
    """Unit, currency and theme context passed into every formatting call."""

    is_metric: bool = True
    currency: str = "USD"
    theme_mode: ThemeMode = ThemeMode.SYSTEM


RecordCollection = Union[Mapping[Any, RefuelRecord], Iterable[RefuelRecord]]


def as_record_list(records: RecordCollection) -> List[RefuelRecord]:
    """
    Normalize a record collection to a list.

    Accepts either a mapping of record id to record (as handed over by the
    persistence layer) or any iterable of records.
    """
    if records is None:
        return []
    if isinstance(records, Mapping):
        return list(records.values())
    return list(records)
