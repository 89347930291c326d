from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ColumnLayout:
    """Positional column map for one sheet shape.

    Sheets are read by position, not by header name. A layout with an
    ``identity`` column is an event log (one row per person per check-in);
    the others are already aggregated per zone.
    """

    name: str
    min_columns: int
    zone: Optional[int] = None
    capacity: Optional[int] = None
    count: Optional[int] = None
    people: Optional[int] = None
    identity: Optional[int] = None
    date: Optional[int] = None
    header_keywords: Tuple[str, ...] = ()

    @property
    def is_event_log(self) -> bool:
        return self.identity is not None


PULSE = ColumnLayout(name="pulse", min_columns=4, zone=0, capacity=1, count=2, people=3, header_keywords=("zone",))
EVENT_LOG = ColumnLayout(name="event_log", min_columns=5, identity=2, date=3, zone=4, header_keywords=("timestamp", "horodateur"))
DASHBOARD = ColumnLayout(name="dashboard", min_columns=5, date=0, zone=1, capacity=2, count=3, people=4, header_keywords=("date",))
EMPLOYEES = ColumnLayout(name="employees", min_columns=9, header_keywords=("nom", "name"))

LAYOUTS: Dict[str, ColumnLayout] = {layout.name: layout for layout in (PULSE, EVENT_LOG, DASHBOARD, EMPLOYEES)}


def get_layout(name: str) -> ColumnLayout:
    try:
        return LAYOUTS[name]
    except KeyError:
        raise ValueError(f"Unknown column layout: {name!r} (expected one of {sorted(LAYOUTS)})") from None
