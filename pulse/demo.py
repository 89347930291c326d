from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from pulse.dates import DateLike, as_date, iso
from pulse.records import DashboardRow, ZonePresenceRecord

DEMO_ZONES = [
    ("Z-JerO", 4, ["Guillaume Deramchi"]),
    ("Z-Tako", 8, ["Alice Martin", "Bob Smith", "Carol Johnson"]),
    ("Z-RevF", 18, ["David Wilson", "Eva Brown", "Frank Miller", "Grace Taylor", "Henry Davis", "Ivy Zhang", "Jack Wilson"]),
    ("Z-Tech", 42, ["Guillaume D.", "Marie C.", "Pierre L.", "Anna S.", "David M.", "Laura F.", "Nicolas B.", "Elena V."]),
]

DEMO_TOMORROW = {
    "Z-Tako": ["Alice Martin", "Bob Smith"],
    "Z-RevF": ["Emma Wilson", "Noah Parker", "Alice Thompson", "John Doe", "Jane Smith"],
    "Z-Tech": ["Guillaume D.", "Marie C.", "Pierre L.", "Anna S.", "Paul R.", "Clara H.", "Jean T.", "Amelie G."],
}


def demo_presence_records() -> List[ZonePresenceRecord]:
    return [ZonePresenceRecord.from_people(zone, capacity, people) for zone, capacity, people in DEMO_ZONES]


def demo_pulse_rows() -> List[DashboardRow]:
    return [
        DashboardRow(date=None, zone=r.zone, capacity=r.capacity, count=r.count, people=r.people)
        for r in demo_presence_records()
    ]


def demo_dashboard_rows(today: Optional[DateLike] = None) -> List[DashboardRow]:
    """Two days of demo planning rows: ``today`` and the day after."""
    day = as_date(today) if today is not None else date.today()
    tomorrow = day + timedelta(days=1)
    capacities = {zone: capacity for zone, capacity, _ in DEMO_ZONES}

    rows = []
    for zone, capacity, people in DEMO_ZONES:
        rows.append(DashboardRow(date=iso(day), zone=zone, capacity=capacity, count=len(people), people="; ".join(people)))
    for zone, people in DEMO_TOMORROW.items():
        rows.append(DashboardRow(date=iso(tomorrow), zone=zone, capacity=capacities[zone], count=len(people), people="; ".join(people)))
    return rows
