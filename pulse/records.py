from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Optional

from pulse.names import split_names

Provenance = Literal["live", "demo"]

PEOPLE_JOINER = "; "


@dataclass(frozen=True)
class ZonePresenceRecord:
    zone: str
    capacity: int
    count: int
    people: str

    @classmethod
    def from_people(cls, zone: str, capacity: int, people: Iterable[str]) -> "ZonePresenceRecord":
        members = list(dict.fromkeys(people))
        return cls(zone=zone, capacity=max(0, int(capacity)), count=len(members), people=PEOPLE_JOINER.join(members))

    @property
    def people_list(self) -> List[str]:
        return split_names(self.people)

    @property
    def occupancy(self) -> float:
        return (self.count / self.capacity) * 100 if self.capacity else 0.0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DashboardRow:
    """One zone on one day, already aggregated upstream.

    ``date`` is ``None`` for the undated pulse sheet.
    """

    date: Optional[str]
    zone: str
    capacity: int
    count: int
    people: str

    @property
    def people_list(self) -> List[str]:
        return split_names(self.people)

    @property
    def occupancy(self) -> float:
        return (self.count / self.capacity) * 100 if self.capacity else 0.0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Employee:
    name: str
    role: str
    team: str
    manager: str
    city: str
    country: str
    interests: str
    current_project: str
    weekly_mood: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class IngestReport:
    layout: str = ""
    header_detected: bool = False
    rows_seen: int = 0
    rows_accepted: int = 0
    skipped_malformed: int = 0
    skipped_blank: int = 0
    skipped_out_of_window: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PresenceSnapshot:
    """Output of one ingestion pass; replaces the previous snapshot wholesale."""

    records: List[Any] = field(default_factory=list)
    provenance: Provenance = "live"
    report: IngestReport = field(default_factory=IngestReport)

    @property
    def is_demo(self) -> bool:
        return self.provenance == "demo"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "provenance": self.provenance,
            "records": [r.as_dict() for r in self.records],
            "report": self.report.as_dict(),
        }
