from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from pulse.dates import DateLike, as_date, iso, week_bounds
from pulse.records import DashboardRow


@dataclass(frozen=True)
class PlanningFilters:
    week_start: Optional[str] = None
    zone: Optional[str] = None
    date: Optional[str] = None
    first_weekday: int = 0


def _as_iso_or_none(value: object) -> Optional[str]:
    if value is None or value == "":
        return None
    try:
        return iso(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def normalize_filters(raw: dict, *, first_weekday: int = 0) -> PlanningFilters:
    """Coerce a loose request payload into PlanningFilters; unusable values are dropped."""
    zone = str(raw.get("zone") or "").strip() or None

    weekday = raw.get("first_weekday", first_weekday)
    try:
        weekday = int(weekday)
    except (TypeError, ValueError):
        weekday = first_weekday
    weekday = max(0, min(6, weekday))

    return PlanningFilters(
        week_start=_as_iso_or_none(raw.get("week_start")),
        zone=zone,
        date=_as_iso_or_none(raw.get("date")),
        first_weekday=weekday,
    )


def filter_by_week(rows: Iterable[DashboardRow], week_start: DateLike, *, first_weekday: int = 0) -> List[DashboardRow]:
    """Rows dated inside the week containing ``week_start`` (bounds inclusive).

    Dates compare as ``YYYY-MM-DD`` strings, so undated rows never match.
    """
    start, end = week_bounds(week_start, first_weekday)
    return [r for r in rows if r.date and start <= r.date <= end]


def filter_by_zone(rows: Iterable[DashboardRow], zone: Optional[str]) -> List[DashboardRow]:
    if not zone:
        return list(rows)
    return [r for r in rows if r.zone == zone]


def filter_by_date(rows: Iterable[DashboardRow], day: DateLike) -> List[DashboardRow]:
    day_str = as_date(day).isoformat()
    return [r for r in rows if r.date == day_str]


def apply_filters(rows: Iterable[DashboardRow], filters: PlanningFilters) -> List[DashboardRow]:
    out = list(rows)
    if filters.week_start:
        out = filter_by_week(out, filters.week_start, first_weekday=filters.first_weekday)
    out = filter_by_zone(out, filters.zone)
    if filters.date:
        out = filter_by_date(out, filters.date)
    return out
