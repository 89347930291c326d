from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from pulse.dates import DateLike, iso, today_iso
from pulse.filters import filter_by_date
from pulse.names import split_names
from pulse.records import DashboardRow

DASHBOARD_COLUMNS = ["date", "zone", "capacity", "count", "people"]


def rows_to_frame(rows: Iterable[DashboardRow]) -> pd.DataFrame:
    df = pd.DataFrame([r.as_dict() for r in rows], columns=DASHBOARD_COLUMNS)
    for col in ["capacity", "count"]:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0).astype(int)
    return df


def statistics(rows: Iterable[DashboardRow]) -> Dict[str, Any]:
    """Totals over a set of dashboard rows.

    ``unique_users`` deduplicates names across every row, so someone listed in
    two zones on the same day counts once here while adding to both zone
    counts.
    """
    df = rows_to_frame(rows)
    total_capacity = int(df["capacity"].sum()) if not df.empty else 0
    total_count = int(df["count"].sum()) if not df.empty else 0
    zones_list = df["zone"].drop_duplicates().tolist()

    names = df["people"].apply(split_names).explode().dropna()
    return {
        "total_entries": int(len(df)),
        "total_capacity": total_capacity,
        "total_count": total_count,
        "unique_users": int(names.nunique()),
        "zones": len(zones_list),
        "zones_list": zones_list,
        "occupancy_rate": (total_count / total_capacity) * 100 if total_capacity > 0 else 0.0,
    }


def available_dates(rows: Iterable[DashboardRow]) -> List[str]:
    return sorted({r.date for r in rows if r.date})


def today_rows(rows: Iterable[DashboardRow], today: Optional[DateLike] = None) -> List[DashboardRow]:
    return filter_by_date(rows, today if today is not None else today_iso())


def people_for_date_and_zone(rows: Iterable[DashboardRow], day: DateLike, zone: str) -> List[str]:
    day_str = iso(day)
    for r in rows:
        if r.date == day_str and r.zone == zone:
            return split_names(r.people)
    return []


def zones_for_date(rows: Iterable[DashboardRow], day: DateLike) -> Dict[str, Dict[str, Any]]:
    """Per-zone view of one day; a later row for the same zone replaces the earlier one."""
    out: Dict[str, Dict[str, Any]] = {}
    for r in filter_by_date(rows, day):
        out[r.zone] = {
            "zone": r.zone,
            "capacity": r.capacity,
            "count": r.count,
            "people": split_names(r.people),
            "occupancy": r.occupancy,
        }
    return out


def daily_occupancy(rows: Iterable[DashboardRow]) -> pd.DataFrame:
    """Count and capacity summed per date, with occupancy in percent."""
    df = rows_to_frame(rows)
    df = df[df["date"].notna()]
    if df.empty:
        return pd.DataFrame(columns=["date", "capacity", "count", "occupancy"])
    daily = df.groupby("date")[["capacity", "count"]].sum().reset_index().sort_values("date")
    daily["occupancy"] = (daily["count"] / daily["capacity"].where(daily["capacity"] > 0)).fillna(0) * 100
    return daily.reset_index(drop=True)
