from datetime import date

import pytest

from pulse.filters import PlanningFilters, apply_filters, filter_by_date, filter_by_week, filter_by_zone, normalize_filters
from pulse.ingest import parse_dashboard_rows, read_rows
from pulse.layouts import DASHBOARD
from pulse.planning import (
    available_dates,
    daily_occupancy,
    people_for_date_and_zone,
    rows_to_frame,
    statistics,
    today_rows,
    zones_for_date,
)
from pulse.records import DashboardRow


@pytest.fixture
def rows(zones, dashboard_csv):
    raw, _ = read_rows(dashboard_csv, DASHBOARD)
    return parse_dashboard_rows(raw, zones)


def test_filter_by_week_is_inclusive(rows):
    week = filter_by_week(rows, "2025-06-04")
    assert [r.date for r in week] == ["2025-06-02", "2025-06-03", "2025-06-03", "2025-06-04"]
    assert [r.date for r in filter_by_week(rows, date(2025, 6, 9))] == ["2025-06-09"]


def test_filter_by_week_sunday_first(rows):
    week = filter_by_week(rows, "2025-06-09", first_weekday=6)
    assert [r.date for r in week] == ["2025-06-09"]
    week = filter_by_week(rows, "2025-06-07", first_weekday=6)
    assert [r.date for r in week] == ["2025-06-02", "2025-06-03", "2025-06-03", "2025-06-04"]


def test_filter_by_week_skips_undated_rows():
    undated = [DashboardRow(date=None, zone="Z-Tech", capacity=1, count=1, people="Al")]
    assert filter_by_week(undated, "2025-06-04") == []


def test_filter_by_zone(rows):
    assert {r.zone for r in filter_by_zone(rows, "Z-Tech")} == {"Z-Tech"}
    assert len(filter_by_zone(rows, "Z-Tech")) == 3
    assert filter_by_zone(rows, None) == rows
    assert filter_by_zone(rows, "") == rows
    assert filter_by_zone(rows, "tech hub") == []


def test_filter_by_date(rows):
    assert len(filter_by_date(rows, "2025-06-03")) == 2
    assert len(filter_by_date(rows, date(2025, 6, 4))) == 1
    assert filter_by_date(rows, "2025-07-01") == []


def test_statistics_for_week(rows):
    stats = statistics(filter_by_week(rows, "2025-06-02"))
    assert stats["total_entries"] == 4
    assert stats["total_capacity"] == 110
    assert stats["total_count"] == 6
    assert stats["unique_users"] == 4
    assert stats["zones"] == 3
    assert stats["zones_list"] == ["Z-Tech", "Z-RevF", "Z-Tako"]
    assert stats["occupancy_rate"] == pytest.approx(6 / 110 * 100)


def test_unique_users_counts_a_person_once_across_zones(rows):
    day = filter_by_date(rows, "2025-06-03")
    stats = statistics(day)
    assert stats["total_count"] == 3
    assert stats["unique_users"] == 2


def test_statistics_on_empty_input():
    stats = statistics([])
    assert stats == {
        "total_entries": 0,
        "total_capacity": 0,
        "total_count": 0,
        "unique_users": 0,
        "zones": 0,
        "zones_list": [],
        "occupancy_rate": 0.0,
    }


def test_available_dates_sorted_unique(rows):
    assert available_dates(rows) == ["2025-06-02", "2025-06-03", "2025-06-04", "2025-06-09"]


def test_today_rows(rows):
    assert {r.zone for r in today_rows(rows, "2025-06-03")} == {"Z-Tech", "Z-RevF"}


def test_people_for_date_and_zone(rows):
    assert people_for_date_and_zone(rows, "2025-06-03", "Z-RevF") == ["Alice Martin", "Carol Johnson"]
    assert people_for_date_and_zone(rows, "2025-06-03", "Z-Tako") == []


def test_zones_for_date(rows):
    day = zones_for_date(rows, "2025-06-03")
    assert set(day) == {"Z-Tech", "Z-RevF"}
    assert day["Z-RevF"]["people"] == ["Alice Martin", "Carol Johnson"]
    assert day["Z-RevF"]["occupancy"] == pytest.approx(2 / 18 * 100)


def test_daily_occupancy(rows):
    daily = daily_occupancy(rows)
    assert daily["date"].tolist() == ["2025-06-02", "2025-06-03", "2025-06-04", "2025-06-09"]
    assert daily.loc[daily["date"] == "2025-06-03", "count"].item() == 3
    assert daily_occupancy([]).empty


def test_rows_to_frame_columns(rows):
    df = rows_to_frame(rows)
    assert list(df.columns) == ["date", "zone", "capacity", "count", "people"]
    assert len(df) == 5


def test_normalize_filters_drops_unusable_values():
    f = normalize_filters({"week_start": "not a date", "zone": "  ", "date": "2025-06-03", "first_weekday": "x"}, first_weekday=6)
    assert f == PlanningFilters(week_start=None, zone=None, date="2025-06-03", first_weekday=6)
    assert normalize_filters({"first_weekday": 12}).first_weekday == 6


def test_apply_filters(rows):
    f = normalize_filters({"week_start": date(2025, 6, 2), "zone": "Z-Tech"})
    assert [r.date for r in apply_filters(rows, f)] == ["2025-06-02", "2025-06-03"]
    assert apply_filters(rows, PlanningFilters()) == rows
