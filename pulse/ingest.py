from __future__ import annotations

import logging
import math
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple, Union

from pulse.csv_lines import clean_value, has_header, split_lines, tokenize_line
from pulse.dates import DateAcceptancePolicy, DateLike, as_date, date_from_serial
from pulse.demo import demo_dashboard_rows, demo_presence_records, demo_pulse_rows
from pulse.layouts import DASHBOARD, EMPLOYEES, EVENT_LOG, PULSE, ColumnLayout
from pulse.names import clean_identity, split_names
from pulse.records import DashboardRow, Employee, IngestReport, PresenceSnapshot, ZonePresenceRecord
from pulse.zones import ZoneConfig

logger = logging.getLogger(__name__)

Payload = Union[str, Sequence[Sequence[object]]]
RawRow = List[str]


class EmptyPayloadError(ValueError):
    """The payload has no line at all, so there is nothing to ingest."""


def read_rows(payload: Payload, layout: ColumnLayout, *, separator: str = ",") -> Tuple[List[RawRow], bool]:
    """Tokenize CSV text (or take a 2D array as is) and drop a detected header row.

    Returns the data rows and whether a header was detected.
    """
    if payload is None:
        raise EmptyPayloadError("No payload to ingest")
    if isinstance(payload, str):
        rows = [tokenize_line(line, separator) for line in split_lines(payload)]
    else:
        rows = [["" if cell is None else str(cell) for cell in row] for row in payload if row is not None]
    if not rows:
        raise EmptyPayloadError(f"No rows found in {layout.name} payload")

    header = has_header(rows[0], layout.header_keywords)
    if header:
        rows = rows[1:]
    return rows, header


def _cell(row: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(row):
        return ""
    return clean_value(row[index])


def _parse_count(value: str) -> Optional[int]:
    """Whole non-negative number from a sheet cell; ``None`` for a blank cell."""
    if value == "":
        return None
    number = float(value)
    if not math.isfinite(number) or number < 0:
        raise ValueError(f"not a non-negative number: {value!r}")
    return int(number)


def aggregate_presence(
    rows: Sequence[Sequence[str]],
    zones: ZoneConfig,
    *,
    policy: Optional[DateAcceptancePolicy] = None,
    today: Optional[DateLike] = None,
    layout: ColumnLayout = EVENT_LOG,
    report: Optional[IngestReport] = None,
) -> List[ZonePresenceRecord]:
    """Collapse check-in events into one presence record per zone.

    Each person is counted once per zone however many rows they have. Bad rows
    are skipped one by one and counted in ``report``.
    """
    policy = policy or DateAcceptancePolicy()
    anchor = as_date(today) if today is not None else date.today()
    report = report if report is not None else IngestReport(layout=layout.name)

    members: Dict[str, Dict[str, None]] = {}
    for idx, row in enumerate(rows, start=1):
        report.rows_seen += 1
        if len(row) < layout.min_columns:
            report.skipped_malformed += 1
            logger.warning("Skipping %s row %d: expected at least %d columns, got %d", layout.name, idx, layout.min_columns, len(row))
            continue

        raw_identity = _cell(row, layout.identity)
        raw_date = _cell(row, layout.date)
        zone = zones.normalize(_cell(row, layout.zone))
        identity = clean_identity(raw_identity)
        if not identity or not zone:
            report.skipped_blank += 1
            logger.debug("Skipping %s row %d: blank identity or zone", layout.name, idx)
            continue

        if not policy.accepts(raw_date, anchor):
            report.skipped_out_of_window += 1
            continue

        members.setdefault(zone, {})[identity] = None
        report.rows_accepted += 1

    return [ZonePresenceRecord.from_people(zone, zones.capacity(zone), people) for zone, people in members.items()]


def parse_dashboard_rows(
    rows: Sequence[Sequence[str]],
    zones: ZoneConfig,
    *,
    layout: ColumnLayout = DASHBOARD,
    report: Optional[IngestReport] = None,
) -> List[DashboardRow]:
    """Read pre-aggregated rows (``dashboard`` or ``pulse`` layout).

    A blank capacity falls back to the zone table and a blank count to the
    number of listed people. Non-numeric counts make the row malformed.
    """
    report = report if report is not None else IngestReport(layout=layout.name)
    out: List[DashboardRow] = []
    for idx, row in enumerate(rows, start=1):
        report.rows_seen += 1
        if len(row) < layout.min_columns:
            report.skipped_malformed += 1
            logger.warning("Skipping %s row %d: expected at least %d columns, got %d", layout.name, idx, layout.min_columns, len(row))
            continue

        zone = zones.normalize(_cell(row, layout.zone))
        if not zone:
            report.skipped_blank += 1
            logger.debug("Skipping %s row %d: blank zone", layout.name, idx)
            continue

        people = _cell(row, layout.people)
        try:
            capacity = _parse_count(_cell(row, layout.capacity))
            count = _parse_count(_cell(row, layout.count))
        except ValueError as exc:
            report.skipped_malformed += 1
            logger.warning("Skipping %s row %d: %s", layout.name, idx, exc)
            continue

        day = date_from_serial(_cell(row, layout.date)) if layout.date is not None else None
        out.append(
            DashboardRow(
                date=day,
                zone=zone,
                capacity=zones.capacity(zone) if capacity is None else capacity,
                count=len(split_names(people)) if count is None else count,
                people=people,
            )
        )
        report.rows_accepted += 1
    return out


def parse_employees(payload: Payload, *, separator: str = ",") -> List[Employee]:
    try:
        rows, _ = read_rows(payload, EMPLOYEES, separator=separator)
    except EmptyPayloadError:
        return []
    employees: List[Employee] = []
    for idx, row in enumerate(rows, start=1):
        if len(row) < EMPLOYEES.min_columns:
            logger.warning("Skipping employees row %d: expected at least %d columns, got %d", idx, EMPLOYEES.min_columns, len(row))
            continue
        employees.append(Employee(*[clean_value(v) for v in row[: EMPLOYEES.min_columns]]))
    return employees


def _demo_records(layout: ColumnLayout, today: Optional[DateLike]) -> list:
    if layout.is_event_log:
        return demo_presence_records()
    if layout.name == PULSE.name:
        return demo_pulse_rows()
    return demo_dashboard_rows(today)


def load_presence(
    payload: Payload,
    *,
    layout: ColumnLayout = EVENT_LOG,
    zones: Optional[ZoneConfig] = None,
    policy: Optional[DateAcceptancePolicy] = None,
    today: Optional[DateLike] = None,
    separator: str = ",",
    demo_fallback: bool = False,
) -> PresenceSnapshot:
    """Run one full ingestion pass over a payload.

    Event-log layouts yield ``ZonePresenceRecord``s, the others
    ``DashboardRow``s. With ``demo_fallback`` an empty result is replaced by the
    demo dataset and the snapshot is tagged ``provenance="demo"``.
    """
    zones = zones or ZoneConfig()
    rows, header = read_rows(payload, layout, separator=separator)
    report = IngestReport(layout=layout.name, header_detected=header)

    if layout.is_event_log:
        records: list = aggregate_presence(rows, zones, policy=policy, today=today, layout=layout, report=report)
    else:
        records = parse_dashboard_rows(rows, zones, layout=layout, report=report)

    logger.info(
        "Ingested %s payload: %d rows, %d accepted, %d records",
        layout.name,
        report.rows_seen,
        report.rows_accepted,
        len(records),
    )
    if not records and demo_fallback:
        logger.warning("No usable %s rows; serving demo data", layout.name)
        return PresenceSnapshot(records=_demo_records(layout, today), provenance="demo", report=report)
    return PresenceSnapshot(records=records, provenance="live", report=report)
