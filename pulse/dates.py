from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union

# Spreadsheet engines count days from 1899-12-30, which folds in the
# non-existent 1900-02-29 of the Lotus 1-2-3 calendar.
SERIAL_EPOCH = datetime(1899, 12, 30)
ISO_FORMAT = "%Y-%m-%d"

DateLike = Union[date, datetime, str]


def date_from_serial(value: object) -> str:
    """Turn a spreadsheet date serial (``45812``) into ``YYYY-MM-DD``.

    Anything that does not parse as a finite number is returned unchanged, on
    the assumption that it already is a calendar date string.
    """
    text = "" if value is None else str(value)
    try:
        serial = float(text.strip())
    except ValueError:
        return text
    if not math.isfinite(serial):
        return text
    try:
        moment = SERIAL_EPOCH + timedelta(days=serial)
    except OverflowError:
        return text
    return moment.strftime(ISO_FORMAT)


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).strip()[:10], ISO_FORMAT).date()


def iso(value: DateLike) -> str:
    return as_date(value).strftime(ISO_FORMAT)


def today_iso() -> str:
    return date.today().strftime(ISO_FORMAT)


def start_of_week(day: DateLike, first_weekday: int = 0) -> date:
    """First day of the week containing ``day``; ``first_weekday`` 0 is Monday, 6 is Sunday."""
    d = as_date(day)
    offset = (d.weekday() - first_weekday) % 7
    return d - timedelta(days=offset)


def week_bounds(day: DateLike, first_weekday: int = 0) -> Tuple[str, str]:
    start = start_of_week(day, first_weekday)
    end = start + timedelta(days=6)
    return start.strftime(ISO_FORMAT), end.strftime(ISO_FORMAT)


@dataclass(frozen=True)
class DateAcceptancePolicy:
    """Which event dates count as "present now".

    A row is accepted when its date is today or one of the previous
    ``trailing_days`` days, when it equals one of ``extra_dates``, or when it
    falls in one of the ``months`` (``YYYY-MM``).
    """

    trailing_days: int = 1
    extra_dates: Tuple[str, ...] = ()
    months: Tuple[str, ...] = ()

    def window(self, today: Optional[DateLike] = None) -> Tuple[str, ...]:
        anchor = as_date(today) if today is not None else date.today()
        days = max(0, int(self.trailing_days))
        return tuple((anchor - timedelta(days=i)).strftime(ISO_FORMAT) for i in range(days + 1))

    def accepts(self, value: object, today: Optional[DateLike] = None) -> bool:
        day = date_from_serial(value).strip()
        if not day:
            return False
        if day in self.window(today):
            return True
        if day in self.extra_dates:
            return True
        return any(day.startswith(month) for month in self.months)
