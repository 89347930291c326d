from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from pulse.dates import DateAcceptancePolicy
from pulse.zones import DEFAULT_CAPACITY, ZoneConfig, load_zone_config

ENV_PREFIX = "PULSE_"


@dataclass(frozen=True)
class Settings:
    sheet_id: str = ""
    separator: str = ","
    trailing_days: int = 1
    extra_dates: Tuple[str, ...] = ()
    months: Tuple[str, ...] = ()
    first_weekday: int = 0
    demo_fallback: bool = True
    default_capacity: int = DEFAULT_CAPACITY
    zone_aliases_path: Optional[str] = None
    zone_capacities_path: Optional[str] = None

    def date_policy(self) -> DateAcceptancePolicy:
        return DateAcceptancePolicy(trailing_days=self.trailing_days, extra_dates=self.extra_dates, months=self.months)

    def zone_config(self) -> ZoneConfig:
        return load_zone_config(self.zone_aliases_path, self.zone_capacities_path, default_capacity=self.default_capacity)


def _as_int(value: object, default: int, *, lo: int, hi: int) -> int:
    try:
        out = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return max(lo, min(hi, out))


def _as_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    s = str(value).strip().lower()
    if s in {"1", "true", "yes", "on"}:
        return True
    if s in {"0", "false", "no", "off"}:
        return False
    return default


def _as_tuple(value: object) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(p.strip() for p in str(value).split(",") if p.strip())


def normalize_settings(raw: Mapping[str, object]) -> Settings:
    """Build Settings from ``PULSE_*`` keys; bad values fall back to defaults."""

    def get(key: str) -> object:
        return raw.get(ENV_PREFIX + key)

    separator = str(get("SEPARATOR") or ",").strip()
    if separator not in {",", ";"}:
        separator = ","

    return Settings(
        sheet_id=str(get("SHEET_ID") or "").strip(),
        separator=separator,
        trailing_days=_as_int(get("TRAILING_DAYS"), 1, lo=0, hi=31),
        extra_dates=_as_tuple(get("EXTRA_DATES")),
        months=_as_tuple(get("MONTHS")),
        first_weekday=_as_int(get("FIRST_WEEKDAY"), 0, lo=0, hi=6),
        demo_fallback=_as_bool(get("DEMO_FALLBACK"), True),
        default_capacity=_as_int(get("DEFAULT_CAPACITY"), DEFAULT_CAPACITY, lo=0, hi=10_000),
        zone_aliases_path=str(get("ZONE_ALIASES") or "").strip() or None,
        zone_capacities_path=str(get("ZONE_CAPACITIES") or "").strip() or None,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # A .env in the working directory fills in PULSE_* keys; real env vars win.
    load_dotenv(find_dotenv(usecwd=True))
    return normalize_settings(os.environ)


@lru_cache(maxsize=1)
def get_zone_config() -> ZoneConfig:
    """Zone tables for the current settings, built once per process."""
    return get_settings().zone_config()
