from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import pandas as pd

DEFAULT_CAPACITY = 10

ZONE_ALIASES: Dict[str, str] = {
    "Jeremy's office": "Z-JerO",
    "Jeremy's Office": "Z-JerO",
    "Jeremy’s office": "Z-JerO",
    "Tako": "Z-Tako",
    "Tako Room": "Z-Tako",
    "Revenue Flex": "Z-RevF",
    "Tech Hub": "Z-Tech",
}

ZONE_CAPACITIES: Dict[str, int] = {
    "Z-JerO": 4,
    "Z-Tako": 8,
    "Z-RevF": 18,
    "Z-Tech": 42,
}


@dataclass(frozen=True)
class ZoneConfig:
    """Alias and capacity tables for the office zones.

    Build one per process (or per test) and pass it to the ingest functions;
    nothing in the package keeps a module-level instance.
    """

    aliases: Mapping[str, str] = field(default_factory=lambda: dict(ZONE_ALIASES))
    capacities: Mapping[str, int] = field(default_factory=lambda: dict(ZONE_CAPACITIES))
    default_capacity: int = DEFAULT_CAPACITY

    def _folded(self) -> Dict[str, str]:
        folded = {code.casefold(): code for code in self.capacities}
        folded.update({code.casefold(): code for code in self.aliases.values()})
        folded.update({alias.casefold(): code for alias, code in self.aliases.items()})
        return folded

    def normalize(self, label: object) -> str:
        if label is None:
            return ""
        s = str(label).strip()
        if not s:
            return ""
        if s in self.aliases:
            return self.aliases[s]
        return self._folded().get(s.casefold(), s)

    def capacity(self, code: str) -> int:
        value = self.capacities.get(code)
        if value is None:
            return self.default_capacity
        return int(value)

    def zone_codes(self) -> List[str]:
        codes = list(self.capacities)
        for code in self.aliases.values():
            if code not in codes:
                codes.append(code)
        return codes


def _read_mapping_csv(path: Path, rename_map: Dict[str, str]) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, encoding="utf-8-sig")
    df.columns = [str(c).strip().lower() for c in df.columns]
    df = df.rename(columns=rename_map)
    for col in df.columns:
        df[col] = df[col].astype("string").str.strip()
    return df


def load_zone_config(
    aliases_path: Optional[Union[str, Path]] = None,
    capacities_path: Optional[Union[str, Path]] = None,
    *,
    default_capacity: int = DEFAULT_CAPACITY,
) -> ZoneConfig:
    """Build a ZoneConfig from the built-in tables plus optional CSV overrides.

    Alias files need ``alias`` and ``zone`` columns, capacity files ``zone`` and
    ``capacity``. Missing files or unusable columns leave the built-in table in
    place.
    """
    aliases: Dict[str, str] = dict(ZONE_ALIASES)
    capacities: Dict[str, int] = dict(ZONE_CAPACITIES)

    if aliases_path and Path(aliases_path).exists():
        df = _read_mapping_csv(
            Path(aliases_path),
            {"label": "alias", "zone label": "alias", "name": "alias", "code": "zone", "canonical": "zone", "zone_code": "zone"},
        )
        if {"alias", "zone"}.issubset(df.columns):
            df = df.dropna(subset=["alias", "zone"])
            df = df[(df["alias"] != "") & (df["zone"] != "")]
            aliases.update(dict(zip(df["alias"].tolist(), df["zone"].tolist())))

    if capacities_path and Path(capacities_path).exists():
        df = _read_mapping_csv(
            Path(capacities_path),
            {"code": "zone", "zone_code": "zone", "seats": "capacity", "places": "capacity"},
        )
        if {"zone", "capacity"}.issubset(df.columns):
            df["capacity"] = pd.to_numeric(df["capacity"], errors="coerce")
            df = df.dropna(subset=["zone", "capacity"])
            df = df[df["capacity"] >= 0]
            capacities.update({str(z): int(c) for z, c in zip(df["zone"], df["capacity"])})

    return ZoneConfig(aliases=aliases, capacities=capacities, default_capacity=default_capacity)
