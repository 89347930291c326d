from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional

from pulse.csv_lines import clean_value

NAME_DELIMITERS = re.compile(r"[;,\n\r]")
LEADING_BULLETS = re.compile(r"^[-•\s]+")
WHITESPACE_RUN = re.compile(r"\s+")
NULL_TOKENS = {"undefined", "null"}


def clean_identity(token: object) -> Optional[str]:
    """Cosmetic cleanup of one identity token; ``None`` when nothing usable remains.

    Identities are never looked up or rewritten beyond this: a name, a handle
    and an email address all pass through as typed.
    """
    if token is None:
        return None
    s = clean_value(token)
    s = LEADING_BULLETS.sub("", s)
    if s.startswith("@"):
        s = s[1:]
    s = WHITESPACE_RUN.sub(" ", s).strip()
    s = clean_value(s)
    if not s or s in NULL_TOKENS or len(s) <= 1:
        return None
    return s


def split_names(people: object) -> List[str]:
    if not people or not isinstance(people, str):
        return []
    out: List[str] = []
    for token in NAME_DELIMITERS.split(people):
        name = clean_identity(token)
        if name is not None:
            out.append(name)
    return out


def people_stats(rows: Iterable[Any]) -> Dict[str, Any]:
    """Names per zone plus the global unique, sorted name list.

    ``total_people`` counts every listed name, repeats included.
    """
    people_by_zone: Dict[str, List[str]] = {}
    all_names: List[str] = []
    for row in rows:
        names = split_names(row.people)
        people_by_zone[row.zone] = names
        all_names.extend(names)
    return {
        "total_people": len(all_names),
        "people_by_zone": people_by_zone,
        "all_names": sorted(set(all_names)),
    }
