from __future__ import annotations

import re
from typing import Iterable, List, Sequence

QUOTE = '"'
SEPARATORS = (",", ";")

_WRAPPED = re.compile(r'^"(.*)"$', re.DOTALL)


def tokenize_line(line: str, separator: str = ",") -> List[str]:
    """Split one CSV line into raw fields.

    A double quote toggles quoted mode wherever it appears and is not kept.
    Doubled quotes are not an escape. The last field is always emitted, so a
    line with N separators outside quotes yields N + 1 fields.
    """
    if separator not in SEPARATORS:
        raise ValueError(f"Unsupported separator: {separator!r}")
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == separator and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def clean_value(value: object) -> str:
    """Strip wrapping quotes and surrounding whitespace from one field."""
    if value is None:
        return ""
    s = str(value).strip()
    while True:
        match = _WRAPPED.match(s)
        if not match:
            return s
        s = match.group(1).strip()


def split_lines(text: str) -> List[str]:
    # One record per physical line; a quoted cell spanning a line break is not rejoined.
    lines = []
    for raw in (text or "").strip().split("\n"):
        line = raw.rstrip("\r")
        if line.strip():
            lines.append(line)
    return lines


def has_header(first_row: Sequence[str], keywords: Iterable[str]) -> bool:
    if not first_row:
        return False
    first_cell = clean_value(first_row[0]).lower()
    return any(k.lower() in first_cell for k in keywords)
