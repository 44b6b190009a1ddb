"""Parsing of the ``"1-10,12,20-24"`` notation used by template mat lists."""

import re

_ITEM = re.compile(r"^(\d+)(?:\s*-\s*(\d+))?$")

MAX_MAT_NUMBER = 999


def parse_mats(text: str) -> list[int]:
    """Expand a mats list into ascending mat numbers.

    Items are separated by commas; each is either a single mat ``N`` or an
    inclusive range ``N-M``. Mat numbers lie in ``1..MAX_MAT_NUMBER``, ranges
    ascend, and no mat may be listed twice.

    Raises:
        ValueError: if the text is empty or any item is malformed.
    """
    if text is None or not text.strip():
        raise ValueError("Mats list must not be empty")

    mats: set[int] = set()
    for raw in text.split(","):
        item = raw.strip()
        match = _ITEM.match(item)
        if match is None:
            raise ValueError(f"Invalid mats list item '{item}'")
        low = int(match.group(1))
        high = int(match.group(2)) if match.group(2) is not None else low
        if low < 1:
            raise ValueError(f"Mat numbers must be positive, got '{item}'")
        if high < low:
            raise ValueError(f"Mat range '{item}' is descending")
        if high > MAX_MAT_NUMBER:
            raise ValueError(f"Mat numbers must not exceed {MAX_MAT_NUMBER}, got '{item}'")
        span = set(range(low, high + 1))
        overlap = mats & span
        if overlap:
            raise ValueError(f"Mat {min(overlap)} is listed more than once")
        mats |= span

    return sorted(mats)


def format_mats(mats: list[int]) -> str:
    """Collapse mat numbers back into the compact ``"1-3,5"`` notation."""
    parts: list[str] = []
    ordered = sorted(set(mats))
    i = 0
    while i < len(ordered):
        start = ordered[i]
        while i + 1 < len(ordered) and ordered[i + 1] == ordered[i] + 1:
            i += 1
        end = ordered[i]
        parts.append(str(start) if start == end else f"{start}-{end}")
        i += 1
    return ",".join(parts)
