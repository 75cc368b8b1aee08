"""
Time-of-day parsing for interview slots.

Recruiters type interview times by hand, so the same column holds
"14:30", "3 PM", "11am" and the placeholder "N/A". Everything here is
tolerant: a value that cannot be read is "no time", never an error.
"""

from __future__ import annotations
import re
from typing import Optional

from recruitdesk.logging import logger

__all__ = ["parse_time", "to_24_hour", "NO_TIME", "UNKNOWN_SLOT"]

#: Placeholder stored by the dashboard when no time was chosen.
NO_TIME = "N/A"

#: Sort key for slots without a usable time (always sorts last).
UNKNOWN_SLOT = "99:99"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(text: str) -> Optional[int]:
    """Integer prefix of `text` (after leading whitespace), or None."""
    m = _LEADING_INT.match(text or "")
    return int(m.group(1)) if m else None


def _meridiem(text: str) -> Optional[str]:
    lower = text.lower()
    if "pm" in lower:
        return "pm"
    if "am" in lower:
        return "am"
    return None


def _twelve_hour(hour: int, meridiem: Optional[str]) -> int:
    if meridiem == "pm" and hour != 12:
        return hour + 12
    if meridiem == "am" and hour == 12:
        return 0
    return hour


def parse_time(text: Optional[str]) -> Optional[int]:
    """
    Convert a textual time-of-day into minutes since midnight.

    - "" / None / "N/A" -> None
    - AM/PM form ("3 PM", "11am", "2:15pm"): hour only, minutes are
      dropped, so "2:15pm" -> 840
    - "HH:MM" 24-hour form: "14:30" -> 870
    - a bare number is read as an hour: "15" -> 900

    Returns None when the hour (or, in HH:MM form, either part) has no
    leading integer.
    """
    if not text:
        return None
    clean = text.strip()
    if not clean or clean == NO_TIME:
        return None

    meridiem = _meridiem(clean)
    if meridiem is None and ":" in clean:
        hours_part, _, rest = clean.partition(":")
        hours = _leading_int(hours_part)
        minutes = _leading_int(rest.split(":", 1)[0])
        if hours is None or minutes is None:
            logger.debug(f"Invalid HH:MM time: {text!r}")
            return None
        return hours * 60 + minutes

    hour = _leading_int(clean)
    if hour is None:
        logger.debug(f"Could not parse time: {text!r}")
        return None
    return _twelve_hour(hour, meridiem) * 60


def to_24_hour(text: Optional[str]) -> str:
    """
    Sortable "HH:MM" key for a slot.

    Values that already contain a colon are only zero-padded ("8:00" ->
    "08:00"); AM/PM values become "HH:00". Missing or unreadable values
    map to UNKNOWN_SLOT.
    """
    if not text or text == NO_TIME:
        return UNKNOWN_SLOT
    if ":" in text:
        return text.rjust(5, "0")

    clean = text.lower().strip()
    hour = _leading_int(clean)
    if hour is None:
        return UNKNOWN_SLOT
    return f"{_twelve_hour(hour, _meridiem(clean)):02d}:00"
