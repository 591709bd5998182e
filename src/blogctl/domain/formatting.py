"""Display formatting for record fields.

Date tokens follow the moment.js names the site templates were written
against (``DD MMMM, YYYY``), relative ages follow moment's ``fromNow``
thresholds, and byte sizes follow pretty-bytes (SI units, three
significant digits).
"""

from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WEEKDAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

BYTE_UNITS: tuple[str, ...] = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")

# Longest tokens first so "MMMM" wins over "MM".
_DATE_TOKEN_RE = re.compile(r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|Do|DD|D|dddd|ddd")

WORDS_PER_MINUTE = 265


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def _ordinal(day: int) -> str:
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_date(value: date, fmt: str = "DD MMMM, YYYY") -> str:
    """Format *value* using moment-style tokens.

    Supported tokens: ``YYYY YY MMMM MMM MM M Do DD D dddd ddd``.
    Text inside ``[brackets]`` is emitted literally.
    """

    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith("["):
            return token[1:-1]
        match token:
            case "YYYY":
                return f"{value.year:04d}"
            case "YY":
                return f"{value.year % 100:02d}"
            case "MMMM":
                return MONTH_NAMES[value.month - 1]
            case "MMM":
                return MONTH_NAMES[value.month - 1][:3]
            case "MM":
                return f"{value.month:02d}"
            case "M":
                return str(value.month)
            case "Do":
                return _ordinal(value.day)
            case "DD":
                return f"{value.day:02d}"
            case "D":
                return str(value.day)
            case "dddd":
                return WEEKDAY_NAMES[value.weekday()]
            case "ddd":
                return WEEKDAY_NAMES[value.weekday()][:3]
        return token

    return _DATE_TOKEN_RE.sub(replace, fmt)


def _as_aware(value: date) -> datetime:
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def from_now(value: date, now: datetime | None = None) -> str:
    """Return a humanized relative age such as ``"3 days ago"``.

    Future instants read ``"in 3 days"``.
    """
    then = _as_aware(value)
    current = _as_aware(now) if now is not None else datetime.now(UTC)
    delta = (current - then).total_seconds()
    phrase = _humanize_seconds(abs(delta))
    return f"{phrase} ago" if delta >= 0 else f"in {phrase}"


def _humanize_seconds(seconds: float) -> str:
    minutes = round(seconds / 60)
    hours = round(seconds / 3600)
    days = round(seconds / 86400)
    months = round(seconds / (86400 * 30.4375))
    years = round(seconds / (86400 * 365.25))

    if seconds < 45:
        return "a few seconds"
    if seconds < 90:
        return "a minute"
    if minutes < 45:
        return f"{minutes} minutes"
    if minutes < 90:
        return "an hour"
    if hours < 22:
        return f"{hours} hours"
    if hours < 36:
        return "a day"
    if days < 26:
        return f"{days} days"
    if days < 45:
        return "a month"
    if days < 320:
        return f"{max(months, 2)} months"
    if days < 548:
        return "a year"
    return f"{max(years, 2)} years"


# ---------------------------------------------------------------------------
# Sizes and reading time
# ---------------------------------------------------------------------------


def pretty_bytes(size: int) -> str:
    """Render *size* bytes like ``1.34 kB`` (SI units, 3 significant digits)."""
    if size < 0:
        return f"-{pretty_bytes(-size)}"
    if size < 1:
        return f"{size} B"
    exponent = min(int(math.log10(size) // 3), len(BYTE_UNITS) - 1)
    value = float(f"{size / 1000**exponent:.3g}")
    return f"{value:g} {BYTE_UNITS[exponent]}"


def count_words(text: str) -> int:
    return len(text.split())


def time_to_read(word_count: int) -> int:
    """Whole minutes needed to read *word_count* words, never less than one."""
    return max(1, round(word_count / WORDS_PER_MINUTE))
