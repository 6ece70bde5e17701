"""Pure parsing of durations, times of day, dates and Jira timestamps.

Every function in this module is a **pure** transformation — no I/O,
no side effects — and returns ``None`` for unparseable input.  The
caller decides how to report invalid input to the end user.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime

import dateparser

from jira_cli.config import SECONDS_PER_UNIT
from jira_cli.core.models import Duration, DurationUnit, TimeOfDay

_DURATION_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)([hmdw])")
_TIME_24H_RE = re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])")
_TIME_12H_RE = re.compile(r"(1[012]|[1-9]):([0-5][0-9]) ?(am|pm)", re.IGNORECASE)

_JIRA_TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

def parse_duration(text: str) -> Duration | None:
    """Parse ``"1.5h"``, ``"45m"``, ``"2d"`` or ``"1w"``.

    The number and the (case-sensitive) unit must be adjacent; anything
    else yields ``None``, as does a value too large to convert to
    seconds.
    """
    match = _DURATION_RE.fullmatch(text)
    if match is None:
        return None
    value = float(match.group(1))
    unit = DurationUnit(match.group(2))
    if not math.isfinite(value * SECONDS_PER_UNIT[unit.value]):
        return None
    return Duration(value=value, unit=unit)


def duration_to_seconds(value: float, unit: DurationUnit | str) -> int:
    """Convert *value* in *unit* to whole seconds.

    Raises ``ValueError`` for an unknown unit; :func:`parse_duration`
    never produces one.
    """
    factor = SECONDS_PER_UNIT[DurationUnit(unit).value]
    return round(value * factor)


# ---------------------------------------------------------------------------
# Times of day
# ---------------------------------------------------------------------------

def parse_time_of_day(text: str) -> TimeOfDay | None:
    """Parse a 24-hour ``H:MM`` or a 12-hour ``H:MM am|pm`` time.

    The 24-hour form is tried first.  ``"13:05 pm"`` matches neither.
    """
    match = _TIME_24H_RE.fullmatch(text)
    if match is not None:
        return TimeOfDay(hour=int(match.group(1)), minute=int(match.group(2)))

    match = _TIME_12H_RE.fullmatch(text)
    if match is None:
        return None
    hour = int(match.group(1)) % 12
    if match.group(3).lower() == "pm":
        hour += 12
    return TimeOfDay(hour=hour, minute=int(match.group(2)))


# ---------------------------------------------------------------------------
# Report dates
# ---------------------------------------------------------------------------

def parse_report_date(text: str | None, *, today: date | None = None) -> date | None:
    """Parse free-text dates such as ``yesterday`` or ``2024-01-15``.

    Empty input means *today*.
    """
    if text is None or not text.strip():
        return today or date.today()
    parsed = dateparser.parse(text, settings={"PREFER_DATES_FROM": "past"})
    if parsed is None:
        return None
    return parsed.date()


# ---------------------------------------------------------------------------
# Jira timestamp codec
# ---------------------------------------------------------------------------

def format_jira_timestamp(moment: datetime) -> str:
    """Render *moment* as ``2024-01-15T09:30:00.000+0100``.

    Naive datetimes are interpreted as local time.
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    millis = moment.microsecond // 1000
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{millis:03d}{moment:%z}"


def parse_jira_timestamp(text: str) -> datetime | None:
    """Parse a Jira ``started`` timestamp into an aware datetime."""
    for fmt in _JIRA_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
