"""
Value coercers for loosely-typed page text.

Every coercer is total: malformed input yields None (logged at WARNING),
never an exception and never NaN. None input yields None silently.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime, timezone
from typing import NamedTuple, Optional, Union

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

_COUNT_RE = re.compile(r"^([\d,]+)(?:\s+[A-Za-z]+)?$")
_MMSS_RE = re.compile(r"^(\d+):(\d+)$")
_MINUTES_RE = re.compile(r"(\d+)\s*(?:minutes?|mins?|m)(?![a-z])", re.IGNORECASE)
_SECONDS_RE = re.compile(r"(\d+)\s*(?:seconds?|secs?|s)(?![a-z])", re.IGNORECASE)
_NUMBER_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")
_LEGACY_DATE_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{1,2}$", re.ASCII)
_DATE_PART_RE = re.compile(r"\d{1,2}", re.ASCII)

# Zone abbreviations the site prints after upload times
_TZINFOS = {
    "UTC": 0,
    "GMT": 0,
    "EST": -5 * 3600,
    "EDT": -4 * 3600,
    "CST": -6 * 3600,
    "CDT": -5 * 3600,
    "MST": -7 * 3600,
    "MDT": -6 * 3600,
    "PST": -8 * 3600,
    "PDT": -7 * 3600,
}


class LegacyDate(NamedTuple):
    """Calendar date parsed from a two-digit-year string."""

    day: int
    month: int
    year: int


def _to_int(digits: str) -> Optional[int]:
    # int() rejects digit strings past the interpreter's conversion limit
    try:
        return int(digits)
    except ValueError:
        return None


def coerce_count(text: Optional[str]) -> Optional[int]:
    """
    Parse a counter such as ``"12,345"`` or ``"1,234 Views"``.

    Thousands separators and one trailing unit word are stripped.

    Returns:
        Non-negative integer, or None if the text is not a count
    """
    if text is None:
        return None
    match = _COUNT_RE.match(text.strip())
    if match:
        digits = match.group(1).replace(",", "")
        value = _to_int(digits) if digits else None
        if value is not None:
            return value
    logger.warning(f"Unparsable count: {text!r}")
    return None


def coerce_duration(text: Optional[str]) -> Optional[int]:
    """
    Parse a duration into seconds.

    Two independent formats are recognised:
    - ``M:SS`` where seconds must be below 60
    - free text with an optional ``<N> min`` token and an optional
      ``<N> sec`` token, summed

    At least one pattern must match or the input is rejected.

    Returns:
        Total seconds, or None if the text is not a duration
    """
    if text is None:
        return None
    text = text.strip()

    mmss = _MMSS_RE.match(text)
    if mmss:
        minutes, seconds = _to_int(mmss.group(1)), _to_int(mmss.group(2))
        if minutes is not None and seconds is not None and seconds < 60:
            return minutes * 60 + seconds
        logger.warning(f"Invalid seconds in M:SS duration: {text!r}")
        return None

    minutes_match = _MINUTES_RE.search(text)
    seconds_match = _SECONDS_RE.search(text)
    if not minutes_match and not seconds_match:
        logger.warning(f"Unparsable duration: {text!r}")
        return None

    minutes = _to_int(minutes_match.group(1)) if minutes_match else 0
    seconds = _to_int(seconds_match.group(1)) if seconds_match else 0
    if minutes is None or seconds is None:
        logger.warning(f"Duration out of range: {text!r}")
        return None
    return minutes * 60 + seconds


def coerce_score(text: Optional[str]) -> Optional[float]:
    """
    Parse a score such as ``"4.5"`` or ``"4.5 / 5.0"``.

    When the text contains a slash only the numerator is used.
    """
    if text is None:
        return None
    candidate = text.split("/", 1)[0].strip()
    if _NUMBER_RE.match(candidate):
        value = float(candidate)
        if math.isfinite(value):
            return value
    logger.warning(f"Unparsable score: {text!r}")
    return None


def coerce_legacy_date(text: Optional[str], fmt: str = "MM/DD/YY") -> Optional[LegacyDate]:
    """
    Parse a two-digit-year date.

    Years 00-69 are taken as 20YY and 70-99 as 19YY. The result must be a
    real calendar date: ``02/30/23`` is rejected rather than rolled over.

    Args:
        text: Date string, e.g. ``"11/21/22"``
        fmt: Component order using the tokens MM, DD and YY separated by ``/``

    Returns:
        LegacyDate, or None if the text is malformed or not a calendar date
    """
    if text is None:
        return None

    order = [token.strip().upper() for token in fmt.split("/")]
    if sorted(order) != ["DD", "MM", "YY"]:
        raise ValueError(f"Unsupported legacy date format: {fmt!r}")

    parts = [part.strip() for part in text.strip().split("/")]
    if len(parts) != 3 or not all(_DATE_PART_RE.fullmatch(part) for part in parts):
        logger.warning(f"Invalid legacy date {text!r}, expected {fmt}")
        return None

    components = dict(zip(order, parts))
    month = int(components["MM"])
    day = int(components["DD"])
    short_year = int(components["YY"])
    year = 2000 + short_year if short_year <= 69 else 1900 + short_year

    try:
        validated = date(year, month, day)
    except ValueError:
        logger.warning(f"Invalid legacy date {text!r}: day or month out of range")
        return None

    return LegacyDate(day=validated.day, month=validated.month, year=validated.year)


def coerce_timestamp(tokens: Union[str, list[str], None]) -> Optional[str]:
    """
    Join free-text date/time tokens and parse them into an ISO-8601 string.

    A leading two-digit-year ``MM/DD/YY`` token is resolved with
    :func:`coerce_legacy_date`. Naive times are taken as UTC.

    Args:
        tokens: A single string or the ordered tokens collected for a field

    Returns:
        ``YYYY-MM-DDTHH:MM:SS.mmmZ``, or None if the text is not a timestamp
    """
    if tokens is None:
        return None
    text = tokens if isinstance(tokens, str) else " ".join(tokens)
    text = " ".join(text.split())
    if not text:
        return None

    default = datetime(2000, 1, 1)
    first, _, rest = text.partition(" ")
    if _LEGACY_DATE_RE.match(first):
        legacy = coerce_legacy_date(first)
        if legacy is None:
            return None
        default = datetime(legacy.year, legacy.month, legacy.day)
        text = rest

    try:
        parsed = dateutil_parser.parse(text, default=default, tzinfos=_TZINFOS) if text else default
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        parsed = parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Unparsable timestamp {text!r}: {e}")
        return None

    return parsed.isoformat(timespec="milliseconds").replace("+00:00", "Z")


__all__ = [
    "LegacyDate",
    "coerce_count",
    "coerce_duration",
    "coerce_legacy_date",
    "coerce_score",
    "coerce_timestamp",
]
