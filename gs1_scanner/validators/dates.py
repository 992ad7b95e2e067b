"""
GS1 date normalization and expiry classification.

YYMMDD values are read as 20YY. A day of ``00`` means "end of month" and
resolves to the last calendar day of that month. Month lengths come from a
local table so the result never depends on a platform date library.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

DEFAULT_SOON_THRESHOLD_DAYS = 30

_YYMMDD = re.compile(r"[0-9]{6}")

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class ExpiryStatus(str, Enum):
    """Expiry bucket relative to today."""
    MISSING = "missing"
    EXPIRED = "expired"
    SOON = "soon"
    OK = "ok"


@dataclass(frozen=True)
class NormalizedDate:
    """A successfully normalized GS1 date."""
    iso_date: str       # YYYY-MM-DD
    display_date: str   # DD/MM/YYYY
    date: date
    day_unspecified: bool = False


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-12) of ``year``."""
    if month < 1 or month > 12:
        raise ValueError(f"Invalid month: {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def normalize_gs1_date(value: str) -> Optional[NormalizedDate]:
    """
    Normalize a 6-digit YYMMDD value.

    Args:
        value: Date string as carried by AI(17)

    Returns:
        NormalizedDate, or None when the value is not a calendar date

    Examples:
        >>> normalize_gs1_date("250630").iso_date
        '2025-06-30'
        >>> normalize_gs1_date("250200").iso_date
        '2025-02-28'
        >>> normalize_gs1_date("250231") is None
        True
    """
    if not isinstance(value, str) or not _YYMMDD.fullmatch(value):
        return None

    year = 2000 + int(value[0:2])
    month = int(value[2:4])
    day = int(value[4:6])

    if month < 1 or month > 12:
        logger.debug("Rejecting date %r: invalid month %d", value, month)
        return None

    last_day = days_in_month(year, month)
    day_unspecified = day == 0
    if day_unspecified:
        day = last_day

    if day < 1 or day > last_day:
        logger.debug("Rejecting date %r: day %d invalid for %04d-%02d", value, day, year, month)
        return None

    return NormalizedDate(
        iso_date=f"{year:04d}-{month:02d}-{day:02d}",
        display_date=f"{day:02d}/{month:02d}/{year:04d}",
        date=date(year, month, day),
        day_unspecified=day_unspecified,
    )


TodayLike = Union[date, datetime, str, None]


def coerce_today(today: TodayLike = None) -> date:
    """
    Resolve the reference day used for classification.

    Accepts a date, a datetime (its calendar day is used) or a string such
    as ``2025-06-01``. None means the local current date.
    """
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    if isinstance(today, date):
        return today
    if isinstance(today, str):
        return date_parser.parse(today).date()
    raise TypeError(f"Unsupported value for today: {today!r}")


def days_until(iso_date: str, today: TodayLike = None) -> int:
    """Whole days from today's midnight to the expiry date, rounded up."""
    expiry = date.fromisoformat(iso_date)
    start = datetime.combine(coerce_today(today), datetime.min.time())
    end = datetime.combine(expiry, datetime.min.time())
    return math.ceil((end - start).total_seconds() / 86400)


def classify_expiry(
    iso_date: Optional[str],
    today: TodayLike = None,
    soon_threshold_days: int = DEFAULT_SOON_THRESHOLD_DAYS,
) -> ExpiryStatus:
    """
    Classify an expiry date.

    Returns:
        MISSING for an empty date, EXPIRED when it is in the past, SOON when
        it falls within ``soon_threshold_days`` (inclusive), OK otherwise.
    """
    if not iso_date:
        return ExpiryStatus.MISSING

    remaining = days_until(iso_date, today)
    if remaining < 0:
        return ExpiryStatus.EXPIRED
    if remaining <= soon_threshold_days:
        return ExpiryStatus.SOON
    return ExpiryStatus.OK
