"""
Validation and normalization helpers for GS1 field values.
"""

from .dates import (
    DEFAULT_SOON_THRESHOLD_DAYS,
    ExpiryStatus,
    NormalizedDate,
    classify_expiry,
    coerce_today,
    days_in_month,
    days_until,
    is_leap_year,
    normalize_gs1_date,
)

__all__ = [
    "DEFAULT_SOON_THRESHOLD_DAYS",
    "ExpiryStatus",
    "NormalizedDate",
    "classify_expiry",
    "coerce_today",
    "days_in_month",
    "days_until",
    "is_leap_year",
    "normalize_gs1_date",
]
