"""
Value objects shared by the scan decoder and the product matcher.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..validators.dates import ExpiryStatus


class ErrorCode(str, Enum):
    """Error and warning codes."""
    EMPTY_OR_NON_TEXT_INPUT = "EMPTY_OR_NON_TEXT_INPUT"
    NO_GTIN_FOUND = "NO_GTIN_FOUND"
    MALFORMED_DATE = "MALFORMED_DATE"
    NO_CATALOG_LOADED = "NO_CATALOG_LOADED"
    UNKNOWN_AI_SKIPPED = "UNKNOWN_AI_SKIPPED"


class MatchType(str, Enum):
    """How a scan was resolved against the master catalog."""
    EXACT = "EXACT"
    LAST8 = "LAST8"
    SEQ6 = "SEQ6"
    AMBIGUOUS_LAST8 = "AMBIGUOUS-LAST8"
    AMBIGUOUS_SEQ6 = "AMBIGUOUS-SEQ6"
    NONE = "NONE"
    INVALID = "INVALID"

    @property
    def carries_name(self) -> bool:
        return self in (MatchType.EXACT, MatchType.LAST8, MatchType.SEQ6)


@dataclass(frozen=True)
class ParseError:
    """Represents a parsing error or warning."""
    code: ErrorCode
    message: str
    at_index: Optional[int] = None
    ai: Optional[str] = None
    count: Optional[int] = None


@dataclass(frozen=True)
class ParsedScan:
    """
    Fields decoded from one barcode payload.

    Attributes:
        raw: Original input as received
        bracketed: Bracketed string the fields were extracted from
        valid: False when no GTIN could be found
        gtin14: 14-digit GTIN, or "" when invalid
        gtin13: GTIN14 without its leading zero (or GTIN14 if it has none)
        expiry_raw: The 6 digits following AI(17), if any
        expiry_iso: YYYY-MM-DD, or "" when absent or malformed
        expiry_display: DD/MM/YYYY, or ""
        expiry_status: Expiry bucket relative to the scan day
        batch: AI(10) value
        serial: AI(21) value
        quantity: AI(30) value, "1" when absent
        match_type: INVALID for invalid scans, NONE until matched
        error_message: Human-readable reason the scan is invalid
        errors: Errors and warnings raised while parsing
        skipped_chars: Characters dropped by the raw decoder
    """
    raw: Any
    bracketed: str = ""
    valid: bool = True
    gtin14: str = ""
    gtin13: str = ""
    expiry_raw: str = ""
    expiry_iso: str = ""
    expiry_display: str = ""
    expiry_status: ExpiryStatus = ExpiryStatus.MISSING
    batch: str = ""
    serial: str = ""
    quantity: str = "1"
    match_type: MatchType = MatchType.NONE
    error_message: str = ""
    errors: Tuple[ParseError, ...] = field(default_factory=tuple)
    skipped_chars: int = 0

    @property
    def has_expiry(self) -> bool:
        return bool(self.expiry_iso)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = asdict(self)
        data["expiry_status"] = self.expiry_status.value
        data["match_type"] = self.match_type.value
        data["errors"] = [
            {
                "code": e.code.value,
                "message": e.message,
                "at_index": e.at_index,
                "ai": e.ai,
                "count": e.count,
            }
            for e in self.errors
        ]
        return data
