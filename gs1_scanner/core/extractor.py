"""
GS1 Scan Field Extractor

Turns a scanner payload into a ParsedScan: GTIN-14/13, expiry, batch/lot,
serial and quantity.

Pipeline (parse_scan):
1. Reject empty or non-text input
2. Strip an ISO/IEC 15424 symbology identifier (]d2, ]C1, ...)
3. Normalize GS separators to a single marker
4. Decode un-bracketed payloads into ``(AI)value`` form
5. Extract fields with anchored patterns
6. Normalize and classify the expiry date

Extraction patterns:
- (01) 14 digits; 12-13 digits are accepted and zero-padded
- (17) exactly 6 digits (YYMMDD)
- (10)/(21) alphanumerics plus ``- / .`` and whitespace, up to the next
  ``(NN)`` marker or the end of input
- (30) any run of digits, default "1"

Nothing here raises on bad input; every failure is reported on the result.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Set, Tuple

from .models import ErrorCode, MatchType, ParsedScan, ParseError
from .raw_decoder import SEPARATOR_MARKER, decode_with_diagnostics
from ..validators.dates import (
    DEFAULT_SOON_THRESHOLD_DAYS,
    ExpiryStatus,
    TodayLike,
    classify_expiry,
    normalize_gs1_date,
)

logger = logging.getLogger(__name__)


@dataclass
class ScanOptions:
    """
    Configuration options for parsing a scan.

    Attributes:
        soon_threshold_days: Days ahead still classified as "soon"
        strip_symbology: Remove a leading symbology identifier
        gs_characters: Strings treated as the GS field separator
    """
    soon_threshold_days: int = DEFAULT_SOON_THRESHOLD_DAYS
    strip_symbology: bool = True
    gs_characters: Set[str] = field(default_factory=lambda: {
        '\x1d',      # ASCII 29 (FNC1 as transmitted by scanners)
        '<GS>',      # Text representation
    })


# Symbology identifier patterns (ISO/IEC 15424)
SYMBOLOGY_PATTERNS = [
    (r'^\]d2', 'GS1 DataMatrix'),
    (r'^\]C1', 'GS1-128'),
    (r'^\]e0', 'GS1 DataBar'),
    (r'^\]e1', 'GS1 DataBar Limited'),
    (r'^\]e2', 'GS1 DataBar Expanded'),
    (r'^\]Q3', 'GS1 QR Code'),
]

SYMBOLOGY_REGEX = [(re.compile(p), name) for p, name in SYMBOLOGY_PATTERNS]

_VARIABLE_VALUE = r'([A-Za-z0-9\-/.\s]+?)(?=\([0-9]{2}\)|\Z)'

AI_PATTERNS = {
    '01': re.compile(r'\(01\)([0-9]{14})'),
    '01short': re.compile(r'\(01\)([0-9]{12,13})'),
    '17': re.compile(r'\(17\)([0-9]{6})'),
    '10': re.compile(r'\(10\)' + _VARIABLE_VALUE),
    '21': re.compile(r'\(21\)' + _VARIABLE_VALUE),
    '30': re.compile(r'\(30\)([0-9]+)'),
}

EMPTY_INPUT_MESSAGE = "Empty or invalid input"
NO_GTIN_MESSAGE = "No valid GTIN found"


def strip_symbology(text: str) -> Tuple[str, Optional[str]]:
    """
    Strip symbology identifier prefix if present.

    Returns:
        (stripped_text, identifier_name or None)
    """
    for pattern, name in SYMBOLOGY_REGEX:
        match = pattern.match(text)
        if match:
            return text[match.end():], name
    return text, None


def normalize_separators(text: str, gs_characters: Set[str]) -> str:
    """Replace every GS representation with the separator marker."""
    # Longest first so '<GS>' is not split by a shorter variant
    for gs in sorted(gs_characters, key=len, reverse=True):
        text = text.replace(gs, SEPARATOR_MARKER)
    return text


def derive_gtins(gtin_digits: str) -> Tuple[str, str]:
    """
    Build (gtin14, gtin13) from the digits captured after AI(01).

    14 digits are used as-is. 12-13 digits are padded to 13, then to 14.
    """
    if len(gtin_digits) == 14:
        gtin13 = gtin_digits[1:] if gtin_digits.startswith('0') else gtin_digits
        return gtin_digits, gtin13
    gtin13 = gtin_digits.zfill(13)
    return gtin13.zfill(14), gtin13


def _invalid(raw: Any, bracketed: str, code: ErrorCode, message: str,
             errors: List[ParseError], skipped: int = 0, **fields) -> ParsedScan:
    errors = errors + [ParseError(code=code, message=message)]
    return ParsedScan(
        raw=raw,
        bracketed=bracketed,
        valid=False,
        match_type=MatchType.INVALID,
        error_message=message,
        errors=tuple(errors),
        skipped_chars=skipped,
        **fields,
    )


def extract_fields(
    bracketed: Any,
    *,
    raw: Any = None,
    today: TodayLike = None,
    options: Optional[ScanOptions] = None,
    skipped_chars: int = 0,
    warnings: Optional[List[ParseError]] = None,
) -> ParsedScan:
    """
    Extract scan fields from a bracketed ``(AI)value`` string.

    Args:
        bracketed: Bracketed GS1 string
        raw: Original payload to record on the result (defaults to bracketed)
        today: Reference day for expiry classification
        options: Scan options
        skipped_chars: Decoder skip count to carry onto the result
        warnings: Warnings collected before extraction

    Returns:
        ParsedScan; match type stays NONE unless the scan is invalid
    """
    options = options or ScanOptions()
    raw = bracketed if raw is None else raw
    errors: List[ParseError] = list(warnings or [])

    if not isinstance(bracketed, str) or not bracketed:
        return _invalid(raw, "", ErrorCode.EMPTY_OR_NON_TEXT_INPUT,
                        EMPTY_INPUT_MESSAGE, errors, skipped_chars)

    gtin14 = gtin13 = ""
    gtin_match = AI_PATTERNS['01'].search(bracketed) or AI_PATTERNS['01short'].search(bracketed)
    if gtin_match:
        gtin14, gtin13 = derive_gtins(gtin_match.group(1))

    expiry_raw = expiry_iso = expiry_display = ""
    expiry_status = ExpiryStatus.MISSING
    expiry_match = AI_PATTERNS['17'].search(bracketed)
    if expiry_match:
        expiry_raw = expiry_match.group(1)
        normalized = normalize_gs1_date(expiry_raw)
        if normalized is None:
            logger.warning("Malformed expiry date %r in %r", expiry_raw, bracketed)
            errors.append(ParseError(
                code=ErrorCode.MALFORMED_DATE,
                message=f"Expiry date {expiry_raw} is not a valid calendar date",
                at_index=expiry_match.start(1),
                ai='17',
            ))
        else:
            expiry_iso = normalized.iso_date
            expiry_display = normalized.display_date
            expiry_status = classify_expiry(
                expiry_iso, today, options.soon_threshold_days
            )

    batch_match = AI_PATTERNS['10'].search(bracketed)
    batch = batch_match.group(1).strip() if batch_match else ""

    serial_match = AI_PATTERNS['21'].search(bracketed)
    serial = serial_match.group(1).strip() if serial_match else ""

    qty_match = AI_PATTERNS['30'].search(bracketed)
    quantity = qty_match.group(1) if qty_match else "1"

    fields = dict(
        expiry_raw=expiry_raw,
        expiry_iso=expiry_iso,
        expiry_display=expiry_display,
        expiry_status=expiry_status,
        batch=batch,
        serial=serial,
        quantity=quantity,
    )

    if not gtin14 and not gtin13:
        logger.debug("No GTIN in %r", bracketed)
        return _invalid(raw, bracketed, ErrorCode.NO_GTIN_FOUND,
                        NO_GTIN_MESSAGE, errors, skipped_chars, **fields)

    return ParsedScan(
        raw=raw,
        bracketed=bracketed,
        valid=True,
        gtin14=gtin14,
        gtin13=gtin13,
        errors=tuple(errors),
        skipped_chars=skipped_chars,
        **fields,
    )


def parse_scan(
    raw: Any,
    *,
    today: TodayLike = None,
    options: Optional[ScanOptions] = None,
) -> ParsedScan:
    """
    Parse a scanner payload in bracketed or un-bracketed form.

    Args:
        raw: Payload as produced by the barcode reader
        today: Reference day for expiry classification (default: local today)
        options: Scan options

    Returns:
        ParsedScan

    Examples:
        >>> scan = parse_scan("(01)06297000001234(17)250630(10)ABC001(21)SN123")
        >>> scan.gtin13, scan.expiry_iso, scan.batch
        ('6297000001234', '2025-06-30', 'ABC001')
    """
    options = options or ScanOptions()

    if not isinstance(raw, str) or not raw.strip():
        return _invalid(raw, "", ErrorCode.EMPTY_OR_NON_TEXT_INPUT,
                        EMPTY_INPUT_MESSAGE, [])

    text = raw.strip()
    if options.strip_symbology:
        text, symbology = strip_symbology(text)
        if symbology:
            logger.debug("Stripped %s symbology identifier", symbology)
    text = normalize_separators(text, options.gs_characters)

    warnings: List[ParseError] = []
    skipped = 0
    if '(' in text:
        # Separators carry no information once AIs are bracketed
        bracketed = text.replace(SEPARATOR_MARKER, '')
    else:
        decoded = decode_with_diagnostics(text)
        bracketed = decoded.bracketed
        skipped = decoded.skipped
        if skipped:
            warnings.append(ParseError(
                code=ErrorCode.UNKNOWN_AI_SKIPPED,
                message=f"Skipped {skipped} character(s) that did not start a known AI",
                at_index=decoded.skipped_positions[0][1],
                count=skipped,
            ))

    return extract_fields(
        bracketed,
        raw=raw,
        today=today,
        options=options,
        skipped_chars=skipped,
        warnings=warnings,
    )
