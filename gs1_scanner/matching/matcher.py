"""
Product Matcher

Resolves a parsed scan to a catalog product name. Tiers are tried in
order and the first one that reaches a decision wins:

1. EXACT  - GTIN-14 is a catalog key
2. EXACT  - GTIN-13 is a catalog key
3. LAST8  - exactly one catalog product shares the last 8 digits;
            several products -> AMBIGUOUS-LAST8 (no further tiers)
4. SEQ6   - exactly one catalog GTIN contains one of the 6-digit windows
            of the scan's last 10 digits; several -> AMBIGUOUS-SEQ6

Ambiguity is reported, never guessed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.models import ErrorCode, MatchType, ParsedScan
from .index import MasterIndex, SUFFIX_LENGTH

logger = logging.getLogger(__name__)

WINDOW_SOURCE_LENGTH = 10
WINDOW_LENGTH = 6


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of matching a scan against the catalog.

    Attributes:
        name: Product name; empty unless EXACT, LAST8 or SEQ6
        match_type: Deciding tier
        candidates: Distinct catalog products seen by the deciding tier
        reason: Error code when no catalog lookup was attempted
    """
    name: str
    match_type: MatchType
    candidates: int = 0
    reason: Optional[ErrorCode] = None


def seq6_windows(gtin14: str) -> List[str]:
    """The 6-digit windows of the last 10 digits, left to right."""
    tail = gtin14[-WINDOW_SOURCE_LENGTH:]
    return [tail[i:i + WINDOW_LENGTH] for i in range(len(tail) - WINDOW_LENGTH + 1)]


def _match_last8(gtin14: str, index: MasterIndex) -> Optional[MatchResult]:
    entries = index.lookup_last8(gtin14[-SUFFIX_LENGTH:])
    if not entries:
        return None

    distinct = list(dict.fromkeys(entries))
    if len(distinct) == 1:
        return MatchResult(name=distinct[0][1], match_type=MatchType.LAST8, candidates=1)
    logger.debug("Suffix %s is shared by %d catalog rows", gtin14[-SUFFIX_LENGTH:], len(distinct))
    return MatchResult(name="", match_type=MatchType.AMBIGUOUS_LAST8, candidates=len(distinct))


def _match_seq6(gtin14: str, index: MasterIndex) -> MatchResult:
    found: Dict[str, str] = {}
    windows = seq6_windows(gtin14)
    for window in windows:
        for gtin, name in index.canonical_entries():
            if window in gtin and gtin not in found:
                found[gtin] = name

    if not found:
        return MatchResult(name="", match_type=MatchType.NONE)
    if len(found) == 1:
        (name,) = found.values()
        return MatchResult(name=name, match_type=MatchType.SEQ6, candidates=1)
    return MatchResult(name="", match_type=MatchType.AMBIGUOUS_SEQ6, candidates=len(found))


def match_product(scan: ParsedScan, index: Optional[MasterIndex]) -> MatchResult:
    """
    Match a parsed scan against a catalog index.

    Args:
        scan: Result of parse_scan / extract_fields
        index: Catalog snapshot; None or empty means no catalog is loaded

    Returns:
        MatchResult
    """
    if not scan.valid:
        return MatchResult(name="", match_type=MatchType.INVALID)

    if index is None or index.is_empty:
        return MatchResult(name="", match_type=MatchType.NONE, reason=ErrorCode.NO_CATALOG_LOADED)

    for key in (scan.gtin14, scan.gtin13):
        name = index.lookup_exact(key)
        if name is not None:
            return MatchResult(name=name, match_type=MatchType.EXACT, candidates=1)

    result = _match_last8(scan.gtin14, index)
    if result is None:
        result = _match_seq6(scan.gtin14, index)

    logger.debug("Matched %s -> %s (%d candidates)", scan.gtin14, result.match_type.value, result.candidates)
    return result