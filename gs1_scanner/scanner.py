"""
Scan processing: parse a payload, match it, and build the output record
handed to history and export collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .core.extractor import ScanOptions, parse_scan
from .core.models import MatchType, ParsedScan
from .matching.index import MasterIndex
from .matching.matcher import MatchResult, match_product
from .validators.dates import TodayLike


@dataclass(frozen=True)
class ScanRecord:
    """One processed scan."""
    raw_input: str
    gtin14: str
    gtin13: str
    expiry_iso: str
    expiry_display: str
    expiry_status: str
    batch: str
    serial: str
    quantity: str
    product_name: str
    match_type: str
    error_message: str = ""
    scan_time: str = ""

    @classmethod
    def from_results(
        cls,
        scan: ParsedScan,
        match: MatchResult,
        scan_time: Optional[datetime] = None,
    ) -> "ScanRecord":
        match_type = match.match_type if scan.valid else MatchType.INVALID
        raw = scan.raw if isinstance(scan.raw, str) else ("" if scan.raw is None else str(scan.raw))
        return cls(
            raw_input=raw,
            gtin14=scan.gtin14,
            gtin13=scan.gtin13,
            expiry_iso=scan.expiry_iso,
            expiry_display=scan.expiry_display,
            expiry_status=scan.expiry_status.value,
            batch=scan.batch,
            serial=scan.serial,
            quantity=scan.quantity or "1",
            product_name=match.name if match_type.carries_name else "",
            match_type=match_type.value,
            error_message=scan.error_message,
            scan_time=(scan_time or datetime.now()).isoformat(timespec="seconds"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "raw_input": self.raw_input,
            "gtin14": self.gtin14,
            "gtin13": self.gtin13,
            "expiry_iso": self.expiry_iso,
            "expiry_display": self.expiry_display,
            "expiry_status": self.expiry_status,
            "batch": self.batch,
            "serial": self.serial,
            "quantity": self.quantity,
            "product_name": self.product_name,
            "match_type": self.match_type,
            "error_message": self.error_message,
            "scan_time": self.scan_time,
        }


def process_scan(
    raw: Any,
    index: Optional[MasterIndex],
    *,
    today: TodayLike = None,
    options: Optional[ScanOptions] = None,
    scan_time: Optional[datetime] = None,
) -> ScanRecord:
    """
    Parse a payload and resolve its product against ``index``.

    Args:
        raw: Barcode payload
        index: Catalog snapshot (e.g. ``CatalogStore.snapshot()``)
        today: Reference day for expiry classification
        options: Scan options
        scan_time: Timestamp to record (default: now)

    Returns:
        ScanRecord
    """
    scan = parse_scan(raw, today=today, options=options)
    match = match_product(scan, index)
    return ScanRecord.from_results(scan, match, scan_time=scan_time)
