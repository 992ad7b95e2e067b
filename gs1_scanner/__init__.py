"""
GS1 Scan Matcher

Decodes GS1 Application Identifier barcode payloads (bracketed or raw
scanner output) into trade item fields, classifies the expiry date, and
resolves the item to a product name from a master catalog using exact,
suffix and sliding-window matching.
"""

from .core.ai_dictionary import AIDictionary, AIEntry, load_ai_dictionary
from .core.extractor import ScanOptions, extract_fields, parse_scan
from .core.models import ErrorCode, MatchType, ParsedScan, ParseError
from .core.raw_decoder import DecodeResult, decode, decode_with_diagnostics
from .validators.dates import (
    ExpiryStatus,
    NormalizedDate,
    classify_expiry,
    normalize_gs1_date,
)
from .matching.index import MasterIndex, MasterProduct, build_master_index, canonicalize_gtin
from .matching.matcher import MatchResult, match_product
from .matching.store import CatalogStore
from .scanner import ScanRecord, process_scan
from .catalog_loader import load_master_file, parse_master_file

__version__ = "1.0.0"
__all__ = [
    "AIDictionary",
    "AIEntry",
    "load_ai_dictionary",
    "ScanOptions",
    "extract_fields",
    "parse_scan",
    "ErrorCode",
    "MatchType",
    "ParsedScan",
    "ParseError",
    "DecodeResult",
    "decode",
    "decode_with_diagnostics",
    "ExpiryStatus",
    "NormalizedDate",
    "classify_expiry",
    "normalize_gs1_date",
    "MasterIndex",
    "MasterProduct",
    "build_master_index",
    "canonicalize_gtin",
    "MatchResult",
    "match_product",
    "CatalogStore",
    "ScanRecord",
    "process_scan",
    "load_master_file",
    "parse_master_file",
]
