"""
Core decoding modules for the GS1 scan matcher.
"""

from .ai_dictionary import AIDictionary, AIEntry, AI_DICTIONARY, load_ai_dictionary
from .extractor import ScanOptions, extract_fields, parse_scan
from .models import ErrorCode, MatchType, ParsedScan, ParseError
from .raw_decoder import DecodeResult, DecodedElement, decode, decode_with_diagnostics

__all__ = [
    "AIDictionary",
    "AIEntry",
    "AI_DICTIONARY",
    "load_ai_dictionary",
    "ScanOptions",
    "extract_fields",
    "parse_scan",
    "ErrorCode",
    "MatchType",
    "ParsedScan",
    "ParseError",
    "DecodeResult",
    "DecodedElement",
    "decode",
    "decode_with_diagnostics",
]
