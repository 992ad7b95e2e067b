"""
Output formatters for processed scans.
"""

from .json_formatter import FIELD_NAMES, format_scan_json, scan_record_to_dict

__all__ = [
    "FIELD_NAMES",
    "format_scan_json",
    "scan_record_to_dict",
]
