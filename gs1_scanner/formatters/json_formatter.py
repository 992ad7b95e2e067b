"""
JSON Formatter for processed scans

Renders a ScanRecord either with its plain field keys or with
human-readable field names for display and lookup tools.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from ..scanner import ScanRecord


# Record field -> human-readable name
FIELD_NAMES = {
    "raw_input": "Raw Input",
    "gtin14": "GTIN Code",
    "gtin13": "GTIN-13",
    "expiry_display": "Expiry Date",
    "expiry_status": "Expiry Status",
    "batch": "Batch/Lot Number",
    "serial": "Serial Number",
    "quantity": "Variable Count",
    "product_name": "Trade Name",
    "match_type": "Match Type",
    "error_message": "Error",
    "scan_time": "Scan Time",
}


def scan_record_to_dict(record: ScanRecord, human_readable: bool = False) -> Dict[str, Any]:
    """
    Convert a scan record to a dict.

    Args:
        record: Processed scan
        human_readable: Use display names and skip empty fields

    Returns:
        Dict ready for JSON serialization
    """
    data = record.to_dict()
    if not human_readable:
        return data

    output: Dict[str, Any] = {}
    for key, name in FIELD_NAMES.items():
        value = data.get(key)
        if value in ("", None):
            continue
        output[name] = value
    return output


def format_scan_json(record: ScanRecord, human_readable: bool = False, indent: int = 2) -> str:
    """Format a scan record as a JSON string."""
    return json.dumps(
        scan_record_to_dict(record, human_readable=human_readable),
        indent=indent,
        ensure_ascii=False,
    )
