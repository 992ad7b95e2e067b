"""
Scan history export utilities (CSV/TSV/Excel).
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Optional, Union

import pandas as pd

from .scanner import ScanRecord
from .settings import load_settings


# Column title -> ScanRecord attribute
EXPORT_COLUMNS = {
    "Scan Time": "scan_time",
    "Raw": "raw_input",
    "GTIN14": "gtin14",
    "GTIN13": "gtin13",
    "Expiry": "expiry_display",
    "Batch": "batch",
    "Serial": "serial",
    "Qty": "quantity",
    "Product Name": "product_name",
    "Match Type": "match_type",
}

PathLike = Union[str, Path]


def exports_dir(directory: Optional[PathLike] = None) -> Path:
    path = Path(directory) if directory is not None else Path(load_settings()["exports_dir"])
    path.mkdir(parents=True, exist_ok=True)
    return path


def _export_row(record: ScanRecord) -> dict:
    row = {title: getattr(record, attr) or "" for title, attr in EXPORT_COLUMNS.items()}
    row["Qty"] = row["Qty"] or "1"
    return row


def to_dataframe(records: Iterable[ScanRecord]) -> pd.DataFrame:
    return pd.DataFrame([_export_row(r) for r in records], columns=list(EXPORT_COLUMNS))


def export_csv(records: Iterable[ScanRecord], filename: str, directory: Optional[PathLike] = None) -> Path:
    path = exports_dir(directory) / filename
    to_dataframe(records).to_csv(path, index=False, quoting=csv.QUOTE_ALL)
    return path


def export_tsv(records: Iterable[ScanRecord], filename: str, directory: Optional[PathLike] = None) -> Path:
    path = exports_dir(directory) / filename
    to_dataframe(records).to_csv(path, index=False, sep="\t")
    return path


def export_excel(
    records: Iterable[ScanRecord],
    filename: str,
    directory: Optional[PathLike] = None,
    sheet_name: str = "Scans",
) -> Path:
    path = exports_dir(directory) / filename
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        to_dataframe(records).to_excel(writer, sheet_name=sheet_name, index=False)
    return path
