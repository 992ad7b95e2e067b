"""
Master catalog ingestion from CSV/TSV text.

Only two columns are used: the GTIN and the product name. Column
positions are guessed from the header row; rows whose GTIN has too few
digits are dropped here so the index builder never has to reject rows.
"""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd

from .matching.index import MasterProduct

logger = logging.getLogger(__name__)

MIN_GTIN_DIGITS = 8

GTIN_HEADER_HINTS = ("gtin", "barcode", "ean", "upc", "code")
NAME_HEADER_HINTS = ("name", "description", "product", "item")

_NON_DIGITS = re.compile(r"[^0-9]")


def detect_delimiter(first_line: str) -> str:
    """Tab if present, semicolon if it outnumbers commas, else comma."""
    if "\t" in first_line:
        return "\t"
    if first_line.count(";") > first_line.count(","):
        return ";"
    return ","


def _find_column(headers: Sequence[str], hints: Sequence[str], default: int) -> int:
    for position, header in enumerate(headers):
        if any(hint in header for hint in hints):
            return position
    return default


def _split_line(line: str, delimiter: str) -> List[str]:
    # Quotes never span lines; an unbalanced quote ends with its row
    return next(csv.reader([line], delimiter=delimiter), [])


def parse_master_file(
    content: str,
    filename: str = "",
    min_digits: int = MIN_GTIN_DIGITS,
) -> List[MasterProduct]:
    """
    Parse catalog text into MasterProduct rows.

    Args:
        content: File contents (CSV, TSV or semicolon separated)
        filename: Source name, used for log messages only
        min_digits: Minimum GTIN digits for a row to be kept

    Returns:
        Products in file order
    """
    lines = [line for line in re.split(r"\r?\n", content or "") if line.strip()]
    if not lines:
        return []

    delimiter = detect_delimiter(lines[0])
    records = [_split_line(line, delimiter) for line in lines]

    headers = [cell.strip().lower() for cell in records[0]]
    gtin_col = _find_column(headers, GTIN_HEADER_HINTS, 0)
    name_col = _find_column(headers, NAME_HEADER_HINTS, 1)
    needed = max(gtin_col, name_col)

    rows = [(r[gtin_col], r[name_col]) for r in records[1:] if len(r) > needed]
    short = len(records) - 1 - len(rows)
    if short:
        logger.warning(
            "Skipped %d catalog row(s) from %s with fewer than %d columns",
            short, filename or "<text>", needed + 1,
        )

    frame = pd.DataFrame(rows, columns=["gtin", "name"], dtype=str)
    frame["gtin"] = frame["gtin"].str.replace(_NON_DIGITS, "", regex=True)
    keep = frame["gtin"].str.len() >= min_digits
    dropped = int((~keep).sum())

    products = [
        MasterProduct.from_row(gtin, name.strip())
        for gtin, name in frame.loc[keep, ["gtin", "name"]].itertuples(index=False)
    ]

    if dropped:
        logger.warning(
            "Dropped %d catalog row(s) from %s with fewer than %d GTIN digits",
            dropped, filename or "<text>", min_digits,
        )
    logger.info("Loaded %d catalog row(s) from %s", len(products), filename or "<text>")
    return products


def load_master_file(
    path: Union[str, Path],
    min_digits: Optional[int] = None,
) -> List[MasterProduct]:
    """Read and parse a catalog file."""
    path = Path(path)
    content = path.read_text(encoding="utf-8-sig")
    return parse_master_file(
        content,
        filename=path.name,
        min_digits=MIN_GTIN_DIGITS if min_digits is None else min_digits,
    )
