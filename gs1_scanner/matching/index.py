"""
Master Index - lookup structures built from the product catalog.

Built once per catalog change and never mutated afterwards:
- exact: canonical GTIN-14 (plus its 13-digit form when it starts with 0) -> name
- last8: last 8 digits of the canonical GTIN -> every (gtin, name) sharing them
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple, Union

logger = logging.getLogger(__name__)

GTIN_LENGTH = 14
SUFFIX_LENGTH = 8

_NON_DIGITS = re.compile(r'[^0-9]')


def canonicalize_gtin(value) -> str:
    """Strip non-digits and left-pad with zeros to 14 digits."""
    return _NON_DIGITS.sub('', str(value)).zfill(GTIN_LENGTH)


@dataclass(frozen=True)
class MasterProduct:
    """A catalog row: canonical 14-digit GTIN and display name."""
    gtin: str
    name: str = ""

    @classmethod
    def from_row(cls, gtin_raw, name) -> "MasterProduct":
        return cls(gtin=canonicalize_gtin(gtin_raw), name=name or "")

    @property
    def last8(self) -> str:
        return self.gtin[-SUFFIX_LENGTH:]


CatalogRow = Union[MasterProduct, Tuple[str, str]]


@dataclass(frozen=True)
class MasterIndex:
    """
    Read-only catalog index.

    Attributes:
        exact: GTIN (14-digit, and 13-digit alias) -> name; last write wins
        last8: 8-digit suffix -> (gtin, name) pairs in catalog order
        product_count: Number of catalog rows indexed
        generation: Build number assigned by the owner of the index
        canonical_keys: Catalog GTINs in first-seen order, without aliases
    """
    exact: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    last8: Mapping[str, Tuple[Tuple[str, str], ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    product_count: int = 0
    generation: int = 0
    canonical_keys: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.exact

    def lookup_exact(self, gtin: str):
        """Return the name for an exact GTIN key, or None."""
        return self.exact.get(gtin)

    def lookup_last8(self, suffix: str) -> Tuple[Tuple[str, str], ...]:
        """Return every (gtin, name) whose canonical GTIN ends with ``suffix``."""
        return self.last8.get(suffix, ())

    def canonical_entries(self) -> Iterable[Tuple[str, str]]:
        """(gtin, name) for every canonical catalog GTIN, skipping 13-digit aliases."""
        return ((gtin, self.exact[gtin]) for gtin in self.canonical_keys)


EMPTY_INDEX = MasterIndex()


def as_product(row: CatalogRow) -> MasterProduct:
    if isinstance(row, MasterProduct):
        # Re-canonicalize so hand-built products behave like loaded ones
        return MasterProduct.from_row(row.gtin, row.name)
    gtin_raw, name = row
    return MasterProduct.from_row(gtin_raw, name)


def build_master_index(rows: Iterable[CatalogRow], generation: int = 0) -> MasterIndex:
    """
    Build lookup index from catalog rows.

    Args:
        rows: MasterProduct objects or (gtin_raw, name) pairs
        generation: Build number to stamp on the index

    Returns:
        MasterIndex with exact and last-8 lookups
    """
    exact: Dict[str, str] = {}
    last8: Dict[str, List[Tuple[str, str]]] = {}
    canonical: Dict[str, None] = {}
    count = 0

    for row in rows:
        product = as_product(row)
        count += 1

        exact[product.gtin] = product.name
        canonical[product.gtin] = None
        if product.gtin.startswith('0'):
            exact[product.gtin[1:]] = product.name

        last8.setdefault(product.last8, []).append((product.gtin, product.name))

    logger.debug(
        "Built master index generation %d: %d rows, %d exact keys, %d suffixes",
        generation, count, len(exact), len(last8),
    )

    return MasterIndex(
        exact=MappingProxyType(exact),
        last8=MappingProxyType({k: tuple(v) for k, v in last8.items()}),
        product_count=count,
        canonical_keys=tuple(canonical),
        generation=generation,
    )
