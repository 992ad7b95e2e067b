"""
Catalog indexing and product matching.
"""

from .index import (
    EMPTY_INDEX,
    MasterIndex,
    MasterProduct,
    build_master_index,
    canonicalize_gtin,
)
from .matcher import MatchResult, match_product, seq6_windows
from .store import CatalogStore

__all__ = [
    "EMPTY_INDEX",
    "MasterIndex",
    "MasterProduct",
    "build_master_index",
    "canonicalize_gtin",
    "MatchResult",
    "match_product",
    "seq6_windows",
    "CatalogStore",
]
