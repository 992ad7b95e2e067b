"""
Catalog store owning the active MasterIndex.

Every change (load, append, replace, clear) rebuilds the index from the
full row set and publishes it with a single attribute assignment. Readers
call ``snapshot()`` and keep using that index for as long as they like; a
rebuild never touches an index that has already been published.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional, Tuple

from .index import EMPTY_INDEX, CatalogRow, MasterIndex, MasterProduct, as_product, build_master_index

logger = logging.getLogger(__name__)


class CatalogStore:
    """Holds catalog rows and the index built from them."""

    def __init__(self, rows: Optional[Iterable[CatalogRow]] = None):
        self._write_lock = threading.Lock()
        self._rows: Tuple[MasterProduct, ...] = ()
        self._index: MasterIndex = EMPTY_INDEX
        if rows is not None:
            self.load(rows)

    @property
    def rows(self) -> Tuple[MasterProduct, ...]:
        return self._rows

    @property
    def generation(self) -> int:
        return self._index.generation

    def snapshot(self) -> MasterIndex:
        """Return the currently published index."""
        return self._index

    def __len__(self) -> int:
        return len(self._rows)

    def _publish(self, rows: Tuple[MasterProduct, ...]) -> MasterIndex:
        # Caller holds the write lock
        index = build_master_index(rows, generation=self._index.generation + 1)
        self._rows = rows
        self._index = index
        logger.info("Published catalog index generation %d with %d products", index.generation, len(rows))
        return index

    def load(self, rows: Iterable[CatalogRow]) -> MasterIndex:
        """Replace the catalog with ``rows``."""
        products = tuple(as_product(row) for row in rows)
        with self._write_lock:
            return self._publish(products)

    replace = load

    def append(self, rows: Iterable[CatalogRow]) -> MasterIndex:
        """Add ``rows`` after the existing catalog rows."""
        products = tuple(as_product(row) for row in rows)
        with self._write_lock:
            return self._publish(self._rows + products)

    def clear(self) -> MasterIndex:
        """Drop every catalog row."""
        with self._write_lock:
            return self._publish(())
