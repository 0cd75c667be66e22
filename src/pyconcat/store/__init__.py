"""Entry store layer.

This package is the single source of truth for which files belong to a
concatenation unit and in which order they are rendered.
"""

from pyconcat.store.ordering import classify, ensure_no_glob, order_entries
from pyconcat.store.store import OrderedEntryStore

__all__ = [
    "OrderedEntryStore",
    "classify",
    "ensure_no_glob",
    "order_entries",
]
