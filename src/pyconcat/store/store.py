"""Incremental ordered entry store.

This is the only component that tracks which files belong to a
concatenation unit.  The build driver populates it once and then sends
patches; the assemblers only ever read :meth:`OrderedEntryStore.ordered_entries`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any

from pyconcat._logsafe import shorten
from pyconcat._text import ensure_posix
from pyconcat.exceptions import DuplicateEntryError, UnknownEntryError
from pyconcat.models.entry import Entry
from pyconcat.store.ordering import classify, ensure_no_glob, order_entries

if TYPE_CHECKING:
    from pyconcat.config import ConcatConfig

_logger = logging.getLogger(__name__)


def _unique(identifiers: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(ensure_posix(i) for i in identifiers))


class OrderedEntryStore:
    """Entries keyed by identifier, ordered into header/body/footer zones.

    The order is recomputed on every read, so given the same set of
    identifiers the store yields the same sequence no matter in which
    order the files were added, updated or removed.
    """

    def __init__(
        self,
        *,
        header_files: Iterable[str] = (),
        footer_files: Iterable[str] = (),
        body_sort_key: Callable[[str], Any] | None = None,
        allow_empty: bool = False,
    ) -> None:
        self.header_files = _unique(header_files)
        self.footer_files = _unique(footer_files)
        ensure_no_glob("header_files", self.header_files)
        ensure_no_glob("footer_files", self.footer_files)
        self._header_index = frozenset(self.header_files)
        self._footer_index = frozenset(self.footer_files)
        self._body_sort_key = body_sort_key
        self.allow_empty = allow_empty
        self._entries: dict[str, Entry] = {}

    @classmethod
    def from_config(cls, config: ConcatConfig) -> OrderedEntryStore:
        return cls(
            header_files=config.header_files,
            footer_files=config.footer_files,
            body_sort_key=config.body_sort_key,
            allow_empty=config.allow_empty,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and ensure_posix(identifier) in self._entries

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.ordered_entries())

    def get(self, identifier: str) -> Entry | None:
        return self._entries.get(ensure_posix(identifier))

    def add_file(self, identifier: str, content: str) -> Entry:
        """Track a new file.  Raises :class:`DuplicateEntryError` if already tracked."""
        identifier = ensure_posix(identifier)
        if identifier in self._entries:
            raise DuplicateEntryError(identifier)

        zone = classify(identifier, header_files=self._header_index, footer_files=self._footer_index)
        entry = Entry(identifier=identifier, content=content, zone=zone)
        self._entries[identifier] = entry
        _logger.debug("Added %s to %s zone: %s", identifier, zone, shorten(content))
        return entry

    def update_file(self, identifier: str, content: str) -> Entry:
        """Replace the content of a tracked file; its zone never changes."""
        identifier = ensure_posix(identifier)
        entry = self._entries.get(identifier)
        if entry is None:
            raise UnknownEntryError(
                f"Trying to update {identifier} but it has not been read before",
                identifier=identifier,
            )

        updated = entry.with_content(content)
        self._entries[identifier] = updated
        _logger.debug("Updated %s: %s", identifier, shorten(content))
        return updated

    def remove_file(self, identifier: str) -> Entry:
        identifier = ensure_posix(identifier)
        entry = self._entries.pop(identifier, None)
        if entry is None:
            raise UnknownEntryError(
                f"Trying to remove {identifier} but it did not previously exist",
                identifier=identifier,
            )
        _logger.debug("Removed %s", identifier)
        return entry

    def ordered_entries(self) -> list[Entry]:
        return order_entries(
            self._entries,
            header_files=self.header_files,
            footer_files=self.footer_files,
            sort_key=self._body_sort_key,
        )

    def clear(self) -> None:
        self._entries.clear()
