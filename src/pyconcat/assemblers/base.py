"""Abstract base assembler.

Every strategy consumes the same ordered entry store and patch protocol
but renders a different artifact.  This base class owns the store, the
lifecycle and the section layout so the build driver can work with any
strategy generically.

Sections are laid out as header literal, header files, body files, footer
files and footer literal.  Every section after the first is preceded by
exactly one separator, and the footer literal always ends the output with
a line terminator.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from pyconcat.config import ConcatConfig
from pyconcat.exceptions import AssemblerDisposedError, EmptyResultError
from pyconcat.models.entry import Entry
from pyconcat.store.store import OrderedEntryStore

_logger = logging.getLogger(__name__)


class BaseAssembler(ABC):
    """Owns one concatenation unit across rebuilds."""

    name: ClassVar[str] = "Unknown"

    def __init__(
        self,
        config: ConcatConfig,
        *,
        store: OrderedEntryStore | None = None,
        unit_id: int | None = None,
    ) -> None:
        self.config = config
        self.unit_id = unit_id
        self._store = store if store is not None else OrderedEntryStore.from_config(config)
        self._disposed = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} #{self.unit_id} {self.config.output_name!r} entries={len(self._store)}>"

    @property
    def store(self) -> OrderedEntryStore:
        return self._store

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _ensure_usable(self) -> None:
        if self._disposed:
            raise AssemblerDisposedError(f"{self.name} for {self.config.output_name} has been disposed")

    # ------------------------------------------------------------------
    # Patch protocol
    # ------------------------------------------------------------------

    def add_file(self, identifier: str, content: str) -> None:
        self._ensure_usable()
        self._store.add_file(identifier, content)

    def update_file(self, identifier: str, content: str) -> None:
        self._ensure_usable()
        self._store.update_file(identifier, content)

    def remove_file(self, identifier: str) -> None:
        self._ensure_usable()
        self._store.remove_file(identifier)

    def ordered_entries(self) -> list[Entry]:
        self._ensure_usable()
        return self._store.ordered_entries()

    def dispose(self) -> None:
        """Drop all entries; every later call raises :class:`AssemblerDisposedError`."""
        if self._disposed:
            return
        self._store.clear()
        self._disposed = True
        _logger.debug("Disposed %r", self)

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def _ensure_not_empty(self) -> None:
        if not len(self._store) and not self.config.allow_empty:
            raise EmptyResultError(f"Concat: nothing was added to {self.config.output_name}")

    def _footer_text(self) -> str | None:
        if self.config.footer:
            return self.config.footer + "\n"
        return None

    def _sections(self, contents: list[str]) -> list[str]:
        sections: list[str] = []
        if self.config.header:
            sections.append(self.config.header)
        sections.extend(contents)
        footer = self._footer_text()
        if footer is not None:
            sections.append(footer)
        return sections

    @abstractmethod
    def result(self) -> str:
        """Render the concatenated output for the current entries."""
