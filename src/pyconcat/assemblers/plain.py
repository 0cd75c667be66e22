"""Plain concatenation without a source map."""

from __future__ import annotations

import logging

from pyconcat.assemblers.base import BaseAssembler

_logger = logging.getLogger(__name__)


class PlainAssembler(BaseAssembler):
    name = "Simple"

    def result(self) -> str:
        self._ensure_usable()
        self._ensure_not_empty()

        entries = self._store.ordered_entries()
        sections = self._sections([entry.content for entry in entries])
        _logger.debug("Rendering %s from %d entries", self.config.output_name, len(entries))
        return self.config.separator.join(sections)
