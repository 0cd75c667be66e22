"""Concatenation with a synchronized source map."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pyconcat import _map_url
from pyconcat._constants import BLOCK_COMMENT_TEMPLATE, LINE_COMMENT_TEMPLATE
from pyconcat.assemblers.base import BaseAssembler
from pyconcat.config import ConcatConfig, MapCommentStyle
from pyconcat.mapping.cache import EncoderCache
from pyconcat.mapping.generator import MappingGenerator
from pyconcat.mapping.resolver import (
    ExternalMapRecord,
    ExternalMapResolver,
    Reader,
    WarningSink,
    log_warning,
)
from pyconcat.models.source_map import SourceMap
from pyconcat.store.store import OrderedEntryStore

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Rendering:
    text: str
    source_map: SourceMap


class PositionMapAssembler(BaseAssembler):
    """Concatenate files and describe where every output line came from.

    Files that end with a ``sourceMappingURL`` comment have the comment
    stripped and the referenced map merged into the output map.  The map
    is rebuilt from the current entries on every request.
    """

    name = "SourceMap"

    def __init__(
        self,
        config: ConcatConfig,
        *,
        store: OrderedEntryStore | None = None,
        unit_id: int | None = None,
        cache: EncoderCache | None = None,
        reader: Reader | None = None,
        warn: WarningSink | None = None,
    ) -> None:
        super().__init__(config, store=store, unit_id=unit_id)
        self._cache = cache
        self._warn = warn or log_warning
        self._resolver = ExternalMapResolver(input_root=config.input_root, reader=reader)
        self._external_maps: dict[str, ExternalMapRecord] = {}

    @property
    def external_maps(self) -> dict[str, ExternalMapRecord]:
        return dict(self._external_maps)

    # ------------------------------------------------------------------
    # Patch protocol
    # ------------------------------------------------------------------

    def add_file(self, identifier: str, content: str) -> None:
        self._ensure_usable()
        content, url = _map_url.split(content)
        entry = self._store.add_file(identifier, content)
        if url is not None:
            self._external_maps[entry.identifier] = ExternalMapRecord(url=url)

    def update_file(self, identifier: str, content: str) -> None:
        self._ensure_usable()
        content, url = _map_url.split(content)
        entry = self._store.update_file(identifier, content)
        # A new record also forgets any failure reported for the old content.
        if url is not None:
            self._external_maps[entry.identifier] = ExternalMapRecord(url=url)
        else:
            self._external_maps.pop(entry.identifier, None)

    def remove_file(self, identifier: str) -> None:
        self._ensure_usable()
        entry = self._store.remove_file(identifier)
        self._external_maps.pop(entry.identifier, None)

    def dispose(self) -> None:
        self._external_maps.clear()
        super().dispose()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self) -> _Rendering:
        self._ensure_usable()
        self._ensure_not_empty()

        config = self.config
        separator = config.separator
        generator = MappingGenerator(
            cache=self._cache,
            max_tracked_content_size=config.max_tracked_content_size,
        )
        texts: list[str] = []
        segments: list[str] = []

        def add_section(text: str, mapping: str, prefix: str) -> None:
            texts.append(text)
            segments.append(prefix + mapping)

        def begin_section() -> str:
            if not texts:
                return ""
            return generator.begin_section(separator)

        if config.header:
            prefix = begin_section()
            add_section(config.header, generator.add_space(config.header), prefix)

        entries = self._store.ordered_entries()
        for entry in entries:
            prefix = begin_section()
            content = entry.content
            record = self._external_maps.get(entry.identifier)
            resolved = self._resolver.resolve(entry.identifier, record, self._warn) if record else None
            if resolved is not None:
                mapping, content = generator.assimilate(content, resolved)
            else:
                mapping = generator.add_entry(entry.identifier, content)
            add_section(content, mapping, prefix)

        footer = self._footer_text()
        if footer is not None:
            prefix = begin_section()
            add_section(footer, generator.add_space(footer), prefix)

        source_map = generator.to_source_map(
            generator.finalize(segments, separator),
            file=config.file,
            source_root=config.source_root,
        )
        _logger.debug(
            "Rendered %s (unit %s): %d entries, %d sources, %d lines mapped",
            config.output_name,
            self.unit_id,
            len(entries),
            len(source_map.sources),
            generator.lines_mapped,
        )
        return _Rendering(text=separator.join(texts), source_map=source_map)

    def map_comment(self) -> str:
        template = LINE_COMMENT_TEMPLATE
        if self.config.map_comment_style is MapCommentStyle.BLOCK:
            template = BLOCK_COMMENT_TEMPLATE
        return template.format(url=self.config.resolved_map_url)

    def result(self) -> str:
        """Concatenated output followed by a reference to the map."""
        text = self._render().text
        if text and not text.endswith("\n"):
            text += "\n"
        return text + self.map_comment()

    def position_map(self) -> SourceMap:
        return self._render().source_map

    def result_position_map(self) -> str:
        """The source map for :meth:`result`, as compact JSON."""
        return self.position_map().to_json()
