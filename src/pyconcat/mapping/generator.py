"""Source map generation for whole-file concatenation.

The generator walks the rendered sections in output order and keeps track
of where the output cursor is: the generated column on the current line,
the number of generated line breaks emitted so far, and the relative-delta
encoder state.

Two kinds of entries exist:

* Plain files use the identity shortcut.  One anchored segment maps the
  current column to line 0, column 0 of the file, and every following
  line gets the constant ``AACA`` segment (next line, same source, next
  original line, column 0).
* Files that referenced an upstream map are assimilated.  The upstream
  sources and names are appended to the master arrays, and its mapping
  stream is decoded and re-encoded with the index offsets applied once
  per field.  Because every field is relative, once the offsets have
  been folded into the decoder state the rest of the stream can be
  copied through unchanged.

A malformed upstream map that covers fewer lines than its file is padded
with empty mapping lines; one that covers more extends the rendered file
with line terminators so output and map stay in lockstep.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pyconcat._codec.coder import Coder, CoderState, Segment
from pyconcat._text import column_width, count_newlines, last_line
from pyconcat.mapping.cache import EncoderCache, IdentityFragment, identity_fragment
from pyconcat.mapping.resolver import ResolvedMap
from pyconcat.models.source_map import SourceMap

_logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"([;,]*)([^;,]*)")
_CONTINUATION_RE = re.compile(r"(;*)((?:AACA;)+)")

_LINE_SEPARATOR = "\n"


@dataclass(frozen=True, slots=True)
class CacheHint:
    """Known outcome of merging one upstream stream.

    ``lines`` is the number of generated line breaks the stream covers and
    ``state`` the encoder state after its last segment, both measured once
    the index offsets have been applied.
    """

    lines: int
    state: CoderState


class MappingGenerator:
    """Build one master map from entries in output order."""

    def __init__(
        self,
        *,
        cache: EncoderCache | None = None,
        max_tracked_content_size: int | None = None,
    ) -> None:
        self._cache = cache
        self._max_tracked_content_size = max_tracked_content_size
        self.reset()

    def reset(self) -> None:
        self.column = 0
        self.lines_mapped = 0
        self.encoder = Coder()
        self._line_has_segment = False
        self.sources: list[str] = []
        self.sources_content: list[str | None] = []
        self.names: list[str] = []

    # ------------------------------------------------------------------
    # Cursor bookkeeping
    # ------------------------------------------------------------------

    def _new_line(self) -> None:
        self.column = 0
        self.lines_mapped += 1
        self.encoder.reset_column()
        self._line_has_segment = False

    def _emit(self, segment: Segment) -> str:
        prefix = "," if self._line_has_segment else ""
        self._line_has_segment = True
        return prefix + self.encoder.encode(segment)

    def add_space(self, text: str) -> str:
        """Account for unmapped text such as header and footer literals."""
        newlines = count_newlines(text)
        if not newlines:
            self.column += column_width(text)
            return ""

        for _ in range(newlines):
            self._new_line()
        self.column = column_width(last_line(text))
        return ";" * newlines

    def begin_section(self, separator: str) -> str:
        """Account for the separator placed before a section.

        A bare line terminator is emitted as the join token by
        :meth:`finalize`; any other separator carries its own tokens.
        """
        if separator == _LINE_SEPARATOR:
            self._new_line()
            return ""
        return self.add_space(separator)

    @staticmethod
    def finalize(sections: list[str], separator: str) -> str:
        joiner = ";" if separator == _LINE_SEPARATOR else ""
        return joiner.join(sections)

    # ------------------------------------------------------------------
    # Identity shortcut
    # ------------------------------------------------------------------

    def _fragment(self, content: str) -> IdentityFragment:
        if self._cache is None:
            return identity_fragment(content)
        return self._cache.fragment_for(content, max_size=self._max_tracked_content_size)

    def add_entry(self, identifier: str, content: str) -> str:
        """Record a plain file and return its mapping tokens.

        Empty files render nothing, so they get neither a source nor a
        segment.
        """
        if not content:
            return ""

        self.sources.append(identifier)
        self.sources_content.append(content)
        return self.encode_identity(content, len(self.sources) - 1)

    def encode_identity(self, content: str, source_index: int) -> str:
        fragment = self._fragment(content)
        mapping = self._emit(
            Segment(
                generated_column=self.column,
                source=source_index,
                original_line=0,
                original_column=0,
            )
        )

        if fragment.newlines == 0:
            # No line terminator: keep writing on the same generated line.
            self.column += fragment.tail_width
            return mapping

        mapping += fragment.body
        self.lines_mapped += fragment.newlines
        self.encoder.reset_column()
        if fragment.tail_width:
            self.encoder.adjust_line(fragment.newlines)
            self._line_has_segment = True
            self.column = fragment.tail_width
        else:
            self.encoder.adjust_line(fragment.newlines - 1)
            self._line_has_segment = False
            self.column = 0
        return mapping

    # ------------------------------------------------------------------
    # Assimilation
    # ------------------------------------------------------------------

    def assimilate(
        self,
        content: str,
        resolved: ResolvedMap,
        *,
        cache_hint: CacheHint | None = None,
    ) -> tuple[str, str]:
        """Merge an upstream map for *content*.

        Returns the mapping tokens and the content as it must be rendered,
        which gains trailing line terminators when the upstream map covers
        more lines than the file has.
        """
        sources_offset = len(self.sources)
        names_offset = len(self.names)
        self.sources.extend(resolved.sources)
        self.sources_content.extend(resolved.sources_content)
        self.names.extend(resolved.names)

        start_lines = self.lines_mapped
        start_column = self.column
        newlines = count_newlines(content)

        mapping = self.merge_mappings(
            resolved.mappings,
            sources_offset,
            names_offset,
            cache_hint=cache_hint,
        )

        covered = self.lines_mapped - start_lines
        if covered < newlines:
            # Upstream map is too short for its file.
            missing = newlines - covered
            for _ in range(missing):
                self._new_line()
            mapping += ";" * missing
        elif covered > newlines:
            # Upstream map is too long for its file.
            _logger.debug("Source map covers %d lines but content has %d", covered, newlines)
            content += "\n" * (covered - newlines)

        if count_newlines(content):
            self.column = column_width(last_line(content))
        else:
            self.column = start_column + column_width(content)
        return mapping, content

    def merge_mappings(
        self,
        mappings: str,
        sources_offset: int,
        names_offset: int,
        *,
        cache_hint: CacheHint | None = None,
    ) -> str:
        """Re-encode an upstream mapping stream at the current cursor.

        Segments on the first generated line are shifted by the current
        column.  The first segment referencing a source (or a name) gets
        the offset added, and the decoder state is shifted with it so all
        later deltas stay valid untouched.
        """
        decoder = Coder()
        out: list[str] = []
        shift = self.column
        initial_lines = self.lines_mapped
        pos = 0
        end = len(mappings)

        while pos < end:
            if not shift and not sources_offset and not names_offset and self.encoder.state == decoder.state:
                if cache_hint is not None:
                    # Nothing ahead needs rewriting: copy the rest and jump
                    # straight to the hinted final state.
                    rest = mappings[pos:]
                    if self._line_has_segment and rest[0] not in ";,":
                        out.append(",")
                    out.append(rest)
                    _, newline, tail = rest.rpartition(";")
                    if newline:
                        self._line_has_segment = bool(tail.strip(","))
                    else:
                        self._line_has_segment = self._line_has_segment or bool(rest.strip(","))
                    self.lines_mapped = initial_lines + cache_hint.lines
                    self.encoder.restore(cache_hint.state)
                    break

                match = _CONTINUATION_RE.match(mappings, pos)
                if match is not None and (match.group(1) or not self._line_has_segment):
                    # Line-for-line runs are common and need no decoding.
                    for _ in range(len(match.group(1))):
                        out.append(";")
                        self._new_line()
                        decoder.reset_column()
                    run = match.group(2)
                    lines = len(run) // 5
                    for coder in (self.encoder, decoder):
                        coder.adjust_line(lines)
                        coder.reset_column()
                    self.lines_mapped += lines
                    self._line_has_segment = False
                    out.append(run)
                    pos = match.end()
                    continue

            match = _TOKEN_RE.match(mappings, pos)
            assert match is not None  # noqa: S101
            separators, encoded = match.group(1), match.group(2)
            pos = match.end()

            for _ in range(separators.count(";")):
                out.append(";")
                self._new_line()
                decoder.reset_column()
                shift = 0

            if not encoded:
                continue

            value = decoder.decode(encoded)
            if value.source is not None and sources_offset:
                decoder.prev_source += sources_offset
                value = value.shifted(source=sources_offset)
                sources_offset = 0
            if value.name is not None and names_offset:
                decoder.prev_name += names_offset
                value = value.shifted(name=names_offset)
                names_offset = 0
            if shift:
                value = value.shifted(column=shift)

            out.append(self._emit(value))

        return "".join(out)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_source_map(self, mappings: str, *, file: str, source_root: str | None = None) -> SourceMap:
        return SourceMap(
            sources=list(self.sources),
            sources_content=list(self.sources_content),
            names=list(self.names),
            mappings=mappings,
            source_root=source_root,
            file=file,
        )
