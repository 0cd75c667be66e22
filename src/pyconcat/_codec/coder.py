"""Relative-delta coder for source map segments.

Every field of a segment is written relative to the same field of the
previous segment, so a coder has to remember the last value it saw for
each of the five fields.  The generated column restarts at zero on every
generated line; all other fields carry over line boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass

from pyconcat._codec.vlq import decode_vlq, encode_values


@dataclass(frozen=True, slots=True)
class Segment:
    """One decoded mapping segment with absolute values.

    A segment either maps only a generated column, or a generated column
    to ``(source, original_line, original_column)`` and optionally a name.
    """

    generated_column: int
    source: int | None = None
    original_line: int | None = None
    original_column: int | None = None
    name: int | None = None

    def shifted(self, *, column: int = 0, source: int = 0, name: int = 0) -> Segment:
        return Segment(
            generated_column=self.generated_column + column,
            source=None if self.source is None else self.source + source,
            original_line=self.original_line,
            original_column=self.original_column,
            name=None if self.name is None else self.name + name,
        )


@dataclass(frozen=True, slots=True)
class CoderState:
    """Snapshot of the previous values a :class:`Coder` is relative to."""

    generated_column: int = 0
    source: int = 0
    original_line: int = 0
    original_column: int = 0
    name: int = 0


class Coder:
    """Encode and decode segments against running previous values."""

    def __init__(self, state: CoderState | None = None) -> None:
        self.restore(state or CoderState())

    @property
    def state(self) -> CoderState:
        return CoderState(
            generated_column=self.prev_generated_column,
            source=self.prev_source,
            original_line=self.prev_original_line,
            original_column=self.prev_original_column,
            name=self.prev_name,
        )

    def restore(self, state: CoderState) -> None:
        self.prev_generated_column = state.generated_column
        self.prev_source = state.source
        self.prev_original_line = state.original_line
        self.prev_original_column = state.original_column
        self.prev_name = state.name

    def reset_column(self) -> None:
        """Start a new generated line."""
        self.prev_generated_column = 0

    def adjust_line(self, lines: int) -> None:
        """Account for *lines* original lines emitted without this coder."""
        self.prev_original_line += lines

    def encode(self, segment: Segment) -> str:
        values = [segment.generated_column - self.prev_generated_column]
        self.prev_generated_column = segment.generated_column

        if segment.source is not None:
            if segment.original_line is None or segment.original_column is None:
                raise ValueError("a segment with a source needs an original line and column")
            values.append(segment.source - self.prev_source)
            values.append(segment.original_line - self.prev_original_line)
            values.append(segment.original_column - self.prev_original_column)
            self.prev_source = segment.source
            self.prev_original_line = segment.original_line
            self.prev_original_column = segment.original_column

            if segment.name is not None:
                values.append(segment.name - self.prev_name)
                self.prev_name = segment.name

        return encode_values(values)

    def decode(self, encoded: str) -> Segment:
        """Decode one segment (the text between two ``,``/``;`` tokens).

        Raises :class:`ValueError` unless the segment holds 1, 4 or 5 fields.
        """
        values = decode_vlq(encoded)
        if len(values) not in (1, 4, 5):
            raise ValueError(f"mapping segment {encoded!r} has {len(values)} fields")

        self.prev_generated_column += values[0]
        if len(values) == 1:
            return Segment(generated_column=self.prev_generated_column)

        self.prev_source += values[1]
        self.prev_original_line += values[2]
        self.prev_original_column += values[3]
        name: int | None = None
        if len(values) == 5:
            self.prev_name += values[4]
            name = self.prev_name

        return Segment(
            generated_column=self.prev_generated_column,
            source=self.prev_source,
            original_line=self.prev_original_line,
            original_column=self.prev_original_column,
            name=name,
        )
