"""Small text helpers for line accounting and path normalisation."""

from __future__ import annotations

import os


def count_newlines(text: str) -> int:
    """Count line terminators in *text* (``\\r\\n`` counts once)."""
    return text.count("\n")


def last_line(text: str) -> str:
    """Return the text after the final line terminator."""
    return text.rpartition("\n")[2]


def column_width(text: str) -> int:
    """Width of *text* in UTF-16 code units.

    Source map columns are measured the way browsers index strings, so
    characters outside the BMP count as two columns.
    """
    return len(text.encode("utf-16-le")) // 2


def ensure_posix(path: str) -> str:
    """Convert platform path separators to ``/``."""
    if os.sep != "/":
        return path.replace(os.sep, "/")
    return path


def ensure_posix_eol(text: str) -> str:
    """Convert platform line terminators to ``\\n``."""
    if os.linesep != "\n":
        return text.replace(os.linesep, "\n")
    return text
