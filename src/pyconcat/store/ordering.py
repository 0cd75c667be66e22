"""Deterministic zone classification and output ordering.

This module holds no state.  Zone membership comes from configuration
only, and the body order depends only on the identifiers present.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from pyconcat._constants import has_glob
from pyconcat.exceptions import ConcatConfigError
from pyconcat.models.entry import Entry, Zone


def ensure_no_glob(option: str, identifiers: Iterable[str]) -> None:
    """Raise :class:`ConcatConfigError` for any identifier that looks like a glob."""
    for identifier in identifiers:
        if has_glob(identifier):
            raise ConcatConfigError(f"{option} cannot contain a glob, `{identifier}`")


def classify(identifier: str, *, header_files: frozenset[str], footer_files: frozenset[str]) -> Zone:
    # Header wins when an identifier is listed on both sides.
    if identifier in header_files:
        return Zone.HEADER_FILE
    if identifier in footer_files:
        return Zone.FOOTER_FILE
    return Zone.BODY


def order_entries(
    entries: Mapping[str, Entry],
    *,
    header_files: Sequence[str],
    footer_files: Sequence[str],
    sort_key: Callable[[str], Any] | None = None,
) -> list[Entry]:
    """Return header files, then the sorted body, then footer files."""
    headers = [entries[i] for i in header_files if i in entries and entries[i].zone is Zone.HEADER_FILE]
    body = sorted(
        (entry for entry in entries.values() if entry.zone is Zone.BODY),
        key=lambda entry: entry.identifier if sort_key is None else sort_key(entry.identifier),
    )
    footers = [entries[i] for i in footer_files if i in entries and entries[i].zone is Zone.FOOTER_FILE]
    return headers + body + footers
