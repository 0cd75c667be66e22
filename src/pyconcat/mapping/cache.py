"""Content-addressed memo of encoded identity mappings.

A verbatim copy of a file always maps line *i* to line *i*, so everything
after the first (anchored) segment depends on the content alone.  That
tail is what gets memoised here, keyed by a fingerprint of the content.
Fragments are immutable, so one cache can be shared read-only by any
number of assemblers across rebuilds.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from pyconcat._constants import IDENTITY_LINE_SEGMENT
from pyconcat._text import column_width, count_newlines, last_line


def fingerprint(content: str) -> str:
    """SHA-1 hex digest of the UTF-8 encoded content."""
    return hashlib.sha1(content.encode("utf-8")).hexdigest()


@dataclass(frozen=True, slots=True)
class IdentityFragment:
    """Encoded lines following the anchored segment of one content.

    ``tail_width`` is the UTF-16 width of the text after the last line
    terminator, or of the whole content when there is none.  ``body``
    holds the mapping tokens for every line after the first.
    """

    newlines: int
    tail_width: int
    body: str


def identity_fragment(content: str) -> IdentityFragment:
    newlines = count_newlines(content)
    tail_width = column_width(last_line(content))
    if newlines == 0:
        return IdentityFragment(newlines=0, tail_width=tail_width, body="")

    body = ";" + (IDENTITY_LINE_SEGMENT + ";") * (newlines - 1)
    if tail_width:
        body += IDENTITY_LINE_SEGMENT
    return IdentityFragment(newlines=newlines, tail_width=tail_width, body=body)


class EncoderCache:
    """Shared memo of :class:`IdentityFragment` values.

    The memo is never evicted.  Whoever owns the cache decides its
    lifetime and calls :meth:`clear`, e.g. after a full rebuild or when
    :meth:`__len__` passes a limit of their choosing.  Use
    ``max_tracked_content_size`` to keep large files out of it.
    """

    def __init__(self) -> None:
        self._fragments: dict[str, IdentityFragment] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._fragments)

    def __contains__(self, content: object) -> bool:
        return isinstance(content, str) and fingerprint(content) in self._fragments

    def fragment_for(self, content: str, *, max_size: int | None = None) -> IdentityFragment:
        """Return the fragment for *content*, memoising it when small enough."""
        if max_size is not None and len(content) > max_size:
            return identity_fragment(content)

        key = fingerprint(content)
        fragment = self._fragments.get(key)
        if fragment is not None:
            self.hits += 1
            return fragment

        self.misses += 1
        fragment = identity_fragment(content)
        self._fragments[key] = fragment
        return fragment

    def clear(self) -> None:
        self._fragments.clear()
        self.hits = 0
        self.misses = 0
