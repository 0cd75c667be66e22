"""Keep file contents and inline maps out of log records.

Debug records name the entry being patched and show the start of its
content.  Map references may be ``data:`` URIs holding an entire base64
encoded map, which are reduced to their media type and payload size.
"""

from __future__ import annotations

_DATA_URI_PREFIX = "data:"


def shorten(text: str, *, max_string: int = 120) -> str:
    """Return *text* cut down to at most *max_string* characters plus a size note."""
    if text.startswith(_DATA_URI_PREFIX):
        header, _, payload = text.partition(",")
        return f"{header},<{len(payload)} chars>"
    if len(text) > max_string:
        return f"{text[:max_string]!r}...<{len(text)} chars>"
    return repr(text)
