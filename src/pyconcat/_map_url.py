"""Detect and strip embedded ``sourceMappingURL`` comments.

Only a reference at the very end of the content counts, either as a
line comment (``//# sourceMappingURL=...``) or as a block comment
(``/*# sourceMappingURL=... */``).  The legacy ``@`` marker is accepted
in place of ``#``.
"""

from __future__ import annotations

import re

_INNER = r"[#@] sourceMappingURL=([^\s'\"]*)"

_MAP_URL_RE = re.compile(
    r"(?:"
    r"/\*(?:\s*\r?\n(?://)?)?(?:" + _INNER + r")\s*\*/"
    r"|"
    r"//(?:" + _INNER + r")"
    r")\s*\Z"
)


def split(content: str) -> tuple[str, str | None]:
    """Return ``(content_without_reference, url)`` in one pass."""
    match = _MAP_URL_RE.search(content)
    if match is None:
        return content, None
    return content[: match.start()], match.group(1) or match.group(2) or ""
