"""Internal constants shared across the library."""

import re

DEFAULT_SEPARATOR = "\n"
SOURCE_MAP_VERSION = 3

# Extensions that get a source map when the factory picks a strategy.
DEFAULT_MAP_EXTENSIONS: tuple[str, ...] = ("js",)

# ------------------------------------------------------------------
# Glob detection for header/footer file lists
# ------------------------------------------------------------------

# Plain wildcards, character classes, brace sets and extglob groups.
GLOB_PATTERN = re.compile(r"[*?\[\]{}]|[!+@](?=\()")

# ------------------------------------------------------------------
# Map reference comments appended to map-aware results
# ------------------------------------------------------------------

LINE_COMMENT_TEMPLATE = "//# sourceMappingURL={url}\n"
BLOCK_COMMENT_TEMPLATE = "/*# sourceMappingURL={url} */\n"

# Generated line +1, same source, original line +1, original column 0.
IDENTITY_LINE_SEGMENT = "AACA"


def has_glob(value: str) -> bool:
    """Return ``True`` when *value* contains glob metacharacters."""
    return GLOB_PATTERN.search(value) is not None
