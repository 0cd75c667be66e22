"""Resolution of source maps referenced by input files.

A reference is recorded as soon as a file is added, and it is read and
decoded again on every render, so edits to a referenced map or to its
original sources show up even when the referencing file is unchanged.
The record only remembers the last failure, which keeps an unchanged
broken reference from warning on every render.
"""

from __future__ import annotations

import base64
import logging
import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

from pyconcat._logsafe import shorten
from pyconcat._text import ensure_posix, ensure_posix_eol
from pyconcat.exceptions import ExternalMapResolutionWarning
from pyconcat.models.source_map import ExternalSourceMap

_logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
WarningSink = Callable[[ExternalMapResolutionWarning], None]

_BASE64_DATA_URI_RE = re.compile(r"^data:.+?;base64,")
_DATA_URI_RE = re.compile(r"^data:[^,]*,")


def read_text(path: str) -> str:
    """Default reader: UTF-8 file contents with POSIX line terminators."""
    return ensure_posix_eol(Path(path).read_text(encoding="utf-8"))


def log_warning(warning: ExternalMapResolutionWarning) -> None:
    """Default warning sink."""
    _logger.warning(
        "Ignoring input source map for %s (%s) because %s",
        warning.identifier,
        shorten(warning.url),
        warning.reason,
    )


@dataclass(frozen=True, slots=True)
class ResolvedMap:
    """An upstream map ready to be merged.

    ``sources`` are already rewritten relative to the input root and
    ``sources_content`` always has exactly one item per source.
    """

    external: ExternalSourceMap
    sources: list[str]
    sources_content: list[str | None]

    @property
    def names(self) -> list[str]:
        return self.external.names

    @property
    def mappings(self) -> str:
        return self.external.mappings


@dataclass(slots=True)
class ExternalMapRecord:
    url: str
    failure: str | None = None


class ExternalMapResolver:
    """Read and decode referenced maps through an injectable reader."""

    def __init__(self, *, input_root: str | None = None, reader: Reader | None = None) -> None:
        self._input_root = input_root
        self._reader = reader or read_text

    def resolve(
        self,
        identifier: str,
        record: ExternalMapRecord,
        warn: WarningSink,
    ) -> ResolvedMap | None:
        """Resolve *record* against the current contents of its files.

        A failure is reported through *warn* unless the previous attempt
        failed for the same reason.
        """
        try:
            external = self.load(identifier, record.url)
            resolved = ResolvedMap(
                external=external,
                sources=self.rewrite_sources(external.sources),
                sources_content=self.sources_content(external, identifier),
            )
        except (OSError, ValueError) as exc:
            reason = str(exc) or type(exc).__name__
            if reason != record.failure:
                warn(ExternalMapResolutionWarning(identifier, record.url, reason))
            record.failure = reason
            return None

        record.failure = None
        _logger.debug("Resolved source map for %s with %d sources", identifier, len(resolved.sources))
        return resolved

    def resolve_file(self, identifier: str) -> str:
        if self._input_root and not identifier.startswith("/"):
            return os.path.join(self._input_root, identifier)
        return identifier

    def load(self, identifier: str, url: str) -> ExternalSourceMap:
        """Decode the map behind *url*.

        Inline ``data:`` URIs are decoded directly.  Absolute paths are
        read from the input root when one is configured; anything else is
        read relative to the directory of the referencing file.
        """
        base64_match = _BASE64_DATA_URI_RE.match(url)
        if base64_match:
            payload = url[base64_match.end() :]
            # Padding is optional in inline maps.
            payload += "=" * (-len(payload) % 4)
            raw = base64.b64decode(payload, validate=True).decode("utf-8")
        elif (data_match := _DATA_URI_RE.match(url)) is not None:
            raw = unquote(url[data_match.end() :])
        elif self._input_root and url.startswith("/"):
            raw = self._reader(os.path.join(self._input_root, url.lstrip("/")))
        else:
            raw = self._reader(os.path.join(os.path.dirname(self.resolve_file(identifier)), url))

        return ExternalSourceMap.model_validate_json(raw)

    def rewrite_sources(self, sources: list[str]) -> list[str]:
        root = self._input_root
        if not root:
            return list(sources)
        root = ensure_posix(root).rstrip("/")
        rewritten: list[str] = []
        for source in sources:
            if source.startswith(root + "/"):
                source = source[len(root) + 1 :]
            rewritten.append(source)
        return rewritten

    def sources_content(self, external: ExternalSourceMap, identifier: str) -> list[str | None]:
        if external.sources_content is not None:
            content = list(external.sources_content)
        else:
            # Look for the original sources next to the referencing file.
            base_dir = os.path.dirname(self.resolve_file(identifier))
            content = [
                self._reader(source if os.path.isabs(source) else os.path.join(base_dir, source))
                for source in external.sources
            ]

        del content[len(external.sources) :]
        content.extend([None] * (len(external.sources) - len(content)))
        return content
