"""Assembler configuration for pyconcat."""

from __future__ import annotations

import dataclasses
import os
import posixpath
import re
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pyconcat._constants import DEFAULT_SEPARATOR
from pyconcat.exceptions import ConcatConfigError
from pyconcat.store.ordering import ensure_no_glob

_JS_SUFFIX_RE = re.compile(r"\.js$")


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


class MapCommentStyle(StrEnum):
    LINE = "line"
    BLOCK = "block"


@dataclasses.dataclass(frozen=True)
class ConcatConfig:
    """Configuration of one concatenation unit.

    Parameters
    ----------
    output_name : str
        Output identifier.  Its base name becomes the source map ``file``.
    separator : str
        Text placed between consecutive sections.  Defaults to ``"\\n"``.
    header : str or None
        Literal text rendered before everything else.
    footer : str or None
        Literal text rendered after everything else, followed by ``"\\n"``.
    header_files : tuple of str
        Identifiers rendered first, in this order.  No glob patterns.
    footer_files : tuple of str
        Identifiers rendered last, in this order.  No glob patterns.
    allow_empty : bool
        Produce a result even when no file was added.
    source_root : str or None
        Copied into the emitted map's ``sourceRoot``.
    input_root : str or None
        Directory the identifiers are relative to.  Used to resolve
        referenced maps and stripped from the sources they list.
    map_comment_style : MapCommentStyle
        ``line`` for ``//# sourceMappingURL=``, ``block`` for ``/*# ... */``.
    map_url : str or None
        URL written into the map reference comment.  Defaults to the base
        name of :attr:`resolved_map_file`.
    map_file : str or None
        Where the driver should write the map.  Requires ``map_url``.
    max_tracked_content_size : int or None
        Contents longer than this many characters are never memoised in
        an encoder cache.  Never truncates or rejects content.
    body_sort_key : callable or None
        Sort key applied to body identifiers.  Defaults to the identifier.
    """

    output_name: str
    separator: str = DEFAULT_SEPARATOR
    header: str | None = None
    footer: str | None = None
    header_files: tuple[str, ...] = ()
    footer_files: tuple[str, ...] = ()
    allow_empty: bool = False
    source_root: str | None = None
    input_root: str | None = None
    map_comment_style: MapCommentStyle = MapCommentStyle.LINE
    map_url: str | None = None
    map_file: str | None = None
    max_tracked_content_size: int | None = None
    body_sort_key: Callable[[str], Any] | None = None

    def __post_init__(self) -> None:
        if not self.output_name:
            raise ConcatConfigError("the output_name option is required")

        # Accept any iterable of identifiers but store tuples.
        object.__setattr__(self, "header_files", tuple(self.header_files or ()))
        object.__setattr__(self, "footer_files", tuple(self.footer_files or ()))
        ensure_no_glob("header_files", self.header_files)
        ensure_no_glob("footer_files", self.footer_files)

        try:
            object.__setattr__(self, "map_comment_style", MapCommentStyle(self.map_comment_style))
        except ValueError as exc:
            raise ConcatConfigError(f"unknown map_comment_style {self.map_comment_style!r}") from exc

        if self.map_file and not self.map_url:
            raise ConcatConfigError("must specify the map_url when setting a custom map_file")

        if self.max_tracked_content_size is not None and self.max_tracked_content_size < 0:
            raise ConcatConfigError("max_tracked_content_size must be non-negative")

    @property
    def file(self) -> str:
        """Base name of the output, used as the map's ``file`` field."""
        return posixpath.basename(self.output_name)

    @property
    def resolved_map_file(self) -> str:
        if self.map_file:
            return self.map_file
        return _JS_SUFFIX_RE.sub("", self.output_name) + ".map"

    @property
    def resolved_map_url(self) -> str:
        if self.map_url:
            return self.map_url
        return posixpath.basename(self.resolved_map_file)

    @classmethod
    def from_env(cls, **overrides: Any) -> ConcatConfig:
        """Create configuration from ``CONCAT_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ConcatConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CONCAT_OUTPUT_NAME": "output_name",
            "CONCAT_HEADER": "header",
            "CONCAT_FOOTER": "footer",
            "CONCAT_SOURCE_ROOT": "source_root",
            "CONCAT_INPUT_ROOT": "input_root",
            "CONCAT_MAP_COMMENT_STYLE": "map_comment_style",
            "CONCAT_MAP_URL": "map_url",
            "CONCAT_MAP_FILE": "map_file",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Identifier lists are comma separated.
        for env_key, field_name in (("CONCAT_HEADER_FILES", "header_files"), ("CONCAT_FOOTER_FILES", "footer_files")):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = tuple(part.strip() for part in val.split(",") if part.strip())

        if "allow_empty" not in overrides:
            config_kwargs["allow_empty"] = _env_bool(env.get("CONCAT_ALLOW_EMPTY"), False)

        size_env = env.get("CONCAT_MAX_TRACKED_CONTENT_SIZE")
        if size_env is not None and "max_tracked_content_size" not in overrides:
            try:
                config_kwargs["max_tracked_content_size"] = int(size_env)
            except ValueError as exc:
                raise ConcatConfigError(f"CONCAT_MAX_TRACKED_CONTENT_SIZE must be an integer, got {size_env!r}") from exc

        config_kwargs.update(overrides)
        config_kwargs.setdefault("output_name", "")
        return cls(**config_kwargs)
