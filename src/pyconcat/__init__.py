"""pyconcat - Incremental file concatenation with source maps."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyconcat")
except PackageNotFoundError:
    __version__ = "0+local"
from pyconcat.assemblers import BaseAssembler, PlainAssembler, PositionMapAssembler
from pyconcat.config import ConcatConfig, MapCommentStyle
from pyconcat.exceptions import (
    AssemblerDisposedError,
    ConcatConfigError,
    ConcatError,
    DuplicateEntryError,
    EmptyResultError,
    ExternalMapResolutionWarning,
    UnknownEntryError,
)
from pyconcat.factory import create_assembler, select_strategy
from pyconcat.mapping import CacheHint, EncoderCache, MappingGenerator
from pyconcat.models import Entry, SourceMap, Zone
from pyconcat.store import OrderedEntryStore

__all__ = [
    "__version__",
    "AssemblerDisposedError",
    "BaseAssembler",
    "CacheHint",
    "ConcatConfig",
    "ConcatConfigError",
    "ConcatError",
    "DuplicateEntryError",
    "EmptyResultError",
    "EncoderCache",
    "Entry",
    "ExternalMapResolutionWarning",
    "MapCommentStyle",
    "MappingGenerator",
    "OrderedEntryStore",
    "PlainAssembler",
    "PositionMapAssembler",
    "SourceMap",
    "UnknownEntryError",
    "Zone",
    "create_assembler",
    "select_strategy",
]
