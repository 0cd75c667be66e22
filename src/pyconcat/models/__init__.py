"""Pydantic models for entries and source map documents."""

from pyconcat.models.entry import FILE_ZONES, Entry, Zone
from pyconcat.models.source_map import ExternalSourceMap, SourceMap

__all__ = [
    "FILE_ZONES",
    "Entry",
    "ExternalSourceMap",
    "SourceMap",
    "Zone",
]
