"""Source map (revision 3) documents.

:class:`SourceMap` is the document this library emits.  It is assembled
from scratch on every request and serialised with the camelCase keys the
format mandates, in a fixed key order.

:class:`ExternalSourceMap` is the permissive reading of an upstream map
referenced by one of the input files.  Unknown keys are ignored; missing
``mappings`` or ``sources`` fail validation, which callers treat as an
unresolvable map rather than an error.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from pyconcat._codec.vlq import decode_vlq
from pyconcat._constants import SOURCE_MAP_VERSION
from pyconcat.models._base import ConcatBaseModel


class SourceMap(ConcatBaseModel):
    version: int = SOURCE_MAP_VERSION
    sources: list[str] = Field(default_factory=list)
    sources_content: list[str | None] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    mappings: str = ""
    source_root: str | None = None
    file: str = ""

    def to_json(self) -> str:
        """Serialise compactly; ``sourceRoot`` only appears when set."""
        exclude = None if self.source_root is not None else {"source_root"}
        return self.model_dump_json(by_alias=True, exclude=exclude)


class ExternalSourceMap(ConcatBaseModel):
    version: int | None = None
    sources: list[str]
    sources_content: list[str | None] | None = None
    names: list[str] = Field(default_factory=list)
    mappings: str
    source_root: str | None = None
    file: str | None = None

    @field_validator("version")
    @classmethod
    def _supported_version(cls, value: int | None) -> int | None:
        if value is not None and value != SOURCE_MAP_VERSION:
            raise ValueError(f"unsupported source map version {value}")
        return value

    @field_validator("mappings")
    @classmethod
    def _well_formed_segments(cls, value: str) -> str:
        for line in value.split(";"):
            for segment in line.split(","):
                if segment and len(decode_vlq(segment)) not in (1, 4, 5):
                    raise ValueError(f"mapping segment {segment!r} must hold 1, 4 or 5 fields")
        return value
