"""Tracked concatenation entries."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, field_validator

from pyconcat.models._base import ConcatBaseModel


class Zone(StrEnum):
    """Output region of a fragment, in rendering order."""

    HEADER_LITERAL = "header_literal"
    HEADER_FILE = "header_file"
    BODY = "body"
    FOOTER_FILE = "footer_file"
    FOOTER_LITERAL = "footer_literal"


FILE_ZONES: frozenset[Zone] = frozenset({Zone.HEADER_FILE, Zone.BODY, Zone.FOOTER_FILE})


class Entry(ConcatBaseModel):
    """One whole-file fragment held by the store."""

    identifier: str = Field(..., description="POSIX-style path relative to the input root")
    content: str = ""
    zone: Zone = Zone.BODY

    @field_validator("identifier")
    @classmethod
    def _non_empty_identifier(cls, value: str) -> str:
        if not value:
            raise ValueError("identifier must be non-empty")
        return value

    @field_validator("zone")
    @classmethod
    def _file_zone(cls, value: Zone) -> Zone:
        if value not in FILE_ZONES:
            raise ValueError(f"entries cannot live in the {value} zone")
        return value

    def with_content(self, content: str) -> Entry:
        return self.model_copy(update={"content": content})
