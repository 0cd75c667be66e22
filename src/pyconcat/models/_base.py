"""Base model for source map documents.

Source map JSON uses camelCase keys (``sourcesContent``, ``sourceRoot``).
Every model inherits from :class:`ConcatBaseModel`, which maps those keys
to snake_case fields with ``alias_generator=to_camel`` and serialises
back with the original spelling.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ConcatBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
