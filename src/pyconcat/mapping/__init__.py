"""Source map generation: identity encoding, assimilation and resolution."""

from pyconcat.mapping.cache import EncoderCache, IdentityFragment, fingerprint, identity_fragment
from pyconcat.mapping.generator import CacheHint, MappingGenerator
from pyconcat.mapping.resolver import (
    ExternalMapRecord,
    ExternalMapResolver,
    Reader,
    ResolvedMap,
    WarningSink,
    log_warning,
    read_text,
)

__all__ = [
    "CacheHint",
    "EncoderCache",
    "ExternalMapRecord",
    "ExternalMapResolver",
    "IdentityFragment",
    "MappingGenerator",
    "Reader",
    "ResolvedMap",
    "WarningSink",
    "fingerprint",
    "identity_fragment",
    "log_warning",
    "read_text",
]
