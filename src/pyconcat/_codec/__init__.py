"""Source map mapping-stream codec primitives."""

from __future__ import annotations

from pyconcat._codec.coder import Coder, CoderState, Segment
from pyconcat._codec.vlq import decode_vlq, encode_values, encode_vlq

__all__ = [
    "Coder",
    "CoderState",
    "Segment",
    "decode_vlq",
    "encode_values",
    "encode_vlq",
]
