"""Tests for the base64 VLQ primitive and the relative-delta coder."""

from __future__ import annotations

import pytest

from pyconcat._codec.coder import Coder, CoderState, Segment
from pyconcat._codec.vlq import decode_vlq, encode_values, encode_vlq

# ------------------------------------------------------------------
# VLQ
# ------------------------------------------------------------------


class TestVlq:
    @pytest.mark.parametrize(
        ("value", "encoded"),
        [
            (0, "A"),
            (1, "C"),
            (-1, "D"),
            (3, "G"),
            (15, "e"),
            (16, "gB"),
            (-16, "hB"),
            (123, "2H"),
        ],
    )
    def test_known_encodings(self, value: int, encoded: str) -> None:
        assert encode_vlq(value) == encoded
        assert decode_vlq(encoded) == [value]

    def test_decode_packed_values(self) -> None:
        assert decode_vlq("AAAA") == [0, 0, 0, 0]
        assert decode_vlq("gBhBC") == [16, -16, 1]

    def test_encode_values(self) -> None:
        assert encode_values([3, 1, 0, 0]) == "GCAA"

    def test_invalid_character_rejected(self) -> None:
        with pytest.raises(ValueError, match="invalid base64 VLQ character"):
            decode_vlq("AA!A")

    def test_truncated_sequence_rejected(self) -> None:
        with pytest.raises(ValueError, match="truncated"):
            decode_vlq("Ag")


# ------------------------------------------------------------------
# Coder
# ------------------------------------------------------------------


class TestCoder:
    def test_encode_is_relative_to_previous_segment(self) -> None:
        coder = Coder()
        assert coder.encode(Segment(0, 0, 0, 0)) == "AAAA"
        assert coder.encode(Segment(3, 1, 0, 0)) == "GCAA"
        assert coder.encode(Segment(8, 2, 0, 0)) == "KCAA"

    def test_decode_accumulates(self) -> None:
        coder = Coder()
        assert coder.decode("AAAA") == Segment(0, 0, 0, 0)
        assert coder.decode("GCAA") == Segment(3, 1, 0, 0)
        assert coder.decode("AACAC") == Segment(3, 1, 1, 0, 1)

    def test_generated_column_only_segment(self) -> None:
        coder = Coder()
        assert coder.decode("K") == Segment(5)
        assert coder.state == CoderState(generated_column=5)

    def test_reset_column_and_adjust_line(self) -> None:
        coder = Coder()
        coder.encode(Segment(7, 0, 0, 0))
        coder.reset_column()
        coder.adjust_line(2)
        # Two lines were emitted elsewhere, so original line 3 is one step on.
        assert coder.encode(Segment(0, 0, 3, 0)) == "AACA"

    def test_state_round_trip(self) -> None:
        coder = Coder()
        coder.encode(Segment(4, 2, 9, 1, 3))
        snapshot = coder.state

        other = Coder(snapshot)
        assert other.state == snapshot
        assert other.encode(Segment(5, 2, 9, 1, 3)) == coder.encode(Segment(5, 2, 9, 1, 3))

    def test_wrong_field_count_rejected(self) -> None:
        with pytest.raises(ValueError, match="has 2 fields"):
            Coder().decode("AA")

    def test_source_requires_original_position(self) -> None:
        with pytest.raises(ValueError):
            Coder().encode(Segment(0, source=1))
