from __future__ import annotations

from pyconcat._codec.coder import CoderState
from pyconcat.mapping import CacheHint, EncoderCache, MappingGenerator
from pyconcat.mapping.resolver import ResolvedMap
from pyconcat.models.source_map import ExternalSourceMap

_UPSTREAM = ExternalSourceMap(
    sources=["x.ts", "y.ts"],
    sources_content=["x", "y"],
    mappings="AAAA;AACA;AACA;ACAA",
)
_CONTENT = "l0\nl1\nl2\nl3"


def _resolved() -> ResolvedMap:
    return ResolvedMap(external=_UPSTREAM, sources=list(_UPSTREAM.sources), sources_content=["x", "y"])


def _generator_after_plain_file() -> MappingGenerator:
    generator = MappingGenerator()
    assert generator.add_entry("a.js", "//a\n") == "AAAA;"
    return generator


class TestCursor:
    def test_add_space_without_line_break_moves_column(self) -> None:
        generator = MappingGenerator()

        assert generator.add_space("/* x */") == ""
        assert generator.column == 7
        assert generator.lines_mapped == 0

    def test_add_space_with_line_breaks(self) -> None:
        generator = MappingGenerator()

        assert generator.add_space("a\nb\ncd") == ";;"
        assert generator.lines_mapped == 2
        assert generator.column == 2

    def test_begin_section_line_separator_defers_token(self) -> None:
        generator = MappingGenerator()
        generator.add_entry("a.js", "a")

        assert generator.begin_section("\n") == ""
        assert generator.lines_mapped == 1
        assert generator.column == 0
        assert MappingGenerator.finalize(["AAAA", "ACAA"], "\n") == "AAAA;ACAA"

    def test_begin_section_other_separator(self) -> None:
        generator = MappingGenerator()
        generator.add_entry("a.js", "a")

        assert generator.begin_section(";\n") == ";"
        assert generator.column == 0
        assert MappingGenerator.finalize(["AAAA", ";ACAA"], ";\n") == "AAAA;ACAA"

    def test_tail_line_gets_a_segment(self) -> None:
        generator = MappingGenerator()

        assert generator.add_entry("a.js", "a\nb\nc") == "AAAA;AACA;AACA"
        assert generator.column == 1
        assert generator.add_entry("b.js", "d") == ",CCFA"


class TestMerge:
    def test_assimilate_offsets_sources(self) -> None:
        generator = _generator_after_plain_file()

        mapping, content = generator.assimilate(_CONTENT, _resolved())

        assert mapping == "ACAA;AACA;AACA;ACAA"
        assert content == _CONTENT
        assert generator.sources == ["a.js", "x.ts", "y.ts"]
        assert generator.sources_content == ["//a\n", "x", "y"]
        assert generator.lines_mapped == 4
        assert generator.column == 2

    def test_first_line_is_shifted_by_column(self) -> None:
        generator = MappingGenerator()
        generator.add_space("/**/")
        resolved = ResolvedMap(
            external=ExternalSourceMap(sources=["x.ts"], mappings="AAAA,EAAE;AACA"),
            sources=["x.ts"],
            sources_content=[None],
        )

        mapping, _ = generator.assimilate("ab\ncd", resolved)

        assert mapping == "IAAA,EAAE;AACA"

    def test_cache_hint_gives_identical_output(self) -> None:
        plain = _generator_after_plain_file()
        start = plain.lines_mapped
        expected, _ = plain.assimilate(_CONTENT, _resolved())
        hint = CacheHint(lines=plain.lines_mapped - start, state=plain.encoder.state)
        assert hint.state == CoderState(source=2, original_line=2)

        hinted = _generator_after_plain_file()
        mapping, _ = hinted.assimilate(_CONTENT, _resolved(), cache_hint=hint)

        assert mapping == expected
        assert hinted.lines_mapped == plain.lines_mapped
        assert hinted.encoder.state == plain.encoder.state

    def test_generated_column_only_segments_are_kept(self) -> None:
        generator = MappingGenerator()

        assert generator.merge_mappings("AAAA,C;AACA", 0, 0) == "AAAA,C;AACA"
        assert generator.lines_mapped == 1

    def test_to_source_map(self) -> None:
        generator = MappingGenerator()
        mapping = generator.add_entry("a.js", "a")

        source_map = generator.to_source_map(mapping, file="out.js", source_root="/src")

        assert source_map.sources == ["a.js"]
        assert source_map.sources_content == ["a"]
        assert source_map.mappings == "AAAA"
        assert source_map.file == "out.js"
        assert source_map.source_root == "/src"


def test_shared_cache_between_generators() -> None:
    cache = EncoderCache()
    first = MappingGenerator(cache=cache)
    second = MappingGenerator(cache=cache)

    assert first.add_entry("a.js", "a\nb") == second.add_entry("a.js", "a\nb")
    assert cache.misses == 1
    assert cache.hits == 1
