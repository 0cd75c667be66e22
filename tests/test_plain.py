from __future__ import annotations

from typing import Any

import pytest

from pyconcat.assemblers import PlainAssembler
from pyconcat.config import ConcatConfig
from pyconcat.exceptions import AssemblerDisposedError, EmptyResultError


def _assembler(**kwargs: Any) -> PlainAssembler:
    kwargs.setdefault("output_name", "out.css")
    return PlainAssembler(ConcatConfig(**kwargs))


def _add(assembler: PlainAssembler, *identifiers: str) -> None:
    for identifier in identifiers:
        assembler.add_file(identifier, "//" + identifier.removesuffix(".js"))


class TestSeparator:
    def test_empty_separator_concatenates_directly(self) -> None:
        assembler = _assembler(separator="")
        _add(assembler, "c.js", "a/b.js", "b.js", "a.js", "a/a.js")

        assert assembler.result() == "//a//a/a//a/b//b//c"

    def test_default_separator_is_a_line_break(self) -> None:
        assembler = _assembler()
        assembler.add_file("y.css", "Y")
        assembler.add_file("x.css", "X")

        assert assembler.result() == "X\nY"

    def test_custom_separator(self) -> None:
        assembler = _assembler(separator=";\n")
        assembler.add_file("a.js", "a()")
        assembler.add_file("b.js", "b()")

        assert assembler.result() == "a();\nb()"


class TestHeaderAndFooter:
    def test_header_literal_comes_first(self) -> None:
        assembler = _assembler(separator="", header="should be first")
        _add(assembler, "a.js")

        assert assembler.result() == "should be first//a"

    def test_footer_literal_ends_with_line_break(self) -> None:
        assembler = _assembler(separator="", footer="should be last")
        _add(assembler, "a.js")

        assert assembler.result() == "//ashould be last\n"

    def test_header_and_footer_files(self) -> None:
        assembler = _assembler(separator="", header_files=["b.js", "a/a.js"], footer_files=["a.js"])
        _add(assembler, "c.js", "a/b.js", "b.js", "a.js", "a/a.js")

        assert assembler.result() == "//b//a/a//a/b//c//a"

    def test_every_section_separated(self) -> None:
        assembler = _assembler(header="/* head */", footer="/* foot */", header_files=["h.css"])
        assembler.add_file("body.css", "body {}")
        assembler.add_file("h.css", "html {}")

        assert assembler.result() == "/* head */\nhtml {}\nbody {}\n/* foot */\n"


class TestIncremental:
    def test_update_and_remove_are_reflected(self) -> None:
        assembler = _assembler(separator="")
        _add(assembler, "a.js", "b.js")
        assembler.update_file("a.js", "//A")
        assert assembler.result() == "//A//b"

        assembler.remove_file("a.js")
        assert assembler.result() == "//b"

    def test_result_is_repeatable(self) -> None:
        assembler = _assembler()
        _add(assembler, "a.js", "b.js")

        assert assembler.result() == assembler.result()


class TestEmpty:
    def test_nothing_added_raises(self) -> None:
        assembler = _assembler()

        with pytest.raises(EmptyResultError, match="Concat: nothing was added to out.css"):
            assembler.result()

    def test_everything_removed_raises(self) -> None:
        assembler = _assembler()
        _add(assembler, "a.js")
        assembler.remove_file("a.js")

        with pytest.raises(EmptyResultError):
            assembler.result()

    def test_allow_empty(self) -> None:
        assert _assembler(allow_empty=True).result() == ""

    def test_allow_empty_keeps_literals(self) -> None:
        assembler = _assembler(allow_empty=True, header="h", footer="f")

        assert assembler.result() == "h\nf\n"

    def test_empty_file_still_gets_separators(self) -> None:
        assembler = _assembler()
        assembler.add_file("a.css", "a")
        assembler.add_file("b.css", "")
        assembler.add_file("c.css", "c")

        assert assembler.result() == "a\n\nc"


def test_disposed_assembler_rejects_calls() -> None:
    assembler = _assembler()
    _add(assembler, "a.js")
    assembler.dispose()

    assert assembler.disposed
    assert len(assembler.store) == 0
    with pytest.raises(AssemblerDisposedError):
        assembler.add_file("b.js", "b")
    with pytest.raises(AssemblerDisposedError):
        assembler.result()

    # Disposing twice is harmless.
    assembler.dispose()
