from __future__ import annotations

from pyconcat._logsafe import shorten


def test_shorten_inline_map_reference() -> None:
    url = "data:application/json;charset=utf-8;base64," + "eyJ2ZXJzaW9uIjozfQ" * 40

    assert shorten(url) == "data:application/json;charset=utf-8;base64,<720 chars>"


def test_shorten_file_content_stays_on_one_line() -> None:
    assert shorten("var a = 1;\nvar b = 2;\n") == "'var a = 1;\\nvar b = 2;\\n'"


def test_shorten_long_file_content() -> None:
    content = "lib();\n" * 100

    assert shorten(content, max_string=14) == "'lib();\\nlib();\\n'...<700 chars>"


def test_shorten_relative_map_url() -> None:
    assert shorten("../maps/a.js.map") == "'../maps/a.js.map'"
