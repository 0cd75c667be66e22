from __future__ import annotations

import pytest

from pyconcat import _map_url


@pytest.mark.parametrize(
    ("content", "stripped", "url"),
    [
        ("a()\n//# sourceMappingURL=a.js.map", "a()\n", "a.js.map"),
        ("a()\n//# sourceMappingURL=a.js.map\n\n", "a()\n", "a.js.map"),
        ("a()\n//@ sourceMappingURL=legacy.map", "a()\n", "legacy.map"),
        ("a()\n/*# sourceMappingURL=block.map */", "a()\n", "block.map"),
        ("a()\n/*\n//# sourceMappingURL=multi.map */", "a()\n", "multi.map"),
        (
            "a()\n//# sourceMappingURL=data:application/json;base64,eyJ9",
            "a()\n",
            "data:application/json;base64,eyJ9",
        ),
    ],
)
def test_split_trailing_reference(content: str, stripped: str, url: str) -> None:
    assert _map_url.split(content) == (stripped, url)


@pytest.mark.parametrize(
    "content",
    [
        "a()",
        "//# sourceMappingURL=a.js.map\na()",
        "var s = '# sourceMappingURL=nope';",
    ],
)
def test_no_trailing_reference(content: str) -> None:
    assert _map_url.split(content) == (content, None)
