from __future__ import annotations

import base64
import json
from typing import Any

import pytest

from pyconcat.exceptions import ExternalMapResolutionWarning


class MemoryReader:
    """Reader backed by a dict; records every path it was asked for."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files = dict(files or {})
        self.calls: list[str] = []

    def __call__(self, path: str) -> str:
        self.calls.append(path)
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None


def inline_map(document: dict[str, Any]) -> str:
    encoded = base64.b64encode(json.dumps(document).encode("utf-8")).decode("ascii")
    return f"data:application/json;charset=utf-8;base64,{encoded}"


@pytest.fixture
def reader() -> MemoryReader:
    return MemoryReader()


@pytest.fixture
def warnings_seen() -> list[ExternalMapResolutionWarning]:
    return []
