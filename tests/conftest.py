from __future__ import annotations

from typing import IO, List

import pytest


class CountingOpener:
    """Opens real files for reading and remembers every handle it handed out."""

    def __init__(self) -> None:
        self.handles: List[IO[str]] = []

    def __call__(self, path: str) -> IO[str]:
        handle = open(path, "r", encoding="utf-8", newline="")
        self.handles.append(handle)
        return handle

    @property
    def open_handles(self) -> list[IO[str]]:
        return [h for h in self.handles if not h.closed]


@pytest.fixture
def counting_opener() -> CountingOpener:
    return CountingOpener()
