"""Execution contexts: where evaluation writes its output."""

from __future__ import annotations

import io
from typing import Protocol, TextIO


class Context(Protocol):
    """Passed through every evaluation call; exposes the output sink."""

    @property
    def output(self) -> TextIO: ...


class SimpleContext:
    """Context writing to a caller-supplied stream."""

    def __init__(self, output: TextIO):
        self._output = output

    @property
    def output(self) -> TextIO:
        return self._output


class DummyContext:
    """Context capturing output in memory."""

    def __init__(self) -> None:
        self._output = io.StringIO()

    @property
    def output(self) -> TextIO:
        return self._output

    def getvalue(self) -> str:
        return self._output.getvalue()
