"""Errors raised while evaluating CMake code."""

from __future__ import annotations


class AnalysisError(Exception):
    """An evaluation or analysis step could not produce a result."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"