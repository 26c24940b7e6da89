"""Scripted analysis provider for testing."""

from __future__ import annotations


class FakeAnalysisProvider:
    """Returns a fixed text, or raises a fixed error, and records every call."""

    def __init__(self, text: str = "Short report.", error: Exception | None = None) -> None:
        self._text = text
        self._error = error
        self.calls: list[tuple[str, str]] = []

    async def get_analysis(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self._error is not None:
            raise self._error
        return self._text
