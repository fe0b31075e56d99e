"""Test configuration and fixtures.

Provides reusable fixtures for:
- In-memory songs and small corpora
- Scripted player input for the interactive session
- A recording console whose output can be inspected
"""

import io
from typing import Callable, Iterable, List, Sequence, Union

import pytest
from rich.console import Console

from lyricquiz.util.types import Song


def make_song(lines: Sequence[str], album: str = "Album", title: str = "Song") -> Song:
    """Build a Song directly from already-clean lines."""
    return Song(album=album, title=title, lyrics_raw="\n".join(lines), lines=tuple(lines))


Response = Union[str, Callable[[str], str]]


class ScriptedInput:
    """Feeds canned answers to prompts; raises EOFError once exhausted."""

    def __init__(self, responses: Iterable[Response]):
        self.responses: List[Response] = list(responses)
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise EOFError
        nxt = self.responses.pop(0)
        return nxt(prompt) if callable(nxt) else nxt


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), record=True, width=200)


@pytest.fixture
def sea_song() -> Song:
    return make_song(["I love you", "deeper than the sea"], album="Ocean", title="Depths")


@pytest.fixture
def twenty_line_corpus() -> List[Song]:
    first = make_song([f"first song line {i}" for i in range(10)], title="One")
    second = make_song([f"second song line {i}" for i in range(10)], title="Two")
    return [first, second]
