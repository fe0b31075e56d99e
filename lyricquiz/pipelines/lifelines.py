"""Lifelines: one-off helps the player can spend during a round."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

import numpy as np


class Lifeline(str, Enum):
    SHOW_TITLE_ALBUM = "show_title_album"
    SHOW_PREV_LINES = "show_prev_lines"
    SKIP = "skip"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def command(self) -> str:
        """What the player types to use this lifeline."""
        return _COMMANDS[self]


_LABELS = {
    Lifeline.SHOW_TITLE_ALBUM: "Show Title",
    Lifeline.SHOW_PREV_LINES: "Show Previous Lines",
    Lifeline.SKIP: "Skip Question",
}

_COMMANDS = {
    Lifeline.SHOW_TITLE_ALBUM: "?t",
    Lifeline.SHOW_PREV_LINES: "?p",
    Lifeline.SKIP: "?s",
}

LIFELINE_BY_COMMAND: Dict[str, Lifeline] = {cmd: kind for kind, cmd in _COMMANDS.items()}


def random_lifeline(rng: np.random.Generator) -> Lifeline:
    """Pick one of the lifeline kinds uniformly."""
    kinds = list(Lifeline)
    return kinds[int(rng.integers(len(kinds)))]


def _starting_counts() -> Dict[Lifeline, int]:
    return {kind: 1 for kind in Lifeline}


@dataclass
class LifelineInventory:
    """Per-kind lifeline counters; counts never go below zero."""
    counts: Dict[Lifeline, int] = field(default_factory=_starting_counts)

    def count(self, kind: Lifeline) -> int:
        return self.counts.get(kind, 0)

    def consume(self, kind: Lifeline) -> bool:
        """Spend one lifeline of ``kind``; False when none are left."""
        if self.count(kind) > 0:
            self.counts[kind] -= 1
            return True
        return False

    def grant(self, kind: Lifeline) -> None:
        self.counts[kind] = self.count(kind) + 1

    def describe(self) -> str:
        """Rich markup summary of the inventory."""
        rows = ["You currently have:"]
        for kind in Lifeline:
            rows.append(f"\t{kind.label} Lifelines ({kind.command}): [bold red]{self.count(kind)}[/bold red]")
        return "\n".join(rows)
