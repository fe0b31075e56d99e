"""Core data types for the lyricquiz scoring and sampling engine.

This module defines the fundamental data structures shared by the corpus
loader, the alignment engine, the sampler and the game session.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class Song:
    """A song loaded from the lyric corpus.

    Attributes:
        album: Album the song belongs to
        title: Song title
        lyrics_raw: Lyrics exactly as read from disk (used to show the full song)
        lines: Non-empty, trimmed lyric lines in order

    Songs are immutable after load and shared by every question drawn from them.
    """
    album: str
    title: str
    lyrics_raw: str
    lines: Tuple[str, ...]


@dataclass(frozen=True)
class Question:
    """One round's prompt: a shown line and the line that follows it.

    Invariant: song.lines[line_index] == shown_line and
    song.lines[line_index + 1] == answer, with shown_line != answer.
    """
    shown_line: str
    answer: str
    song: Song
    line_index: int


@dataclass
class AlignmentResult:
    """Greedy insert/delete alignment between a source and a target sequence.

    Attributes:
        source_length: Length of the source (the guess)
        target_length: Length of the target (the answer)
        cost: Number of unmatched characters (deleted + inserted)
        deleted: Inclusive (start_idx, end_idx) spans present only in the source
        inserted: Inclusive (start_idx, end_idx) spans present only in the target

    Invariant: every source index is either matched or inside exactly one
    deleted span, every target index is either matched or inside exactly one
    inserted span, and spans are maximal (adjacent flagged indices are merged).

    Example:
        source "abxd", target "abcd" gives deleted [(2, 2)] and inserted [(2, 2)]
        with cost 2.
    """
    source_length: int
    target_length: int
    cost: int
    deleted: List[Tuple[int, int]] = field(default_factory=list)   # [(start_idx, end_idx), ...]
    inserted: List[Tuple[int, int]] = field(default_factory=list)  # [(start_idx, end_idx), ...]


@dataclass
class TruncationResult:
    """Best truncation of a guess against an answer.

    Attributes:
        truncate_amount: Trailing guess characters ignored for scoring
        cost: Alignment cost after truncation
        alignment: Alignment of the truncated guess against the answer
    """
    truncate_amount: int
    cost: int
    alignment: AlignmentResult
