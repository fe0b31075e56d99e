"""Greedy character alignment for grading lyric guesses.

This module implements the two pieces of the scoring engine that compare text:
- A greedy insert/delete alignment with bounded lookahead (``diff_greedy``)
- A truncation search on top of it (``optimal_truncated_dist``) that lets a
  guess trail off early or carry stray trailing characters without being
  penalized for them

The alignment is deterministic and cheap, not globally minimal: it is meant
for short lyric lines where a left-to-right greedy trace is good enough.
"""

from __future__ import annotations

import math
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from lyricquiz.util.errors import AlignmentError
from lyricquiz.util.types import AlignmentResult, TruncationResult
from lyricquiz.analysis.normalization import comparison_form


@dataclass
class GreedyAlignmentConfig:
    """Configuration for the greedy lookahead.

    The window searched ahead of each cursor is
    ``max(min_lookahead, ceil(lookahead_ratio * remaining))`` where
    ``remaining`` is the longer of the two unconsumed tails.
    """
    lookahead_ratio: float = 0.5
    min_lookahead: int = 3


CharSequence = Union[str, Sequence[str]]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _as_text(seq: CharSequence, name: str) -> str:
    """Validate an input sequence and return it as a plain string."""
    if isinstance(seq, str):
        return seq
    if seq is None or not isinstance(seq, SequenceABC):
        raise AlignmentError(f"{name} must be a string or a sequence of characters, got {type(seq).__name__}")
    for idx, el in enumerate(seq):
        if not isinstance(el, str) or len(el) != 1:
            raise AlignmentError(f"{name}[{idx}] is not a single character: {el!r}")
    return "".join(seq)


def _lookahead_window(remaining: int, config: GreedyAlignmentConfig) -> int:
    """Number of positions searched ahead of a cursor."""
    return max(config.min_lookahead, math.ceil(config.lookahead_ratio * remaining))


def _find_ahead(seq: str, start: int, ch: str, window: int) -> Optional[int]:
    """Smallest k in [1, window] with seq[start + k] == ch, or None."""
    limit = min(window, len(seq) - start - 1)
    for k in range(1, limit + 1):
        if seq[start + k] == ch:
            return k
    return None


def _flags_to_ranges(flags: List[bool]) -> List[Tuple[int, int]]:
    """Coalesce flagged indices into maximal inclusive (start, end) spans."""
    ranges: List[Tuple[int, int]] = []
    start = None
    for idx, flagged in enumerate(flags):
        if flagged and start is None:
            start = idx
        elif not flagged and start is not None:
            ranges.append((start, idx - 1))
            start = None
    if start is not None:
        ranges.append((start, len(flags) - 1))
    return ranges


# =============================================================================
# MAIN FUNCTIONS
# =============================================================================

def diff_greedy(
    source: CharSequence,
    target: CharSequence,
    config: Optional[GreedyAlignmentConfig] = None,
) -> AlignmentResult:
    """Greedy insert/delete alignment of ``source`` (guess) against ``target`` (answer).

    Walks both sequences left to right. On a mismatch it looks a bounded
    distance ahead in each sequence for the other cursor's current character
    and skips the shorter gap, flagging skipped source characters as deleted
    and skipped target characters as inserted. Equal gaps skip the source.
    When neither side finds a match, both characters are flagged and both
    cursors advance. Leftovers at the end are flagged wholesale.

    Inputs are compared verbatim; callers fold case beforehand.

    Raises:
        AlignmentError: if either input is not a string or a sequence of
            single characters.
    """
    config = config or GreedyAlignmentConfig()
    s = _as_text(source, "source")
    t = _as_text(target, "target")
    n, m = len(s), len(t)

    deleted = [False] * n
    inserted = [False] * m
    i = j = 0

    while i < n and j < m:
        if s[i] == t[j]:
            i += 1
            j += 1
            continue

        window = _lookahead_window(max(n - i, m - j), config)
        skip_source = _find_ahead(s, i, t[j], window)
        skip_target = _find_ahead(t, j, s[i], window)

        if skip_source is None and skip_target is None:
            # No anchor nearby: treat as a substitution
            deleted[i] = True
            inserted[j] = True
            i += 1
            j += 1
        elif skip_target is None or (skip_source is not None and skip_source <= skip_target):
            for k in range(i, i + skip_source):
                deleted[k] = True
            i += skip_source
        else:
            for k in range(j, j + skip_target):
                inserted[k] = True
            j += skip_target

    for k in range(i, n):
        deleted[k] = True
    for k in range(j, m):
        inserted[k] = True

    return AlignmentResult(
        source_length=n,
        target_length=m,
        cost=sum(deleted) + sum(inserted),
        deleted=_flags_to_ranges(deleted),
        inserted=_flags_to_ranges(inserted),
    )


def optimal_truncated_dist(
    guess: str,
    answer: str,
    config: Optional[GreedyAlignmentConfig] = None,
) -> TruncationResult:
    """Find how many trailing guess characters to ignore to minimize cost.

    Tries every truncation ``t`` from 0 to ``len(guess) - 1`` (the guess is
    never truncated to nothing) and aligns ``guess[:len(guess) - t]`` against
    the answer. The lowest cost wins; ties go to the smallest ``t``.

    Both strings are case-folded here. Callers are expected to have refused
    guesses far shorter than the answer already (see
    ``lyricquiz.analysis.scoring.is_guess_long_enough``).
    """
    g = comparison_form(guess)
    a = comparison_form(answer)

    if not g:
        alignment = diff_greedy(g, a, config)
        return TruncationResult(truncate_amount=0, cost=alignment.cost, alignment=alignment)

    max_trunc = len(g) - 1
    alignments = [diff_greedy(g[: len(g) - t], a, config) for t in range(max_trunc + 1)]
    costs = np.fromiter((al.cost for al in alignments), dtype=np.int64, count=len(alignments))

    # argmin returns the first minimum, i.e. the least truncation
    best = int(np.argmin(costs))
    return TruncationResult(truncate_amount=best, cost=int(costs[best]), alignment=alignments[best])
