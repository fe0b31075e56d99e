"""Corpus sampling: question selection and multiple-choice distractors.

Every function takes the random generator explicitly so a seeded
``numpy.random.Generator`` makes rounds reproducible.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from lyricquiz.config import DISTRACTOR_ATTEMPTS_FACTOR, DISTRACTOR_COUNT
from lyricquiz.util.errors import EmptyCorpusError, InsufficientDistractorsError
from lyricquiz.util.types import Question, Song


logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Return a generator; pass a seed for deterministic games."""
    return np.random.default_rng(seed)


def question_indices(song: Song) -> List[int]:
    """Indices k where lines[k] and lines[k + 1] form a valid question."""
    return [k for k in range(len(song.lines) - 1) if song.lines[k] != song.lines[k + 1]]


def eligible_songs(songs: Sequence[Song]) -> List[Tuple[Song, List[int]]]:
    """Songs that can produce at least one question, with their usable indices."""
    out: List[Tuple[Song, List[int]]] = []
    for song in songs:
        indices = question_indices(song)
        if indices:
            out.append((song, indices))
    return out


def pick_random_guess(songs: Sequence[Song], rng: np.random.Generator) -> Question:
    """Pick a song uniformly, then a shown/answer line pair uniformly within it.

    Raises:
        EmptyCorpusError: if no song has two adjacent distinct lines.
    """
    candidates = eligible_songs(songs)
    if not candidates:
        raise EmptyCorpusError(
            f"No song in the corpus has two consecutive lines to quiz on ({len(songs)} songs loaded)"
        )
    song, indices = candidates[int(rng.integers(len(candidates)))]
    k = indices[int(rng.integers(len(indices)))]
    logger.debug("Picked line %d of %r (%s)", k, song.title, song.album)
    return Question(shown_line=song.lines[k], answer=song.lines[k + 1], song=song, line_index=k)


def pick_distractors(
    answer: str,
    songs: Sequence[Song],
    rng: np.random.Generator,
    count: int = DISTRACTOR_COUNT,
    *,
    attempts_factor: int = DISTRACTOR_ATTEMPTS_FACTOR,
) -> List[str]:
    """Sample ``count`` corpus lines that differ (case-insensitively) from the answer and each other.

    Lines are drawn uniformly from the whole corpus, so songs with more lines
    contribute more distractors. Gives up after ``attempts_factor * count``
    draws.

    Raises:
        InsufficientDistractorsError: if the corpus is too small for ``count``.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if count == 0:
        return []

    pool = [line for song in songs for line in song.lines]
    if not pool:
        raise InsufficientDistractorsError("The corpus has no lines to draw distractors from")

    seen = {answer.casefold()}
    picked: List[str] = []
    max_attempts = attempts_factor * count
    attempts = 0
    while len(picked) < count:
        if attempts >= max_attempts:
            raise InsufficientDistractorsError(
                f"Found only {len(picked)} of {count} distinct distractors after {attempts} draws; "
                "add more songs or lower the number of choices"
            )
        attempts += 1
        line = pool[int(rng.integers(len(pool)))]
        key = line.casefold()
        if key in seen:
            continue
        seen.add(key)
        picked.append(line)

    logger.debug("Collected %d distractors in %d draws", count, attempts)
    return picked


def build_choices(
    question: Question,
    songs: Sequence[Song],
    rng: np.random.Generator,
    count: int = DISTRACTOR_COUNT,
) -> List[str]:
    """Distractors plus the answer, shuffled."""
    choices = pick_distractors(question.answer, songs, rng, count)
    choices.append(question.answer)
    order = rng.permutation(len(choices))
    return [choices[int(i)] for i in order]
