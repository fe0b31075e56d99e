"""Scoring policy: turn a final guess distance into points or game over.

Distances come either from the truncation optimizer (free-text guesses) or
from the fixed multiple-choice mapping below. Free-text points decay linearly
from ``max_acceptable_dist`` at distance 1 down to 1 at the boundary, and a
perfect match earns a flat bonus instead.
"""

from __future__ import annotations

from dataclasses import dataclass

from lyricquiz.config import MAX_ACCEPTABLE_DIST, MIN_GUESS_SLACK, PERFECT_BONUS


@dataclass
class ScoringConfig:
    """Thresholds for the scoring policy."""
    max_acceptable_dist: int = MAX_ACCEPTABLE_DIST
    perfect_bonus: int = PERFECT_BONUS
    min_guess_slack: int = MIN_GUESS_SLACK


@dataclass
class RoundScore:
    """Outcome of scoring one distance."""
    distance: int
    points: int
    accepted: bool
    perfect: bool


def score_distance(dist: int, config: ScoringConfig | None = None) -> RoundScore:
    """Map a distance to points.

    - 0 → ``perfect_bonus``
    - 1..max_acceptable_dist → ``max_acceptable_dist - dist + 1``
    - above the threshold → not accepted, 0 points (the game ends)
    """
    config = config or ScoringConfig()
    if dist < 0:
        raise ValueError(f"Distance must be non-negative, got {dist}")
    if dist == 0:
        return RoundScore(distance=0, points=config.perfect_bonus, accepted=True, perfect=True)
    if dist <= config.max_acceptable_dist:
        return RoundScore(distance=dist, points=config.max_acceptable_dist - dist + 1, accepted=True, perfect=False)
    return RoundScore(distance=dist, points=0, accepted=False, perfect=False)


def multiple_choice_distance(correct: bool, config: ScoringConfig | None = None) -> int:
    """Sentinel distance for a multiple-choice answer: 1 point if right, game over if wrong."""
    config = config or ScoringConfig()
    return config.max_acceptable_dist if correct else config.max_acceptable_dist + 1


def abort_distance(config: ScoringConfig | None = None) -> int:
    """Distance recorded when the player gives up on a round."""
    config = config or ScoringConfig()
    return config.max_acceptable_dist + 1


def is_guess_long_enough(guess: str, answer: str, config: ScoringConfig | None = None) -> bool:
    """Guesses far shorter than the answer are refused before they are scored."""
    config = config or ScoringConfig()
    return len(guess) >= len(answer) - config.min_guess_slack
