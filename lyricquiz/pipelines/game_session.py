"""Interactive lyric-recall game.

Each round shows a line from a random song and asks for the next one. Free
text guesses are graded with the truncation optimizer and the scoring policy;
"?" falls back to multiple choice, "/" gives up on the round, and "?t", "?p",
"?s" spend lifelines. The game ends on the first rejected answer, after which
the player may restart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

import numpy as np
from rich.console import Console
from rich.markup import escape

from ..analysis.alignment import GreedyAlignmentConfig, optimal_truncated_dist
from ..analysis.normalization import LineCleaningConfig
from ..analysis.sampling import build_choices, eligible_songs, make_rng, pick_random_guess
from ..analysis.scoring import (
    ScoringConfig,
    abort_distance,
    is_guess_long_enough,
    multiple_choice_distance,
    score_distance,
)
from ..config import (
    DISTRACTOR_COUNT,
    MAX_ACCEPTABLE_DIST,
    MIN_GUESS_SLACK,
    PERFECT_BONUS,
    PREVIOUS_LINES_SHOWN,
)
from ..util.errors import EmptyCorpusError, InvalidChoiceInput
from ..util.types import Question, Song, TruncationResult
from ..viewer.render import render_choices, render_comparison, render_song
from .lifelines import LIFELINE_BY_COMMAND, Lifeline, LifelineInventory, random_lifeline


logger = logging.getLogger(__name__)

MULTIPLE_CHOICE_COMMAND = "?"
ABORT_COMMAND = "/"
RESTART_COMMAND = "r"


@dataclass
class GameSessionConfig:
    """Configuration for a game session."""
    max_acceptable_dist: int = MAX_ACCEPTABLE_DIST
    perfect_bonus: int = PERFECT_BONUS
    min_guess_slack: int = MIN_GUESS_SLACK
    distractor_count: int = DISTRACTOR_COUNT
    previous_lines_shown: int = PREVIOUS_LINES_SHOWN
    clear_screen: bool = True
    show_intro: bool = True
    lifeline_on_perfect: bool = True
    alignment: GreedyAlignmentConfig = field(default_factory=GreedyAlignmentConfig)
    cleaning: LineCleaningConfig = field(default_factory=LineCleaningConfig)

    def scoring(self) -> ScoringConfig:
        return ScoringConfig(
            max_acceptable_dist=self.max_acceptable_dist,
            perfect_bonus=self.perfect_bonus,
            min_guess_slack=self.min_guess_slack,
        )


@dataclass
class RoundResult:
    """What happened in one round."""
    question: Question
    guess: str
    outcome: str  # "perfect" | "correct" | "incorrect" | "skipped"
    points: int
    distance: Optional[int] = None
    truncation: Optional[TruncationResult] = None
    multiple_choice: bool = False
    new_lifeline: Optional[Lifeline] = None


def parse_choice(raw: str, num_choices: int) -> int:
    """Turn a 1-based multiple-choice entry into a 0-based index.

    Raises:
        InvalidChoiceInput: for anything that is not a number in 1..num_choices.
    """
    cleaned = raw.strip()
    if not cleaned.isdecimal():
        raise InvalidChoiceInput(f"Not a number: {raw!r}")
    value = int(cleaned)
    if not 1 <= value <= num_choices:
        raise InvalidChoiceInput(f"Choice {value} is outside 1..{num_choices}")
    return value - 1


INTRO_TEXT = """[bold blue]Welcome to the lyric guessing game![/bold blue]

In this game, you will be shown a line from a song. You will then be prompted to enter the following line. If your guess is close enough to the correct answer, you will score points (and you earn a bonus if your guess is a perfect match).

If you do not know what the next line is, enter a question mark ('?') and you will be given {num_choices} choices for the next line. Enter a number 1-{num_choices}; the correct answer scores only 1 point. Enter '/' to give up on a round.

You also hold lifelines: '?t' shows the song title, '?p' shows the previous lines and '?s' skips the question. A perfect match earns you a new one.

After each round, press the enter key to continue, or enter '?' to view the full lyrics of the song.

The game ends as soon as you submit an incorrect answer.

Good luck! And have fun!"""


class GameSession:
    """One player's game over a loaded corpus."""

    def __init__(
        self,
        songs: Sequence[Song],
        config: Optional[GameSessionConfig] = None,
        console: Optional[Console] = None,
        input_fn: Optional[Callable[[str], str]] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.songs = list(songs)
        self.config = config or GameSessionConfig()
        self.console = console or Console()
        self.input_fn = input_fn or self.console.input
        self.rng = rng if rng is not None else make_rng()
        self.score = 0
        self.inventory = LifelineInventory()
        self.rounds: List[RoundResult] = []

    # ------------------------------------------------------------------
    # Game flow
    # ------------------------------------------------------------------

    def run(self) -> int:
        """Play until the player quits or input ends; returns the final score.

        Raises:
            EmptyCorpusError: if no loaded song can produce a question.
        """
        if not eligible_songs(self.songs):
            raise EmptyCorpusError(f"None of the {len(self.songs)} loaded songs has two consecutive lines")

        try:
            if self.config.show_intro:
                self.print_intro()
            while True:
                result = self.play_round()
                if result.outcome == "incorrect":
                    if not self._offer_restart(result.question):
                        break
                    self.reset()
                    continue
                response = self._ask("Press enter to continue ('?' to show song): ")
                if response == MULTIPLE_CHOICE_COMMAND:
                    self.console.print(render_song(result.question.song, result.question.shown_line, self.config.cleaning))
                    self._ask("Press enter to continue: ")
        except EOFError:
            logger.info("Input closed, ending the game")

        logger.info("Game finished with score %d after %d rounds", self.score, len(self.rounds))
        return self.score

    def print_intro(self) -> None:
        self._clear()
        self.console.print(INTRO_TEXT.format(num_choices=self.config.distractor_count + 1))
        self._ask("Press enter to begin.")
        self._clear()

    def reset(self) -> None:
        """Start over: zero score and a fresh lifeline inventory."""
        self.score = 0
        self.inventory = LifelineInventory()

    def play_round(self) -> RoundResult:
        """Ask one question and grade the answer."""
        question = pick_random_guess(self.songs, self.rng)
        self._clear()
        self.console.print(f"Your current score is [green]{self.score}[/green]. What line follows:")
        self.console.print(f"\t[bold blue]{escape(question.shown_line)}[/bold blue]")
        self.console.print(self.inventory.describe())

        while True:
            guess = self._ask(">>> ")
            if guess == MULTIPLE_CHOICE_COMMAND:
                return self._multiple_choice_round(question)
            if guess == ABORT_COMMAND:
                return self._finish(question, guess, abort_distance(self.config.scoring()))

            lifeline = LIFELINE_BY_COMMAND.get(guess)
            if lifeline is not None:
                skipped = self._use_lifeline(lifeline, question)
                if skipped is not None:
                    return skipped
                continue

            if not guess.strip():
                self.console.print("Type the line that follows, or '?' for multiple choice.")
                continue

            if not is_guess_long_enough(guess, question.answer, self.config.scoring()):
                self.console.print(
                    "Try guessing again: your guess was significantly shorter than the programmed answer"
                )
                continue

            truncation = optimal_truncated_dist(guess, question.answer, self.config.alignment)
            self.console.print(render_comparison(guess, question.answer, truncation))
            return self._finish(question, guess, truncation.cost, truncation=truncation)

    # ------------------------------------------------------------------
    # Round helpers
    # ------------------------------------------------------------------

    def _multiple_choice_round(self, question: Question) -> RoundResult:
        self.console.print("Reducing to a multiple choice challenge:")
        choices = build_choices(question, self.songs, self.rng, self.config.distractor_count)
        self.console.print(render_choices(choices))

        while True:
            raw = self._ask(">>> ")
            if raw == ABORT_COMMAND:
                chosen = raw
                correct = False
                break
            try:
                chosen = choices[parse_choice(raw, len(choices))]
            except InvalidChoiceInput:
                self.console.print("That's not a valid choice!")
                continue
            correct = chosen == question.answer
            break

        if not correct:
            self.console.print(f"The correct answer was: [bold green]{escape(question.answer)}[/bold green]")
        distance = multiple_choice_distance(correct, self.config.scoring())
        return self._finish(question, chosen, distance, multiple_choice=True)

    def _use_lifeline(self, kind: Lifeline, question: Question) -> Optional[RoundResult]:
        """Apply a lifeline; returns a result only when the round is skipped."""
        if kind is Lifeline.SHOW_PREV_LINES and question.line_index == 0:
            self.console.print("This is the first line of the song, there is nothing before it.")
            return None
        if not self.inventory.consume(kind):
            self.console.print(f"You don't have any [bold]{kind.label}[/bold] lifelines left!")
            return None

        if kind is Lifeline.SHOW_TITLE_ALBUM:
            song = question.song
            self.console.print(f"[bold green]{escape(song.album)} : {escape(song.title)}[/bold green]")
            return None

        if kind is Lifeline.SHOW_PREV_LINES:
            start = max(0, question.line_index - self.config.previous_lines_shown)
            for line in question.song.lines[start:question.line_index]:
                self.console.print(f"\t[dim]{escape(line)}[/dim]")
            self.console.print(f"\t[bold blue]{escape(question.shown_line)}[/bold blue]")
            return None

        self.console.print(f"Skipped question. The next line was: [bold green]{escape(question.answer)}[/bold green]")
        result = RoundResult(question=question, guess="", outcome="skipped", points=0)
        self.rounds.append(result)
        return result

    def _finish(
        self,
        question: Question,
        guess: str,
        distance: int,
        *,
        truncation: Optional[TruncationResult] = None,
        multiple_choice: bool = False,
    ) -> RoundResult:
        scored = score_distance(distance, self.config.scoring())
        new_lifeline: Optional[Lifeline] = None

        if not scored.accepted:
            outcome = "incorrect"
            self.console.print("That wasn't it! The game is over now, thanks for playing!")
        elif scored.perfect:
            outcome = "perfect"
            self.console.print(
                f"Yes! You scored {scored.points} points for your [bold green]perfect match[/bold green]!"
            )
            if self.config.lifeline_on_perfect:
                new_lifeline = random_lifeline(self.rng)
                self.inventory.grant(new_lifeline)
                self.console.print(f"You also got a [bold]{new_lifeline.label}[/bold] lifeline!")
        else:
            outcome = "correct"
            self.console.print(f"Correct! You scored {scored.points} points for your answer.")

        self.score += scored.points
        result = RoundResult(
            question=question,
            guess=guess,
            outcome=outcome,
            points=scored.points,
            distance=distance,
            truncation=truncation,
            multiple_choice=multiple_choice,
            new_lifeline=new_lifeline,
        )
        self.rounds.append(result)
        logger.info("Round %d: %s, distance=%d, points=%d", len(self.rounds), outcome, distance, scored.points)
        return result

    def _offer_restart(self, question: Question) -> bool:
        """Game-over prompt; True when the player asks to restart."""
        response = self._ask("Press enter to quit ('?' to show song, 'r' to restart): ")
        if response == MULTIPLE_CHOICE_COMMAND:
            self.console.print(render_song(question.song, question.shown_line, self.config.cleaning))
            return self._ask("Press enter to quit, r to restart: ") == RESTART_COMMAND
        return response == RESTART_COMMAND

    def _ask(self, prompt: str) -> str:
        return self.input_fn(prompt).rstrip()

    def _clear(self) -> None:
        if self.config.clear_screen:
            self.console.clear()
