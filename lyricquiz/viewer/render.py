"""Terminal rendering of graded guesses, songs and multiple-choice screens.

The alignment engine only reports index spans; this module turns them into
per-character flags and colorized ``rich`` renderables.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Sequence

from rich.table import Table
from rich.text import Text

from ..analysis.normalization import LineCleaningConfig, clean_lyric_line
from ..util.errors import FlagMismatchError
from ..util.types import AlignmentResult, Song, TruncationResult


class CharFlag(IntEnum):
	MATCHED = 0
	DELETED = 1
	TRUNCATED = 2
	INSERTED = 3


FLAG_STYLES = {
	CharFlag.MATCHED: "",
	CharFlag.DELETED: "bold red",
	CharFlag.TRUNCATED: "bold yellow",
	CharFlag.INSERTED: "bold red",
}


def guess_flags(guess_length: int, alignment: AlignmentResult, truncate_amount: int = 0) -> List[CharFlag]:
	"""Classify each guess character as matched, deleted or truncated (ignored)."""
	if alignment.source_length + truncate_amount != guess_length:
		raise FlagMismatchError(
			f"Alignment covers {alignment.source_length} + {truncate_amount} truncated characters, "
			f"guess has {guess_length}"
		)
	flags = [CharFlag.MATCHED] * guess_length
	for start, end in alignment.deleted:
		for i in range(start, end + 1):
			flags[i] = CharFlag.DELETED
	for i in range(guess_length - truncate_amount, guess_length):
		flags[i] = CharFlag.TRUNCATED
	return flags


def answer_flags(answer_length: int, alignment: AlignmentResult) -> List[CharFlag]:
	"""Classify each answer character as matched or inserted (missing from the guess)."""
	if alignment.target_length != answer_length:
		raise FlagMismatchError(
			f"Alignment covers {alignment.target_length} answer characters, answer has {answer_length}"
		)
	flags = [CharFlag.MATCHED] * answer_length
	for start, end in alignment.inserted:
		for i in range(start, end + 1):
			flags[i] = CharFlag.INSERTED
	return flags


def flagged_text(text: str, flags: Sequence[CharFlag]) -> Text:
	"""Colorize ``text`` character by character; lengths must agree."""
	if len(text) != len(flags):
		raise FlagMismatchError(f"Got {len(flags)} flags for {len(text)} characters: {text!r}")
	out = Text()
	for ch, flag in zip(text, flags):
		out.append(ch, style=FLAG_STYLES[flag])
	return out


def render_comparison(guess: str, answer: str, result: TruncationResult) -> Table:
	"""Two aligned rows: the player's guess over the correct answer."""
	g_flags = guess_flags(len(guess), result.alignment, result.truncate_amount)
	a_flags = answer_flags(len(answer), result.alignment)
	grid = Table.grid(padding=(0, 1))
	grid.add_column(justify="right", style="bold blue")
	grid.add_column()
	grid.add_row("Your Answer:", flagged_text(guess, g_flags))
	grid.add_row("Correct Answer:", flagged_text(answer, a_flags))
	return grid


def render_song(song: Song, highlighted_line: str, cleaning: Optional[LineCleaningConfig] = None) -> Text:
	"""Full song lyrics with a header, highlighting the line that was shown.

	Raw lines are cleaned with ``cleaning`` before comparing, so pass the
	same config the corpus was loaded with.
	"""
	out = Text(f"{song.album} : {song.title}\n", style="bold green")
	for raw_line in song.lyrics_raw.splitlines():
		if clean_lyric_line(raw_line, cleaning) == highlighted_line:
			out.append(raw_line, style="bold green")
		else:
			out.append(raw_line)
		out.append("\n")
	return out


def render_choices(choices: Sequence[str]) -> Text:
	"""Numbered multiple-choice options, starting at 1."""
	out = Text()
	for idx, choice in enumerate(choices, start=1):
		out.append(f"{idx})", style="bold blue")
		out.append(f" {choice}\n")
	return out
