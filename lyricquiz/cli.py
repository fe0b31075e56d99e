"""lyricquiz CLI - Command-line interface for the lyric-recall game.

Primary Commands:
  - play: Interactive game over the lyric corpus
  - check: Grade one guess against an answer and show the alignment
  - list: Show the loaded songs and whether they can produce questions
"""

from __future__ import annotations

import logging
from typing import NoReturn

import typer
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .analysis.alignment import GreedyAlignmentConfig, optimal_truncated_dist
from .analysis.sampling import make_rng, question_indices
from .analysis.scoring import is_guess_long_enough, score_distance
from .config import DISTRACTOR_COUNT, LOG_LEVEL, LYRICS_DIR
from .parsers.lyrics import LoaderConfig, load_songs_from_dir
from .pipelines.game_session import GameSession, GameSessionConfig
from .util.errors import CorpusNotFoundError, LyricQuizError
from .viewer.render import render_comparison


logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _load_corpus(lyrics_dir: str | None, loader: LoaderConfig | None = None):
	"""Load songs from --lyrics-dir or the configured default."""
	from pathlib import Path as _Path
	root = _Path(lyrics_dir) if lyrics_dir else LYRICS_DIR
	if not root.is_dir():
		raise CorpusNotFoundError(f"Lyrics directory not found: {root} (pass --lyrics-dir or set LYRICQUIZ_LYRICS_DIR)")
	return load_songs_from_dir(root, loader)


def _report_error(console: Console, e: LyricQuizError) -> NoReturn:
	# Corpus problems are fatal but still end the process normally
	console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
	raise typer.Exit(code=0)


@app.command(name="play")
def play_cmd(
	lyrics_dir: str | None = typer.Option(None, "--lyrics-dir", help="Folder of <album>/<title>.txt lyric files"),
	seed: int | None = typer.Option(None, help="Random seed for a reproducible game"),
	choices: int = typer.Option(DISTRACTOR_COUNT, "--choices", min=1, help="Wrong options shown in multiple choice"),
	clear: bool = typer.Option(True, help="Clear the screen between rounds"),
	intro: bool = typer.Option(True, help="Show the rules before the first round"),
	lookahead_ratio: float = typer.Option(0.5, help="Greedy alignment lookahead as a share of the remaining text"),
) -> None:
	"""Play the lyric-recall game."""
	console = Console()
	loader = LoaderConfig()
	try:
		songs = _load_corpus(lyrics_dir, loader)
	except LyricQuizError as e:
		_report_error(console, e)
	config = GameSessionConfig(
		distractor_count=choices,
		clear_screen=clear,
		show_intro=intro,
		alignment=GreedyAlignmentConfig(lookahead_ratio=lookahead_ratio),
		cleaning=loader.cleaning,
	)
	session = GameSession(songs, config=config, console=console, rng=make_rng(seed))
	try:
		final_score = session.run()
	except LyricQuizError as e:
		_report_error(console, e)
	except KeyboardInterrupt:
		final_score = session.score
	console.print(f"Final score: [green]{final_score}[/green]")


@app.command(name="check")
def check_cmd(
	guess: str = typer.Argument(..., help="The line as you remember it"),
	answer: str = typer.Argument(..., help="The correct line"),
	lookahead_ratio: float = typer.Option(0.5, help="Greedy alignment lookahead as a share of the remaining text"),
) -> None:
	"""Grade a single guess and show the character alignment."""
	guess = guess.rstrip()
	if not is_guess_long_enough(guess, answer):
		print("[yellow]Guess is significantly shorter than the answer; the game would ask again.[/yellow]")
		return
	result = optimal_truncated_dist(guess, answer, GreedyAlignmentConfig(lookahead_ratio=lookahead_ratio))
	scored = score_distance(result.cost)
	print(render_comparison(guess, answer, result))

	table = Table(title="Score")
	for col in ["truncated", "distance", "accepted", "points"]:
		table.add_column(col)
	table.add_row(
		str(result.truncate_amount),
		str(result.cost),
		"yes" if scored.accepted else "no",
		str(scored.points),
	)
	print(table)


@app.command(name="list")
def list_cmd(
	lyrics_dir: str | None = typer.Option(None, "--lyrics-dir", help="Folder of <album>/<title>.txt lyric files"),
) -> None:
	"""List loaded songs."""
	try:
		songs = _load_corpus(lyrics_dir)
	except LyricQuizError as e:
		_report_error(Console(), e)
	table = Table(title=f"Songs ({len(songs)})")
	for col in ["album", "title", "lines", "questions"]:
		table.add_column(col)
	for song in songs:
		table.add_row(
			escape(song.album),
			escape(song.title),
			str(len(song.lines)),
			str(len(question_indices(song))),
		)
	print(table)


if __name__ == "__main__":
	app()
