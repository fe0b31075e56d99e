"""Lyric corpus loader.

Songs are plain UTF-8 text files laid out as ``<root>/<album>/<title>.txt``.
The album is taken from the parent directory name and the title from the file
stem, with underscores read as spaces. Each file holds the lyrics, one sung
line per line; blank lines and bracketed section headers are ignored when the
question lines are derived.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from ..analysis.normalization import LineCleaningConfig, split_lyric_lines
from ..util.types import Song


logger = logging.getLogger(__name__)


@dataclass
class LoaderConfig:
	"""Configuration for reading lyric files."""
	extensions: tuple = (".txt",)
	recursive: bool = True
	cleaning: LineCleaningConfig = field(default_factory=LineCleaningConfig)


def decode_lyrics_bytes(data: bytes) -> str:
	"""Decode lyric file bytes as UTF-8, stripping a BOM if present."""
	text_content = data.decode("utf-8", errors="replace")
	if text_content.startswith('\ufeff'):
		text_content = text_content[1:]  # Remove BOM
	return text_content


def title_from_path(path: Path) -> str:
	"""Derive a display title from a lyric file name."""
	return path.stem.replace("_", " ").strip()


def parse_song(raw: str, *, album: str, title: str, config: Optional[LoaderConfig] = None) -> Song:
	"""Build a Song from raw lyric text."""
	config = config or LoaderConfig()
	lines = split_lyric_lines(raw, config.cleaning)
	return Song(album=album, title=title, lyrics_raw=raw, lines=tuple(lines))


def load_song_file(path: Path, *, album: Optional[str] = None, config: Optional[LoaderConfig] = None) -> Song:
	"""Read one lyric file; album defaults to the parent directory name."""
	raw = decode_lyrics_bytes(path.read_bytes())
	return parse_song(
		raw,
		album=album if album is not None else path.parent.name.replace("_", " "),
		title=title_from_path(path),
		config=config,
	)


def load_songs_from_files(paths: Iterable[Path], config: Optional[LoaderConfig] = None) -> List[Song]:
	"""Load songs from explicit file paths, keeping their order.

	Missing files raise ``FileNotFoundError``; files without any lyric line are
	skipped with a warning.
	"""
	songs: List[Song] = []
	for p in paths:
		p = Path(p)
		if not p.is_file():
			raise FileNotFoundError(f"Lyrics file not found: {p}")
		song = load_song_file(p, config=config)
		if not song.lines:
			logger.warning("Skipping %s: no lyric lines", p)
			continue
		songs.append(song)
	logger.info("Loaded %d songs", len(songs))
	return songs


def find_lyric_files(root: Path, config: Optional[LoaderConfig] = None) -> List[Path]:
	"""List lyric files under ``root`` in a stable (sorted) order."""
	config = config or LoaderConfig()
	if not root.is_dir():
		raise NotADirectoryError(f"Lyrics directory not found: {root}")
	candidates = root.rglob("*") if config.recursive else root.iterdir()
	return sorted(p for p in candidates if p.is_file() and p.suffix.lower() in config.extensions)


def load_songs_from_dir(root: Path, config: Optional[LoaderConfig] = None) -> List[Song]:
	"""Load every lyric file found under ``root``."""
	return load_songs_from_files(find_lyric_files(Path(root), config), config)
