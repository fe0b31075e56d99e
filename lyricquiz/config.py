"""Project-level configuration for the lyric corpus location and game constants.

The corpus directory and log level can be overridden via environment variables:
- LYRICQUIZ_LYRICS_DIR: root lyrics dir (defaults to <project>/lyrics)
- LYRICQUIZ_LOG_LEVEL: logging level name (defaults to WARNING)
"""

import os
from pathlib import Path
from typing import Final


def _project_root() -> Path:
	"""Return an approximation of the project root (parent of the package)."""
	return Path(__file__).resolve().parents[1]


LYRICS_DIR: Final[Path] = Path(os.getenv("LYRICQUIZ_LYRICS_DIR", _project_root() / "lyrics"))
LOG_LEVEL: Final[str] = os.getenv("LYRICQUIZ_LOG_LEVEL", "WARNING").upper()

# Scoring
MAX_ACCEPTABLE_DIST: Final[int] = 13
PERFECT_BONUS: Final[int] = 26

# Guesses shorter than len(answer) - MIN_GUESS_SLACK are refused before scoring
MIN_GUESS_SLACK: Final[int] = 5

# Multiple choice shows DISTRACTOR_COUNT wrong lines plus the answer
DISTRACTOR_COUNT: Final[int] = 16
DISTRACTOR_ATTEMPTS_FACTOR: Final[int] = 50

PREVIOUS_LINES_SHOWN: Final[int] = 3
