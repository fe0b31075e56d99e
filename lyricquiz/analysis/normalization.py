"""Lyric text normalization for loading and guess comparison.

Two kinds of normalization live here:
- Line cleaning, applied once when the corpus is loaded (whitespace, section
  headers like "[Chorus]").
- Comparison folding, applied to guesses and answers right before alignment.
  Folding is strictly one character in, one character out, so alignment
  indices stay valid for the original text when it is rendered.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class LineCleaningConfig:
    """Configuration for corpus line cleaning."""
    drop_section_headers: bool = True  # "[Chorus]", "[Verse 2: Artist]"
    unicode_nfc: bool = True


_QUOTE_AND_DASH_MAP = str.maketrans({
    "‘": "'", "’": "'", "‚": "'", "′": "'",
    "“": '"', "”": '"', "„": '"', "«": '"', "»": '"',
    "–": "-", "—": "-", "−": "-",
    "\u00a0": " ",
})

_SECTION_HEADER_RE = re.compile(r"^\[[^\[\]]*\]$")


def canonicalize_quotes_and_dashes(text: str) -> str:
    """Standardize curly quotes, long dashes and non-breaking spaces."""
    # Examples: "Don’t" → "Don't", "now — forever" → "now - forever"
    return text.translate(_QUOTE_AND_DASH_MAP)


def fold_case(text: str) -> str:
    """Lowercase ``text`` without changing its length.

    Characters whose lowercase form expands (e.g. "İ" → "i̇") are kept as-is.
    """
    out = []
    for ch in text:
        low = ch.lower()
        out.append(low if len(low) == 1 else ch)
    return "".join(out)


def comparison_form(text: str) -> str:
    """Return the length-preserving form of ``text`` used for alignment."""
    return fold_case(canonicalize_quotes_and_dashes(text))


def is_section_header(line: str) -> bool:
    """True for structural markers such as "[Chorus]" that are not sung."""
    return bool(_SECTION_HEADER_RE.match(line.strip()))


def _normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    # Examples: "Hello   world  " → "Hello world"
    return re.sub(r"\s+", " ", text).strip()


def clean_lyric_line(text: str, config: Optional[LineCleaningConfig] = None) -> str:
    """Clean a single raw lyric line; returns "" when the line should be dropped."""
    config = config or LineCleaningConfig()
    s = unicodedata.normalize("NFC", text) if config.unicode_nfc else text
    s = _normalize_whitespace(s)
    if config.drop_section_headers and is_section_header(s):
        return ""
    return s


def split_lyric_lines(raw: str, config: Optional[LineCleaningConfig] = None) -> List[str]:
    """Split raw lyrics into the ordered list of non-empty cleaned lines."""
    config = config or LineCleaningConfig()
    lines: List[str] = []
    for raw_line in raw.splitlines():
        line = clean_lyric_line(raw_line, config)
        if line:
            lines.append(line)
    return lines
