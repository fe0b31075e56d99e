"""Custom exceptions for lyricquiz."""


class LyricQuizError(Exception):
    """Base exception for lyricquiz."""
    pass


class AlignmentError(LyricQuizError):
    """Alignment was asked to compare malformed input."""
    pass


class EmptyCorpusError(LyricQuizError):
    """No song in the corpus can produce a question."""
    pass


class InsufficientDistractorsError(LyricQuizError):
    """The corpus has too few distinct lines for a multiple-choice round."""
    pass


class InvalidChoiceInput(LyricQuizError, ValueError):
    """A multiple-choice selection was not a number in range."""
    pass


class FlagMismatchError(LyricQuizError):
    """Per-character display flags do not line up with their text."""
    pass


class CorpusNotFoundError(LyricQuizError):
    """The lyrics directory does not exist or is not a directory."""
    pass
