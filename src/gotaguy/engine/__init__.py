"""Guess evaluation and round progression."""

from .round import (
    NO_MATCH_MARKER,
    Feedback,
    GuessAttempt,
    Round,
    evaluate,
    initialize,
    is_terminated,
    submit_guess,
)

__all__ = [
    "NO_MATCH_MARKER",
    "Feedback",
    "GuessAttempt",
    "Round",
    "evaluate",
    "initialize",
    "is_terminated",
    "submit_guess",
]
