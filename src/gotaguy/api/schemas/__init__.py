"""Pydantic models for API I/O."""

from .round import (
    AttemptResponse,
    DailyStatusResponse,
    GuessRequest,
    RoundResponse,
    RoundSummaryResponse,
    SubjectResponse,
)

__all__ = [
    "AttemptResponse",
    "DailyStatusResponse",
    "GuessRequest",
    "RoundResponse",
    "RoundSummaryResponse",
    "SubjectResponse",
]
