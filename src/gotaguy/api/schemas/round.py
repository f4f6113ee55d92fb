from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel


class GuessRequest(BaseModel):
    guess: str


class SubjectResponse(BaseModel):
    name: str
    position: str
    division: str
    team: str
    league: str
    ethnicity: str = ""
    image: str | None = None
    fun_fact: str | None = None


class AttemptResponse(BaseModel):
    index: int
    guess: str
    feedback: List[str]
    display: str


class RoundResponse(BaseModel):
    round_id: str
    date: str
    rules: str
    attempts: List[AttemptResponse]
    terminated: bool
    won: bool
    attempts_remaining: int
    max_attempts: int
    accepted: bool | None = None
    subject: SubjectResponse | None = None


class RoundSummaryResponse(BaseModel):
    round_id: str
    date: str
    attempts: int
    terminated: bool
    won: bool
    created_at: datetime
    updated_at: datetime


class DailyStatusResponse(BaseModel):
    date: str
    available: bool
