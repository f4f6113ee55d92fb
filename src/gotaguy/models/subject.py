"""Canonical subject model for the day's answer."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Subject(BaseModel):
    """The featured player a round is played against."""

    name: str = Field(..., min_length=1)
    position: str
    division: str
    team: str
    league: str
    ethnicity: str = ""
    image: Optional[str] = None
    fun_fact: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("ethnicity", mode="before")
    @classmethod
    def _blank_ethnicity(cls, value: object) -> object:
        return "" if value is None else value
