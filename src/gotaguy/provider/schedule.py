"""Load a dated subject schedule from CSV."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from pydantic import BaseModel, ValidationError

from gotaguy.models import Subject


DEFAULT_SCHEDULE_MAPPING = {
    "date": "date",
    "name": "name",
    "position": "position",
    "division": "division",
    "team": "team",
    "league": "league",
    "ethnicity": "ethnicity",
    "image": "image",
    "fun_fact": "fun_fact",
}


class ScheduleRow(BaseModel):
    raw_date: str
    raw_name: str
    raw_position: str
    raw_division: str
    raw_team: str
    raw_league: str
    raw_ethnicity: Optional[str] = None
    raw_image: Optional[str] = None
    raw_fun_fact: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "ScheduleRow":
        def extract(key: str, *, default: Optional[str] = None) -> Optional[str]:
            spec = mapping.get(key, DEFAULT_SCHEDULE_MAPPING.get(key))
            if spec is None:
                return default
            if "|" in spec:
                columns: Sequence[str] = tuple(part.strip() for part in spec.split("|"))
                parts = [row.get(col, "").strip() for col in columns if row.get(col)]
                return " ".join(parts) if parts else default
            value = row.get(spec)
            return value.strip() if value is not None else default

        return cls(
            raw_date=extract("date", default="") or "",
            raw_name=extract("name", default="") or "",
            raw_position=extract("position", default="") or "",
            raw_division=extract("division", default="") or "",
            raw_team=extract("team", default="") or "",
            raw_league=extract("league", default="") or "",
            raw_ethnicity=extract("ethnicity"),
            raw_image=extract("image") or None,
            raw_fun_fact=extract("fun_fact") or None,
        )

    def to_subject(self) -> Subject:
        return Subject(
            name=self.raw_name,
            position=self.raw_position,
            division=self.raw_division,
            team=self.raw_team,
            league=self.raw_league,
            ethnicity=self.raw_ethnicity,
            image=self.raw_image,
            fun_fact=self.raw_fun_fact,
        )


def load_schedule_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> Dict[str, Subject]:
    """Read ``date -> Subject`` rows; later rows for the same date win."""

    mapping = mapping or DEFAULT_SCHEDULE_MAPPING
    schedule: Dict[str, Subject] = {}
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, raw in enumerate(reader, start=2):
            row = ScheduleRow.from_mapping(raw, mapping)
            if not row.raw_date:
                raise ValueError(f"{path.name}:{line_no}: missing date")
            try:
                schedule[row.raw_date] = row.to_subject()
            except ValidationError as exc:
                raise ValueError(f"{path.name}:{line_no}: invalid subject: {exc}") from exc
    return schedule
