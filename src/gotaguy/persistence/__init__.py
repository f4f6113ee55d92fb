"""Persistence layer for storing rounds between guesses."""

from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from gotaguy.config import get_rules
from gotaguy.engine import Feedback, GuessAttempt, Round
from gotaguy.models import Subject


class RoundConflict(Exception):
    def __init__(self, round_id: str, expected_attempts: Optional[int]):
        super().__init__(f"Round {round_id} no longer has {expected_attempts} attempts")
        self.round_id = round_id
        self.expected_attempts = expected_attempts


@dataclass
class RoundRecord:
    round_id: str
    date_key: str
    rules_key: str
    subject: dict
    attempts: List[dict]
    terminated: bool
    created_at: datetime
    updated_at: datetime

    def to_round(self) -> Round:
        return Round(
            subject=Subject.model_validate(self.subject),
            rules=get_rules(self.rules_key),
            attempts=tuple(
                GuessAttempt(
                    text=item["text"],
                    index=int(item["index"]),
                    feedback=Feedback(tuple(item["labels"])),
                )
                for item in self.attempts
            ),
            terminated=self.terminated,
        )


def _attempts_payload(state: Round) -> list[dict]:
    return [
        {"text": attempt.text, "index": attempt.index, "labels": list(attempt.feedback.labels)}
        for attempt in state.attempts
    ]


class RoundStore:
    """Simple SQLite-backed store for game rounds."""

    def __init__(self, db_path: Path | str):
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
            self._use_uri = False
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS rounds (
                    id TEXT PRIMARY KEY,
                    date_key TEXT NOT NULL,
                    rules_key TEXT NOT NULL,
                    subject_json TEXT NOT NULL,
                    attempts_json TEXT NOT NULL,
                    attempt_count INTEGER NOT NULL DEFAULT 0,
                    terminated INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.commit()

    def create_round(
        self,
        state: Round,
        *,
        date_key: str,
        round_id: Optional[str] = None,
    ) -> RoundRecord:
        round_id = round_id or uuid4().hex
        now_iso = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO rounds (
                    id, date_key, rules_key, subject_json, attempts_json,
                    attempt_count, terminated, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    round_id,
                    date_key,
                    state.rules.key,
                    json.dumps(state.subject.model_dump()),
                    json.dumps(_attempts_payload(state)),
                    len(state.attempts),
                    int(state.terminated),
                    now_iso,
                    now_iso,
                ),
            )
            conn.commit()
        record = self.get_round(round_id)
        if record is None:  # pragma: no cover
            raise KeyError(f"Round {round_id} not found after insert")
        return record

    def save_round(
        self,
        round_id: str,
        state: Round,
        *,
        expected_attempts: Optional[int] = None,
    ) -> RoundRecord:
        """Persist the attempts and terminal flag of an existing round.

        With ``expected_attempts`` the write only applies while the stored
        round still holds that many attempts; otherwise ``RoundConflict`` is
        raised and nothing changes.
        """

        now_iso = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE rounds
                SET attempts_json = ?, attempt_count = ?, terminated = ?, updated_at = ?
                WHERE id = ? AND (? IS NULL OR attempt_count = ?)
                """,
                (
                    json.dumps(_attempts_payload(state)),
                    len(state.attempts),
                    int(state.terminated),
                    now_iso,
                    round_id,
                    expected_attempts,
                    expected_attempts,
                ),
            )
            conn.commit()
            if cursor.rowcount == 0:
                exists = conn.execute("SELECT 1 FROM rounds WHERE id = ?", (round_id,)).fetchone()
                if exists is None:
                    raise KeyError(f"Round {round_id} not found")
                raise RoundConflict(round_id, expected_attempts)
        record = self.get_round(round_id)
        if record is None:  # pragma: no cover
            raise KeyError(f"Round {round_id} not found after update")
        return record

    def get_round(self, round_id: Optional[str]) -> Optional[RoundRecord]:
        if not round_id:
            return None
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM rounds WHERE id = ?", (round_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    def list_rounds(self, *, date_key: str | None = None, limit: int = 50) -> List[RoundRecord]:
        query = "SELECT * FROM rounds"
        params: list[str | int] = []
        if date_key:
            query += " WHERE date_key = ?"
            params.append(date_key)
        query += " ORDER BY datetime(created_at) DESC, created_at DESC LIMIT ?"
        params.append(limit)
        with self._connect() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_record(row) for row in rows]

    def _row_to_record(self, row: sqlite3.Row) -> RoundRecord:
        return RoundRecord(
            round_id=row["id"],
            date_key=row["date_key"],
            rules_key=row["rules_key"],
            subject=json.loads(row["subject_json"]),
            attempts=json.loads(row["attempts_json"]),
            terminated=bool(row["terminated"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
