"""Fetch the daily subject from a Supabase (PostgREST) project."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from gotaguy.models import Subject


logger = logging.getLogger("uvicorn.error")
logger.setLevel(logging.INFO)

DAILY_TABLE = "daily_player"
DAILY_SELECT = "player_id,player:players(*)"


class SupabaseProvider:
    """Resolve ``daily_player`` joined with ``players`` for one date.

    One request per call and no retries; any failure is logged and reported as
    "no subject" so callers can show an empty state.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self._client = client
        self._timeout = timeout

    def _request(self, client: httpx.Client, date_key: str) -> httpx.Response:
        return client.get(
            f"{self.base_url}/rest/v1/{DAILY_TABLE}",
            params={"select": DAILY_SELECT, "date": f"eq.{date_key}"},
            headers=self._headers,
            timeout=self._timeout,
        )

    def fetch_rows(self, date_key: str) -> list[dict[str, Any]]:
        if self._client is not None:
            resp = self._request(self._client, date_key)
        else:
            with httpx.Client() as client:
                resp = self._request(client, date_key)
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, list):
            raise ValueError(f"Unexpected payload type {type(payload).__name__}")
        return payload

    def get_subject(self, date_key: str) -> Optional[Subject]:
        try:
            rows = self.fetch_rows(date_key)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Daily subject fetch for %s failed: %s", date_key, exc)
            return None

        if len(rows) != 1:
            logger.warning("Expected one daily subject row for %s, got %s", date_key, len(rows))
            return None
        player = rows[0].get("player")
        if not player:
            logger.warning("Daily subject row for %s has no player", date_key)
            return None
        try:
            subject = Subject.model_validate(player)
        except ValidationError as exc:
            logger.warning("Daily subject for %s failed validation: %s", date_key, exc)
            return None
        logger.info("Resolved daily subject for %s", date_key)
        return subject
