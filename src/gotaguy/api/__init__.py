"""REST API for the daily guessing game."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException

from gotaguy.api.schemas import (
    AttemptResponse,
    DailyStatusResponse,
    GuessRequest,
    RoundResponse,
    RoundSummaryResponse,
    SubjectResponse,
)
from gotaguy.config import GameRules, Settings, default_rules, load_settings
from gotaguy.engine import Round, initialize, submit_guess
from gotaguy.persistence import RoundConflict, RoundRecord, RoundStore
from gotaguy.provider import DailySubjectProvider, build_provider, today_key


logger = logging.getLogger("uvicorn.error")
logger.setLevel(logging.INFO)

NO_PUZZLE_DETAIL = "No puzzle available today"


def _round_to_response(
    record: RoundRecord,
    state: Round,
    *,
    accepted: bool | None = None,
) -> RoundResponse:
    revealed = state.reveal()
    return RoundResponse(
        round_id=record.round_id,
        date=record.date_key,
        rules=state.rules.key,
        attempts=[
            AttemptResponse(
                index=attempt.index,
                guess=attempt.text,
                feedback=list(attempt.feedback.labels),
                display=attempt.feedback.display,
            )
            for attempt in state.attempts
        ],
        terminated=state.terminated,
        won=state.won,
        attempts_remaining=state.attempts_remaining,
        max_attempts=state.rules.max_attempts,
        accepted=accepted,
        subject=SubjectResponse.model_validate(revealed.model_dump()) if revealed else None,
    )


def create_app(
    *,
    provider: Optional[DailySubjectProvider] = None,
    store: Optional[RoundStore] = None,
    settings: Optional[Settings] = None,
    rules: Optional[GameRules] = None,
    date_key_factory: Callable[[], str] = today_key,
) -> FastAPI:
    app = FastAPI(title="gotaguy daily player")
    if provider is None or store is None:
        settings = settings or load_settings()
    if provider is None:
        provider = build_provider(settings)
    if store is None:
        store = RoundStore(settings.db_path)
    app.state.round_store = store
    app.state.provider = provider
    rules = rules or default_rules()
    app.state.rules = rules

    def _fetch_round_or_404(round_id: str) -> RoundRecord:
        record = store.get_round(round_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Round not found")
        return record

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/daily", response_model=DailyStatusResponse)
    async def daily() -> DailyStatusResponse:
        date_key = date_key_factory()
        subject = provider.get_subject(date_key) if provider is not None else None
        return DailyStatusResponse(date=date_key, available=subject is not None)

    @app.post("/rounds", response_model=RoundResponse, status_code=201)
    async def start_round() -> RoundResponse:
        date_key = date_key_factory()
        subject = provider.get_subject(date_key) if provider is not None else None
        if subject is None:
            raise HTTPException(status_code=404, detail=NO_PUZZLE_DETAIL)
        state = initialize(subject, rules)
        record = store.create_round(state, date_key=date_key)
        logger.info("Started round %s for %s", record.round_id, date_key)
        return _round_to_response(record, state)

    @app.get("/rounds", response_model=list[RoundSummaryResponse])
    async def list_rounds(date: str | None = None, limit: int = 50) -> list[RoundSummaryResponse]:
        return [
            RoundSummaryResponse(
                round_id=record.round_id,
                date=record.date_key,
                attempts=len(record.attempts),
                terminated=record.terminated,
                won=record.to_round().won,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for record in store.list_rounds(date_key=date, limit=limit)
        ]

    @app.get("/rounds/{round_id}", response_model=RoundResponse)
    async def get_round(round_id: str) -> RoundResponse:
        record = _fetch_round_or_404(round_id)
        return _round_to_response(record, record.to_round())

    @app.post("/rounds/{round_id}/guesses", response_model=RoundResponse)
    async def guess(round_id: str, payload: GuessRequest) -> RoundResponse:
        record = _fetch_round_or_404(round_id)
        state = record.to_round()
        updated = submit_guess(state, payload.guess)
        if updated is state:
            return _round_to_response(record, state, accepted=False)

        try:
            record = store.save_round(round_id, updated, expected_attempts=len(state.attempts))
        except RoundConflict as exc:
            logger.warning("Rejected stale guess for round %s: %s", round_id, exc)
            raise HTTPException(status_code=409, detail="Round changed; reload and retry") from exc
        if updated.terminated:
            logger.info(
                "Round %s finished after %s guesses (%s)",
                round_id,
                len(updated.attempts),
                "won" if updated.won else "lost",
            )
        return _round_to_response(record, updated, accepted=True)

    return app
