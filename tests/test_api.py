from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from gotaguy.api import NO_PUZZLE_DETAIL, create_app
from gotaguy.config import Settings, get_rules
from gotaguy.models import Subject
from gotaguy.persistence import RoundStore
from gotaguy.provider import StaticProvider


DATE_KEY = "2024-06-01"

TROUT = Subject(
    name="Mike Trout",
    position="CF",
    division="AL West",
    team="Angels",
    league="AL",
    image="https://example.com/trout.png",
    fun_fact="Meteorology fan.",
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("GOTAGUY_RULES", raising=False)
    app = create_app(
        provider=StaticProvider({DATE_KEY: TROUT}),
        store=RoundStore(tmp_path / "api.sqlite"),
        date_key_factory=lambda: DATE_KEY,
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


async def _start(client: AsyncClient) -> dict:
    resp = await client.post("/rounds")
    assert resp.status_code == 201
    return resp.json()


async def _guess(client: AsyncClient, round_id: str, guess: str) -> dict:
    resp = await client.post(f"/rounds/{round_id}/guesses", json={"guess": guess})
    assert resp.status_code == 200
    return resp.json()


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_daily_status_does_not_reveal(client: AsyncClient):
    resp = await client.get("/daily")
    assert resp.status_code == 200
    assert resp.json() == {"date": DATE_KEY, "available": True}


@pytest.mark.anyio
async def test_start_round_hides_subject(client: AsyncClient):
    state = await _start(client)
    assert state["date"] == DATE_KEY
    assert state["attempts"] == []
    assert state["terminated"] is False
    assert state["subject"] is None
    assert state["max_attempts"] == 10
    assert state["attempts_remaining"] == 10


@pytest.mark.anyio
async def test_guess_flow_until_win(client: AsyncClient):
    state = await _start(client)
    round_id = state["round_id"]

    state = await _guess(client, round_id, "angels")
    assert state["accepted"] is True
    assert state["attempts"][0]["feedback"] == ["Team"]
    assert state["attempts"][0]["display"] == "Team"
    assert state["subject"] is None

    state = await _guess(client, round_id, "ANGELS")
    assert state["accepted"] is False
    assert len(state["attempts"]) == 1

    state = await _guess(client, round_id, "yankees")
    assert state["attempts"][1]["display"] == "❌"

    state = await _guess(client, round_id, "Mike Trout")
    assert state["terminated"] is True
    assert state["won"] is True
    assert state["subject"]["name"] == "Mike Trout"
    assert state["subject"]["fun_fact"] == "Meteorology fan."

    state = await _guess(client, round_id, "cf")
    assert state["accepted"] is False
    assert len(state["attempts"]) == 3

    resp = await client.get(f"/rounds/{round_id}")
    assert resp.status_code == 200
    assert resp.json()["won"] is True


@pytest.mark.anyio
async def test_round_ends_after_ten_wrong_guesses(client: AsyncClient):
    state = await _start(client)
    round_id = state["round_id"]
    for i in range(10):
        state = await _guess(client, round_id, f"wrong {i}")
        assert state["accepted"] is True

    assert state["terminated"] is True
    assert state["won"] is False
    assert state["subject"]["team"] == "Angels"

    state = await _guess(client, round_id, "wrong 10")
    assert state["accepted"] is False
    assert len(state["attempts"]) == 10


@pytest.mark.anyio
async def test_list_rounds(client: AsyncClient):
    first = await _start(client)
    await _guess(client, first["round_id"], "Mike Trout")
    await _start(client)

    resp = await client.get("/rounds", params={"date": DATE_KEY})
    assert resp.status_code == 200
    summaries = resp.json()
    assert len(summaries) == 2
    won = [item for item in summaries if item["round_id"] == first["round_id"]][0]
    assert won["won"] is True
    assert won["attempts"] == 1


@pytest.mark.anyio
async def test_unknown_round_404(client: AsyncClient):
    resp = await client.get("/rounds/missing")
    assert resp.status_code == 404

    resp = await client.post("/rounds/missing/guesses", json={"guess": "x"})
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_no_puzzle_available(tmp_path: Path):
    app = create_app(
        provider=StaticProvider({}),
        store=RoundStore(tmp_path / "empty.sqlite"),
        date_key_factory=lambda: DATE_KEY,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        resp = await client.get("/daily")
        assert resp.json()["available"] is False

        resp = await client.post("/rounds")
        assert resp.status_code == 404
        assert resp.json()["detail"] == NO_PUZZLE_DETAIL


@pytest.mark.anyio
async def test_no_provider_configured(tmp_path: Path):
    app = create_app(settings=Settings(db_path=tmp_path / "none.sqlite"))
    assert app.state.provider is None
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        resp = await client.post("/rounds")
        assert resp.status_code == 404


@pytest.mark.anyio
async def test_long_guess_is_accepted(client: AsyncClient):
    state = await _start(client)
    long_guess = "x" * 1000

    state = await _guess(client, state["round_id"], long_guess)

    assert state["accepted"] is True
    assert state["attempts"][0]["guess"] == long_guess
    assert state["attempts"][0]["display"] == "❌"


@pytest.mark.anyio
async def test_stale_guess_returns_conflict(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    store = RoundStore(tmp_path / "race.sqlite")
    app = create_app(
        provider=StaticProvider({DATE_KEY: TROUT}),
        store=store,
        rules=get_rules("classic"),
        date_key_factory=lambda: DATE_KEY,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        state = await _start(client)
        round_id = state["round_id"]
        stale_record = store.get_round(round_id)
        await _guess(client, round_id, "angels")

        monkeypatch.setattr(store, "get_round", lambda _round_id: stale_record)
        resp = await client.post(f"/rounds/{round_id}/guesses", json={"guess": "cf"})

        assert resp.status_code == 409
        monkeypatch.undo()
        resp = await client.get(f"/rounds/{round_id}")
        assert [item["guess"] for item in resp.json()["attempts"]] == ["angels"]


@pytest.mark.anyio
async def test_injected_rules_score_league(tmp_path: Path):
    app = create_app(
        provider=StaticProvider({DATE_KEY: TROUT}),
        store=RoundStore(tmp_path / "league.sqlite"),
        rules=get_rules("classic_league"),
        date_key_factory=lambda: DATE_KEY,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        state = await _start(client)
        assert state["rules"] == "classic_league"

        state = await _guess(client, state["round_id"], "al")
        assert state["attempts"][0]["feedback"] == ["League"]
