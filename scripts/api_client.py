"""Lightweight REST client for the gotaguy API."""

from __future__ import annotations

import argparse
import json

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Play the daily round against the gotaguy REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("guesses", nargs="*", help="Guesses to submit in order")
    parser.add_argument("--round", dest="round_id", metavar="ROUND_ID", help="Continue an existing round")
    parser.add_argument("--list-rounds", action="store_true", help="List recent rounds and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_rounds:
            resp = client.get("/rounds")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.round_id:
            resp = client.get(f"/rounds/{args.round_id}")
            if resp.status_code == 404:
                raise SystemExit(f"round {args.round_id} not found")
        else:
            resp = client.post("/rounds")
            if resp.status_code == 404:
                raise SystemExit(resp.json().get("detail", "No puzzle available today"))
        resp.raise_for_status()
        state = resp.json()
        print(f"Round {state['round_id']} ({state['date']})")

        for guess in args.guesses:
            if state["terminated"]:
                break
            resp = client.post(f"/rounds/{state['round_id']}/guesses", json={"guess": guess})
            resp.raise_for_status()
            state = resp.json()
            if not state["accepted"]:
                print(f"Already guessed: {guess}")
                continue
            print(f"{guess}: {state['attempts'][-1]['display']}")

        if state["terminated"] and state["subject"]:
            subject = state["subject"]
            print("The Player Was:", f"{subject['name']} – {subject['team']}")
            if subject.get("fun_fact"):
                print(subject["fun_fact"])
        else:
            print(f"{state['attempts_remaining']} guesses remaining")


if __name__ == "__main__":
    main()
