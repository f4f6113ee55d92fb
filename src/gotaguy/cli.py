"""Command-line front end for playing the daily round in a terminal."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional, TextIO

from gotaguy.config import default_rules, get_rules, load_settings
from gotaguy.engine import Round, initialize, submit_guess
from gotaguy.provider import build_provider, today_key


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Guess today's featured player")
    parser.add_argument("--date", default=None, help="Date key to play (YYYY-MM-DD, defaults to today UTC)")
    parser.add_argument("--subjects", type=Path, default=None, help="Optional subject schedule CSV")
    parser.add_argument("--rules", default=None, help="Rule set key (e.g., classic, classic_league)")
    parser.add_argument("--supabase-url", default=None, help="Supabase project URL")
    parser.add_argument("--supabase-key", default=None, help="Supabase anon key")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    return parser.parse_args(argv)


def _print_reveal(state: Round, out: TextIO) -> None:
    subject = state.reveal()
    if subject is None:
        return
    print("You got him!" if state.won else "Out of guesses.", file=out)
    print("The Player Was:", file=out)
    print(f"{subject.name} – {subject.team}", file=out)
    if subject.fun_fact:
        print(subject.fun_fact, file=out)


def play(state: Round, guesses: Iterable[str], out: Optional[TextIO] = None) -> Round:
    """Feed guesses into the round until it ends or input runs out."""

    if out is None:
        out = sys.stdout
    if not state.terminated:
        for line in guesses:
            text = line.rstrip("\r\n")
            updated = submit_guess(state, text)
            if updated is state:
                print(f"Already guessed: {text}", file=out)
                continue
            state = updated
            attempt = state.attempts[-1]
            print(f"{attempt.text}: {attempt.feedback.display}", file=out)
            if state.terminated:
                break
    _print_reveal(state, out)
    return state


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)

    settings = load_settings()
    overrides: dict[str, object] = {}
    if args.subjects:
        overrides["subjects_csv"] = args.subjects
    if args.supabase_url:
        overrides["supabase_url"] = args.supabase_url
    if args.supabase_key:
        overrides["supabase_key"] = args.supabase_key
    if args.timeout is not None:
        overrides["http_timeout"] = max(0.1, args.timeout)
    settings = replace(settings, **overrides)

    try:
        rules = get_rules(args.rules) if args.rules else default_rules()
    except KeyError as exc:
        print(exc.args[0], file=sys.stderr)
        return 2

    provider = build_provider(settings)
    date_key = args.date or today_key()
    subject = provider.get_subject(date_key) if provider is not None else None
    if subject is None:
        print("No puzzle available today")
        return 1

    state = initialize(subject, rules)
    print(f"I've Got a Guy ⚾  ({date_key}, {rules.max_attempts} guesses)")
    play(state, sys.stdin)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
