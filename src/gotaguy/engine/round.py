"""Pure round state machine for the daily guessing game.

A :class:`Round` is an immutable value. :func:`submit_guess` is the only
transition; it returns a new round, or the same round untouched when the guess
is a duplicate or the round is already over.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from gotaguy.config import DEFAULT_RULES_KEY, GameRules, get_rules
from gotaguy.models import Subject


NO_MATCH_MARKER = "❌"


@dataclass(frozen=True)
class Feedback:
    labels: Tuple[str, ...] = ()

    @property
    def matched(self) -> bool:
        return bool(self.labels)

    @property
    def display(self) -> str:
        return ", ".join(self.labels) or NO_MATCH_MARKER


@dataclass(frozen=True)
class GuessAttempt:
    text: str
    index: int
    feedback: Feedback


@dataclass(frozen=True)
class Round:
    subject: Subject
    rules: GameRules
    attempts: Tuple[GuessAttempt, ...] = ()
    terminated: bool = False

    @property
    def won(self) -> bool:
        return any(_fold(attempt.text) == _fold(self.subject.name) for attempt in self.attempts)

    @property
    def attempts_remaining(self) -> int:
        if self.terminated:
            return 0
        return max(0, self.rules.max_attempts - len(self.attempts))

    def has_guessed(self, text: str) -> bool:
        folded = _fold(text)
        return any(_fold(attempt.text) == folded for attempt in self.attempts)

    def reveal(self) -> Optional[Subject]:
        """Return the subject once the round is over, ``None`` while it is live."""

        return self.subject if self.terminated else None


def _fold(value: str) -> str:
    return value.lower()


def _attribute_value(subject: Subject, attribute: str) -> str:
    return getattr(subject, attribute, None) or ""


def evaluate(subject: Subject, guess: str, rules: GameRules | None = None) -> Feedback:
    """Compare a guess against every scored attribute of the subject.

    Each attribute is tested on its own, so a guess equal to both the team and
    the division yields both labels.
    """

    rules = rules or get_rules(DEFAULT_RULES_KEY)
    folded = _fold(guess)
    labels = tuple(
        label
        for attribute, label in rules.scored_attributes
        if _fold(_attribute_value(subject, attribute)) == folded
    )
    return Feedback(labels)


def initialize(subject: Subject, rules: GameRules | None = None) -> Round:
    if subject is None:
        raise TypeError("initialize() requires a resolved subject")
    return Round(subject=subject, rules=rules or get_rules(DEFAULT_RULES_KEY))


def submit_guess(state: Round, raw_text: str) -> Round:
    if state.terminated or state.has_guessed(raw_text):
        return state

    previous_count = len(state.attempts)
    attempt = GuessAttempt(
        text=raw_text,
        index=previous_count,
        feedback=evaluate(state.subject, raw_text, state.rules),
    )
    solved = _fold(raw_text) == _fold(state.subject.name)
    # the cap is checked against the count before this attempt was added
    exhausted = previous_count >= state.rules.max_attempts - 1
    return replace(
        state,
        attempts=state.attempts + (attempt,),
        terminated=solved or exhausted,
    )


def is_terminated(state: Round) -> bool:
    return state.terminated
