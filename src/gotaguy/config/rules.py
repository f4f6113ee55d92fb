"""Scoring rules for supported game variants."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple


logger = logging.getLogger(__name__)

RULES_ENV = "GOTAGUY_RULES"
DEFAULT_RULES_KEY = "classic"


@dataclass(frozen=True)
class GameRules:
    key: str
    max_attempts: int
    # (subject attribute, feedback label) in display order
    scored_attributes: Tuple[Tuple[str, str], ...]

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(label for _, label in self.scored_attributes)


_GAME_RULES: Dict[str, GameRules] = {
    "classic": GameRules(
        key="classic",
        max_attempts=10,
        scored_attributes=(
            ("name", "Name"),
            ("position", "Position"),
            ("division", "Division"),
            ("team", "Team"),
            ("ethnicity", "Ethnicity"),
        ),
    ),
    "classic_league": GameRules(
        key="classic_league",
        max_attempts=10,
        scored_attributes=(
            ("name", "Name"),
            ("position", "Position"),
            ("division", "Division"),
            ("team", "Team"),
            ("league", "League"),
            ("ethnicity", "Ethnicity"),
        ),
    ),
}


def iter_rules() -> Iterable[GameRules]:
    """Return an iterator of all configured rule sets."""

    return _GAME_RULES.values()


def get_rules(key: str) -> GameRules:
    """Fetch rules by key, raising KeyError if missing."""

    normalized = key.strip().lower()
    if normalized not in _GAME_RULES:
        raise KeyError(f"No game rules configured for key={key!r}")
    return _GAME_RULES[normalized]


def default_rules() -> GameRules:
    raw = os.getenv(RULES_ENV)
    if not raw:
        return _GAME_RULES[DEFAULT_RULES_KEY]
    try:
        return get_rules(raw)
    except KeyError:
        logger.warning("Unknown rules %s for %s; using %s", raw, RULES_ENV, DEFAULT_RULES_KEY)
        return _GAME_RULES[DEFAULT_RULES_KEY]
