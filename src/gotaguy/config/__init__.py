"""Configuration helpers for game rules and runtime settings."""

from .rules import DEFAULT_RULES_KEY, GameRules, default_rules, get_rules, iter_rules
from .settings import Settings, load_settings

__all__ = [
    "DEFAULT_RULES_KEY",
    "GameRules",
    "Settings",
    "default_rules",
    "get_rules",
    "iter_rules",
    "load_settings",
]
