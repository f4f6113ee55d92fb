"""Daily player guessing game: engine, providers and HTTP surface."""

__version__ = "0.1.0"
