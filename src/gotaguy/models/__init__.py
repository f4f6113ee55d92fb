"""Domain models shared by the engine, providers and API layers."""

from .subject import Subject

__all__ = ["Subject"]
