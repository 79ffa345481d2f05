"""Persisted state infrastructure with multiple backend support."""

from .base import StateStore
from .memory import InMemoryStateStore
from .file import JsonFileStateStore

__all__ = [
    # Base interface
    "StateStore",
    # Implementations
    "InMemoryStateStore",
    "JsonFileStateStore",
]
