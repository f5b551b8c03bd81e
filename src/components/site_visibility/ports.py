"""
Site visibility component port definitions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class OptionsStorePort(Protocol):
    """Key-value store for site options."""

    def get(self, name: str) -> str | None:
        """Get an option value, or None if never set."""
        ...

    def set(self, name: str, value: str) -> None:
        """Create or overwrite an option."""
        ...

    def add_if_absent(self, name: str, value: str) -> None:
        """Create an option only if it does not exist yet."""
        ...


class AnalyticsSinkPort(Protocol):
    """Fire-and-forget analytics event recorder."""

    def record(self, event_name: str, fields: Mapping[str, str]) -> None:
        """Record an event."""
        ...


class NonceVerifierPort(Protocol):
    """Anti-forgery token verification."""

    def verify(self, token: str, action: str, user_id: str | None = None) -> bool:
        """Return True if the token is valid for the action (and user)."""
        ...
