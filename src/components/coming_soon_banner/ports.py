"""
Coming soon banner component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol


class UserMetaStorePort(Protocol):
    """Per-user key-value metadata."""

    def get(self, user_id: str, key: str) -> str | None:
        """Get a meta value, or None if unset."""
        ...

    def set(self, user_id: str, key: str, value: str) -> None:
        """Create or overwrite a meta value."""
        ...


class OptionsReaderPort(Protocol):
    """Read access to site options."""

    def get(self, name: str) -> str | None:
        """Get an option value, or None if never set."""
        ...


class NonceIssuerPort(Protocol):
    """Anti-forgery token issuing."""

    def create(self, action: str, user_id: str | None = None) -> str:
        """Issue a token for the action (and user)."""
        ...
