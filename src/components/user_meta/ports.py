"""
User meta component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.entities import User


class UserRepoPort(Protocol):
    """Repository interface for users."""

    def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        ...
