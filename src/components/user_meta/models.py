"""
User meta component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import User

# --- Validation Errors ---


@dataclass(frozen=True)
class UserMetaError:
    """User meta operation error."""

    code: str
    message: str
    field: str | None = None


# --- Field Registration ---


@dataclass(frozen=True)
class MetaField:
    """A user meta field exposed through the users REST endpoint."""

    key: str
    description: str
    type: str = "string"
    single: bool = True
    show_in_rest: bool = True


# --- Input Models ---


@dataclass(frozen=True)
class GetUserMetaInput:
    """Input for reading a user's registered meta."""

    actor: User
    target_id: str


@dataclass(frozen=True)
class UpdateUserMetaInput:
    """Input for updating a user's registered meta."""

    actor: User
    target_id: str
    meta: dict[str, object]


# --- Output Models ---


@dataclass(frozen=True)
class UserMetaOutput:
    """Output from a user meta operation."""

    meta: dict[str, str | None] = field(default_factory=dict)
    errors: tuple[UserMetaError, ...] = ()
    success: bool = True
