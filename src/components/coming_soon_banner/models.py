"""
Coming soon banner component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.domain.entities import User


class UserRole(str, Enum):
    """Viewer role as far as the banner is concerned."""

    GUEST = "guest"
    OTHER = "other"
    MANAGER = "manager"
    ADMINISTRATOR = "administrator"


class BannerReason(str, Enum):
    """Why the banner was or was not shown."""

    SHOW = "show"
    SITE_PREVIEW = "site_preview"
    NOT_LOGGED_IN = "not_logged_in"
    DISMISSED = "dismissed"
    NOT_MANAGER_OR_ADMIN = "not_manager_or_admin"
    COMING_SOON_DISABLED = "coming_soon_disabled"
    NOT_STORE_PAGE = "not_store_page"


@dataclass(frozen=True)
class ViewerContext:
    """Everything the eligibility check needs about the current page view."""

    is_preview_mode: bool
    current_user_id: str | None
    user_role: UserRole
    dismissal_state: str | None
    coming_soon_enabled: bool
    store_pages_only: bool
    is_store_page: bool


@dataclass(frozen=True)
class BannerDecision:
    """Eligibility outcome."""

    show: bool
    reason: BannerReason


# --- Input Models ---


@dataclass(frozen=True)
class FooterBannerInput:
    """Input for rendering the footer banner on a storefront page."""

    user: User | None
    is_preview_mode: bool
    is_store_page: bool
    settings_url: str
    rest_url: str


# --- Output Models ---


@dataclass(frozen=True)
class FooterBannerOutput:
    """Output from rendering the footer banner."""

    decision: BannerDecision
    html: str | None = None
