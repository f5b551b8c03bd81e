"""
LifecycleHooks - Explicit handler registration for request lifecycle events.

Three events are supported:
- settings_submit: the store settings form was posted
- render: a storefront page is being rendered (handlers return footer HTML)
- login: a user logged in successfully

Handlers are plain callables registered per event. ``fire`` calls them in
registration order and returns their results.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.components.coming_soon_banner import (
    FooterBannerInput,
    NonceIssuerPort,
    UserMetaStorePort,
    on_user_login,
    run_footer,
)
from src.components.site_visibility import (
    SETTINGS_NONCE_ACTION,
    SITE_VISIBILITY_SAVED_EVENT,
    AnalyticsSinkPort,
    NonceVerifierPort,
    OptionsStorePort,
    SaveVisibilityInput,
    SaveVisibilityOutput,
    run_save,
)
from src.domain.entities import User

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class LifecycleEvent(str, Enum):
    SETTINGS_SUBMIT = "settings_submit"
    RENDER = "render"
    LOGIN = "login"


@dataclass(frozen=True)
class RenderContext:
    """Page render details passed to render handlers."""

    user: User | None
    path: str
    is_preview_mode: bool


class LifecycleHooks:
    """Registry of lifecycle event handlers."""

    def __init__(self) -> None:
        self._handlers: dict[LifecycleEvent, list[Handler]] = {e: [] for e in LifecycleEvent}

    def register(self, event: LifecycleEvent, handler: Handler) -> None:
        self._handlers[event].append(handler)

    def handlers(self, event: LifecycleEvent) -> list[Handler]:
        return list(self._handlers[event])

    def fire(self, event: LifecycleEvent, *args: Any, **kwargs: Any) -> list[Any]:
        """Call every handler for the event and collect results."""
        handlers = self._handlers[event]
        logger.debug("Firing %s to %d handler(s)", event.value, len(handlers))
        return [handler(*args, **kwargs) for handler in handlers]

    # --- Typed convenience wrappers ---

    def settings_submitted(self, inp: SaveVisibilityInput) -> list[Any]:
        return self.fire(LifecycleEvent.SETTINGS_SUBMIT, inp)

    def render_footer(self, ctx: RenderContext) -> str:
        """Concatenate footer fragments returned by render handlers."""
        fragments = self.fire(LifecycleEvent.RENDER, ctx)
        return "".join(f for f in fragments if f)

    def user_logged_in(self, user: User) -> None:
        self.fire(LifecycleEvent.LOGIN, user)


# --- Launch Your Store wiring ---


def register_launch_your_store_hooks(
    hooks: LifecycleHooks,
    *,
    options: OptionsStorePort,
    user_meta: UserMetaStorePort,
    analytics: AnalyticsSinkPort,
    nonces: NonceVerifierPort,
    nonce_issuer: NonceIssuerPort,
    settings_url: str,
    rest_url_template: str,
    is_store_page: Callable[[str], bool],
    settings_nonce_action: str = SETTINGS_NONCE_ACTION,
    saved_event_name: str = SITE_VISIBILITY_SAVED_EVENT,
) -> LifecycleHooks:
    """
    Register the site visibility, banner and login handlers.

    Args:
        hooks: Registry to add handlers to.
        options: Options store.
        user_meta: User meta store.
        analytics: Analytics sink for settings saves.
        nonces: Verifies the settings form nonce.
        nonce_issuer: Issues the REST nonce embedded in the banner.
        settings_url: Link to the site visibility settings page.
        rest_url_template: Users endpoint URL, formatted with ``user_id``.
        is_store_page: Tells whether a rendered path is a store page.
        settings_nonce_action: Action the settings form nonce is issued for.
        saved_event_name: Analytics event recorded on save.
    """

    def save_site_visibility_options(inp: SaveVisibilityInput) -> SaveVisibilityOutput:
        return run_save(
            inp,
            options=options,
            analytics=analytics,
            nonces=nonces,
            nonce_action=settings_nonce_action,
            event_name=saved_event_name,
        )

    def maybe_add_coming_soon_banner(ctx: RenderContext) -> str | None:
        rest_url = rest_url_template.format(user_id=ctx.user.id) if ctx.user else ""
        result = run_footer(
            FooterBannerInput(
                user=ctx.user,
                is_preview_mode=ctx.is_preview_mode,
                is_store_page=is_store_page(ctx.path),
                settings_url=settings_url,
                rest_url=rest_url,
            ),
            options=options,
            user_meta=user_meta,
            nonces=nonce_issuer,
        )
        return result.html

    def reset_coming_soon_banner_dismissed(user: User) -> None:
        on_user_login(str(user.id), user_meta=user_meta)

    hooks.register(LifecycleEvent.SETTINGS_SUBMIT, save_site_visibility_options)
    hooks.register(LifecycleEvent.RENDER, maybe_add_coming_soon_banner)
    hooks.register(LifecycleEvent.LOGIN, reset_coming_soon_banner_dismissed)
    return hooks
