"""
Coming soon banner component - Footer notice for store managers.

Shows managers and administrators a footer banner while the store is in
"coming soon" mode, and re-arms a dismissed banner on every login.

Eligibility is a short-circuit chain; the first failing check determines
the reason code:
1. site preview
2. not logged in
3. dismissed by the user
4. not a manager or administrator
5. coming soon mode off
6. store-pages-only mode on a non-store page
"""

from __future__ import annotations

import html
import logging

from src.domain.entities import BANNER_DISMISSED_META_KEY, OptionName, User

from .models import (
    BannerDecision,
    BannerReason,
    FooterBannerInput,
    FooterBannerOutput,
    UserRole,
    ViewerContext,
)
from .ports import NonceIssuerPort, OptionsReaderPort, UserMetaStorePort

logger = logging.getLogger(__name__)

REST_NONCE_ACTION = "wp_rest"

BANNER_TEXT = (
    'This page is in "Coming soon" mode and is only visible to you and those who '
    "have permission. To make it public to everyone,&nbsp;"
    "<a href='{link}'>change visibility settings</a>"
)


# --- Functional Core ---


def role_for(user: User | None) -> UserRole:
    """Map a user's roles onto the banner role set."""
    if user is None:
        return UserRole.GUEST
    if "administrator" in user.roles:
        return UserRole.ADMINISTRATOR
    if "shop_manager" in user.roles:
        return UserRole.MANAGER
    return UserRole.OTHER


def evaluate(ctx: ViewerContext) -> BannerDecision:
    """Decide whether the banner is shown, with the deciding reason."""
    if ctx.is_preview_mode:
        return BannerDecision(False, BannerReason.SITE_PREVIEW)

    if not ctx.current_user_id:
        return BannerDecision(False, BannerReason.NOT_LOGGED_IN)

    if ctx.dismissal_state == "yes":
        return BannerDecision(False, BannerReason.DISMISSED)

    if ctx.user_role not in (UserRole.MANAGER, UserRole.ADMINISTRATOR):
        return BannerDecision(False, BannerReason.NOT_MANAGER_OR_ADMIN)

    if not ctx.coming_soon_enabled:
        return BannerDecision(False, BannerReason.COMING_SOON_DISABLED)

    if ctx.store_pages_only and not ctx.is_store_page:
        return BannerDecision(False, BannerReason.NOT_STORE_PAGE)

    return BannerDecision(True, BannerReason.SHOW)


def should_show_banner(ctx: ViewerContext) -> bool:
    return evaluate(ctx).show


def render_banner(settings_url: str, rest_url: str, rest_nonce: str) -> str:
    """Render the footer banner markup."""
    text = BANNER_TEXT.format(link=html.escape(settings_url, quote=True))
    return (
        f"<div id='coming-soon-footer-banner'>{text}"
        f"<a class='coming-soon-footer-banner-dismiss' "
        f"data-rest-url='{html.escape(rest_url, quote=True)}' "
        f"data-rest-nonce='{html.escape(rest_nonce, quote=True)}'></a></div>"
    )


# --- Shell ---


def build_viewer_context(
    user: User | None,
    *,
    is_preview_mode: bool,
    is_store_page: bool,
    options: OptionsReaderPort,
    user_meta: UserMetaStorePort,
) -> ViewerContext:
    """Collect the eligibility inputs for the current page view."""
    user_id = str(user.id) if user is not None else None
    dismissal = user_meta.get(user_id, BANNER_DISMISSED_META_KEY) if user_id else None

    return ViewerContext(
        is_preview_mode=is_preview_mode,
        current_user_id=user_id,
        user_role=role_for(user),
        dismissal_state=dismissal,
        coming_soon_enabled=(options.get(OptionName.COMING_SOON.value) or "no") == "yes",
        store_pages_only=options.get(OptionName.STORE_PAGES_ONLY.value) == "yes",
        is_store_page=is_store_page,
    )


def on_user_login(user_id: str, *, user_meta: UserMetaStorePort) -> None:
    """Re-arm a dismissed banner when the user logs in."""
    if user_meta.get(user_id, BANNER_DISMISSED_META_KEY) == "yes":
        user_meta.set(user_id, BANNER_DISMISSED_META_KEY, "no")
        logger.debug("Reset coming soon banner dismissal for user %s", user_id)


def run_footer(
    inp: FooterBannerInput,
    *,
    options: OptionsReaderPort,
    user_meta: UserMetaStorePort,
    nonces: NonceIssuerPort,
) -> FooterBannerOutput:
    """
    Produce the footer banner for a storefront page, if eligible.

    Args:
        inp: Current viewer and page.
        options: Options store port.
        user_meta: User meta store port.
        nonces: Issues the REST nonce for the dismiss control.

    Returns:
        FooterBannerOutput with the decision and, when shown, the markup.
    """
    ctx = build_viewer_context(
        inp.user,
        is_preview_mode=inp.is_preview_mode,
        is_store_page=inp.is_store_page,
        options=options,
        user_meta=user_meta,
    )
    decision = evaluate(ctx)
    if not decision.show:
        return FooterBannerOutput(decision=decision)

    rest_nonce = nonces.create(REST_NONCE_ACTION, ctx.current_user_id)
    markup = render_banner(inp.settings_url, inp.rest_url, rest_nonce)
    return FooterBannerOutput(decision=decision, html=markup)
