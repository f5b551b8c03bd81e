"""
Admin Site Visibility API.

Provides the settings page payload and the form submission endpoint for
"coming soon" mode.

Key behaviors:
- GET creates the share key on first load and returns current options
- POST accepts the settings form; an invalid nonce saves nothing and is
  reported only as ``saved: false``
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from src.adapters.auth.crypto import JWTNonceAdapter
from src.adapters.sqlite.repos import SQLiteOptionsStore
from src.api.deps import (
    get_lifecycle_hooks,
    get_nonce_adapter,
    get_options_store,
    get_rules,
    get_store_manager,
)
from src.api.schemas import SaveVisibilityResponse, SiteVisibilitySettingsResponse
from src.components.site_visibility import (
    PreloadSettingsInput,
    SaveVisibilityInput,
    SaveVisibilityOutput,
    generate_share_key,
    run_preload,
)
from src.domain.entities import User
from src.rules.models import Rules
from src.shell.hooks.lifecycle_hooks import LifecycleHooks

router = APIRouter()

NONCE_FIELD = "_wpnonce"


@router.get(
    "",
    response_model=SiteVisibilitySettingsResponse,
    summary="Get site visibility settings",
)
def get_site_visibility_settings(
    current_user: User = Depends(get_store_manager),
    options: SQLiteOptionsStore = Depends(get_options_store),
    nonces: JWTNonceAdapter = Depends(get_nonce_adapter),
    rules: Rules = Depends(get_rules),
) -> SiteVisibilitySettingsResponse:
    """
    Load the site visibility settings page.

    Generates the share key if it does not exist yet and returns a fresh
    form nonce for the save request.
    """
    cfg = rules.site_visibility
    result = run_preload(
        PreloadSettingsInput(settings={}, is_admin=True, is_settings_page=True),
        options=options,
        shop_permalink=cfg.shop_permalink,
        key_factory=lambda: generate_share_key(cfg.share_key_length),
    )
    return SiteVisibilitySettingsResponse(
        settings=result.settings,
        nonce=nonces.create(cfg.settings_nonce_action, str(current_user.id)),
    )


@router.post(
    "",
    response_model=SaveVisibilityResponse,
    summary="Save site visibility settings",
)
async def save_site_visibility_settings(
    request: Request,
    current_user: User = Depends(get_store_manager),
    hooks: LifecycleHooks = Depends(get_lifecycle_hooks),
) -> SaveVisibilityResponse:
    """Submit the site visibility settings form."""
    form = await request.form()
    fields: dict[str, Any] = {k: v for k, v in form.items() if isinstance(v, str)}
    nonce = fields.pop(NONCE_FIELD, None) or request.query_params.get(NONCE_FIELD)

    results = hooks.settings_submitted(
        SaveVisibilityInput(fields=fields, nonce=nonce, user_id=str(current_user.id))
    )
    saved = [r for r in results if isinstance(r, SaveVisibilityOutput) and r.saved]
    if not saved:
        return SaveVisibilityResponse(saved=False)

    return SaveVisibilityResponse(
        saved=True,
        values={name.value: value for name, value in saved[0].values.items()},
    )
