"""
Site visibility component - "Coming soon" settings management.

Validates and persists the site visibility options submitted from the
store settings form and reports the outcome to analytics.

Key behaviors:
- Only the three visibility options are considered; other fields are ignored
- Values outside yes/no are dropped silently and the stored value is kept
- Exactly one analytics event per accepted submission
- Nothing is read or written when the form nonce does not verify
"""

from __future__ import annotations

import logging
import secrets
import string
from collections.abc import Callable, Mapping
from typing import Any

from src.domain.entities import (
    ALLOWED_VISIBILITY_VALUES,
    NOT_SET,
    SHARE_KEY_OPTION,
    OptionName,
)

from .models import (
    PreloadSettingsInput,
    PreloadSettingsOutput,
    SaveVisibilityInput,
    SaveVisibilityOutput,
    SettingsChangeEvent,
)
from .ports import AnalyticsSinkPort, NonceVerifierPort, OptionsStorePort

logger = logging.getLogger(__name__)

SETTINGS_NONCE_ACTION = "store-settings"
SITE_VISIBILITY_SAVED_EVENT = "site_visibility_saved"
SHARE_KEY_LENGTH = 32

_SHARE_KEY_ALPHABET = string.ascii_letters + string.digits


# --- Functional Core ---


def generate_share_key(length: int = SHARE_KEY_LENGTH) -> str:
    """Generate an alphanumeric secret for private preview links."""
    return "".join(secrets.choice(_SHARE_KEY_ALPHABET) for _ in range(length))


def accepted_values(submitted: Mapping[str, str]) -> dict[OptionName, str]:
    """Pick the submitted visibility options whose value is allowed."""
    accepted: dict[OptionName, str] = {}
    for name in OptionName:
        value = submitted.get(name.value)
        if value is None:
            continue
        if value in ALLOWED_VISIBILITY_VALUES:
            accepted[name] = value
        else:
            logger.debug("Ignoring invalid value for %s", name.value)
    return accepted


def reconcile(
    submitted: Mapping[str, str],
    prior: Mapping[OptionName, str],
    event_name: str = SITE_VISIBILITY_SAVED_EVENT,
) -> tuple[dict[OptionName, str], SettingsChangeEvent]:
    """
    Merge a form submission into the stored visibility options.

    Args:
        submitted: Raw form fields keyed by option name.
        prior: Currently stored values; never-set options are absent.
        event_name: Analytics event name.

    Returns:
        Tuple of (new_values, change_event). ``new_values`` holds every
        option that has a value after the merge.
    """
    accepted = accepted_values(submitted)
    new_values: dict[OptionName, str] = {}
    fields: dict[str, str] = {}

    for name in OptionName:
        current = prior.get(name)
        new_value = accepted.get(name, current)

        if name in accepted and (current or NOT_SET) != new_value:
            fields[f"{name.value}_toggled"] = "enabled" if new_value == "yes" else "disabled"

        if new_value is not None:
            new_values[name] = new_value
        fields[name.value] = new_value if new_value is not None else NOT_SET

    return new_values, SettingsChangeEvent(name=event_name, fields=fields)


def read_visibility_options(options: OptionsStorePort) -> dict[OptionName, str]:
    """Read stored visibility options, skipping ones never set."""
    values: dict[OptionName, str] = {}
    for name in OptionName:
        value = options.get(name.value)
        if value is not None:
            values[name] = value
    return values


# --- Component Entry Points ---


def run_save(
    inp: SaveVisibilityInput,
    *,
    options: OptionsStorePort,
    analytics: AnalyticsSinkPort,
    nonces: NonceVerifierPort,
    nonce_action: str = SETTINGS_NONCE_ACTION,
    event_name: str = SITE_VISIBILITY_SAVED_EVENT,
) -> SaveVisibilityOutput:
    """
    Save site visibility options submitted from the settings form.

    Args:
        inp: Submitted form fields plus the form nonce.
        options: Options store port.
        analytics: Analytics sink port.
        nonces: Nonce verifier port.
        nonce_action: Action name the nonce must have been issued for.
        event_name: Analytics event name.

    Returns:
        SaveVisibilityOutput; ``saved`` is False when the nonce was rejected.
    """
    if not inp.nonce or not nonces.verify(inp.nonce, nonce_action, inp.user_id):
        logger.info("Site visibility save skipped: nonce missing or invalid")
        return SaveVisibilityOutput(saved=False)

    prior = read_visibility_options(options)
    new_values, event = reconcile(inp.fields, prior, event_name)

    for name, value in accepted_values(inp.fields).items():
        options.set(name.value, value)

    analytics.record(event.name, event.fields)

    return SaveVisibilityOutput(saved=True, values=new_values, event=event)


def run_preload(
    inp: PreloadSettingsInput,
    *,
    options: OptionsStorePort,
    shop_permalink: str,
    key_factory: Callable[[], str] = generate_share_key,
) -> PreloadSettingsOutput:
    """
    Add site visibility settings to the shared admin settings payload.

    Creates the share key the first time the settings page is loaded.
    """
    if not inp.is_admin:
        return PreloadSettingsOutput(settings=inp.settings)

    settings: dict[str, Any] = dict(inp.settings)

    if inp.is_settings_page:
        options.add_if_absent(SHARE_KEY_OPTION, key_factory())

        settings["siteVisibilitySettings"] = {
            "shop_permalink": shop_permalink,
            OptionName.COMING_SOON.value: options.get(OptionName.COMING_SOON.value),
            OptionName.STORE_PAGES_ONLY.value: options.get(OptionName.STORE_PAGES_ONLY.value),
            OptionName.PRIVATE_LINK.value: options.get(OptionName.PRIVATE_LINK.value),
            SHARE_KEY_OPTION: options.get(SHARE_KEY_OPTION),
        }

    return PreloadSettingsOutput(settings=settings)
