"""
Site visibility component - "Coming soon" mode settings.
"""

from .component import (
    SETTINGS_NONCE_ACTION,
    SHARE_KEY_LENGTH,
    SITE_VISIBILITY_SAVED_EVENT,
    accepted_values,
    generate_share_key,
    read_visibility_options,
    reconcile,
    run_preload,
    run_save,
)
from .models import (
    PreloadSettingsInput,
    PreloadSettingsOutput,
    SaveVisibilityInput,
    SaveVisibilityOutput,
    SettingsChangeEvent,
)
from .ports import AnalyticsSinkPort, NonceVerifierPort, OptionsStorePort

__all__ = [
    # Entry points
    "run_save",
    "run_preload",
    # Functional core
    "reconcile",
    "accepted_values",
    "read_visibility_options",
    "generate_share_key",
    # Models
    "SaveVisibilityInput",
    "SaveVisibilityOutput",
    "PreloadSettingsInput",
    "PreloadSettingsOutput",
    "SettingsChangeEvent",
    # Ports
    "OptionsStorePort",
    "AnalyticsSinkPort",
    "NonceVerifierPort",
    # Constants
    "SETTINGS_NONCE_ACTION",
    "SITE_VISIBILITY_SAVED_EVENT",
    "SHARE_KEY_LENGTH",
]
