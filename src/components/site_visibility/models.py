"""
Site visibility component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.entities import OptionName


@dataclass(frozen=True)
class SettingsChangeEvent:
    """
    Result of one reconciliation pass, handed to the analytics sink.

    ``fields`` carries ``<option>`` with the final value for every option and
    ``<option>_toggled`` for each option whose value changed.
    """

    name: str
    fields: dict[str, str]

    @property
    def values(self) -> dict[str, str]:
        return {o.value: self.fields[o.value] for o in OptionName}

    @property
    def transitions(self) -> dict[str, str]:
        return {
            o.value: self.fields[f"{o.value}_toggled"]
            for o in OptionName
            if f"{o.value}_toggled" in self.fields
        }


@dataclass(frozen=True)
class SaveVisibilityInput:
    """Input for a settings form submission."""

    fields: dict[str, str]
    nonce: str | None = None
    user_id: str | None = None


@dataclass(frozen=True)
class SaveVisibilityOutput:
    """Output from a settings form submission."""

    saved: bool
    values: dict[OptionName, str] = field(default_factory=dict)
    event: SettingsChangeEvent | None = None


@dataclass(frozen=True)
class PreloadSettingsInput:
    """Input for preloading site visibility settings into the admin payload."""

    settings: dict[str, Any]
    is_admin: bool
    is_settings_page: bool


@dataclass(frozen=True)
class PreloadSettingsOutput:
    """Output from preloading settings."""

    settings: dict[str, Any]
