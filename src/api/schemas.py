from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


# --- Auth ---
class Token(BaseModel):
    access_token: str
    token_type: str


class NonceResponse(BaseModel):
    action: str
    nonce: str


class UserResponse(BaseModel):
    id: UUID
    email: str
    display_name: str
    roles: list[str]


# --- Site Visibility ---
class SiteVisibilitySettingsResponse(BaseModel):
    """Settings payload for the site visibility settings page."""

    settings: dict[str, Any]
    nonce: str


class SaveVisibilityResponse(BaseModel):
    saved: bool
    values: dict[str, str] = Field(default_factory=dict)


# --- User Meta ---
class UserMetaUpdateRequest(BaseModel):
    meta: dict[str, Any]


class UserMetaResponse(BaseModel):
    id: UUID
    meta: dict[str, str | None]


class UserMetaErrorResponse(BaseModel):
    field: str | None
    code: str
    message: str


# --- Shipping Tour ---
class ShippingTourResponse(BaseModel):
    show: bool
    config: dict[str, Any] | None = None


class CloseTourResponse(BaseModel):
    updated: dict[str, str]
