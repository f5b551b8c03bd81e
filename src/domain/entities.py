from datetime import datetime
from enum import Enum
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
RoleType = Literal["administrator", "shop_manager", "editor", "customer"]
YesNo = Literal["yes", "no"]

ALLOWED_VISIBILITY_VALUES: tuple[str, ...] = ("yes", "no")

# Value reported for an option that has never been stored.
NOT_SET = "not set"


class OptionName(str, Enum):
    """Site-visibility options accepted from the settings form."""

    COMING_SOON = "coming_soon"
    STORE_PAGES_ONLY = "store_pages_only"
    PRIVATE_LINK = "private_link"


# --- Option keys ---
SHARE_KEY_OPTION = "share_key"
CREATED_DEFAULT_SHIPPING_ZONES_OPTION = "created_default_shipping_zones"
REVIEWED_DEFAULT_SHIPPING_ZONES_OPTION = "reviewed_default_shipping_zones"

# --- User meta keys ---
BANNER_DISMISSED_META_KEY = "coming_soon_banner_dismissed"
TOUR_HIDDEN_META_KEY = "launch_your_store_tour_hidden"


# --- User & Auth ---

class User(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    email: str
    display_name: str
    password_hash: str
    roles: list[RoleType] = Field(default_factory=list)
    status: Literal["active", "disabled"] = "active"
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def is_manager_or_admin(self) -> bool:
        return "shop_manager" in self.roles or "administrator" in self.roles
