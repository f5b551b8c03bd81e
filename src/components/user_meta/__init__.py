"""
User meta component - Launch-your-store user meta fields.
"""

from .component import (
    REGISTERED_META_FIELDS,
    registered_fields_for,
    run_get_user_meta,
    run_update_user_meta,
)
from .models import (
    GetUserMetaInput,
    MetaField,
    UpdateUserMetaInput,
    UserMetaError,
    UserMetaOutput,
)
from .ports import UserRepoPort

__all__ = [
    # Entry points
    "run_get_user_meta",
    "run_update_user_meta",
    "registered_fields_for",
    # Models
    "GetUserMetaInput",
    "UpdateUserMetaInput",
    "UserMetaOutput",
    "UserMetaError",
    "MetaField",
    # Ports
    "UserRepoPort",
    # Constants
    "REGISTERED_META_FIELDS",
]
