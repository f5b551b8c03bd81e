"""
User meta component - REST-exposed per-user flags.

Registers the launch-your-store user meta fields and applies reads and
writes coming through the users endpoint. The fields are only registered
for shop managers and administrators; for anyone else every key is
unknown.
"""

from __future__ import annotations

from uuid import UUID

from src.components.coming_soon_banner.ports import UserMetaStorePort
from src.domain.entities import BANNER_DISMISSED_META_KEY, TOUR_HIDDEN_META_KEY, User

from .models import (
    GetUserMetaInput,
    MetaField,
    UpdateUserMetaInput,
    UserMetaError,
    UserMetaOutput,
)
from .ports import UserRepoPort

REGISTERED_META_FIELDS: tuple[MetaField, ...] = (
    MetaField(
        key=TOUR_HIDDEN_META_KEY,
        description=(
            "Indicate whether the user has dismissed the site visibility tour "
            "on the home screen."
        ),
    ),
    MetaField(
        key=BANNER_DISMISSED_META_KEY,
        description="Indicate whether the user has dismissed the coming soon notice or not.",
    ),
)


def registered_fields_for(actor: User) -> dict[str, MetaField]:
    """Meta fields registered for the acting user."""
    if not actor.is_manager_or_admin():
        return {}
    return {f.key: f for f in REGISTERED_META_FIELDS if f.show_in_rest}


def _can_edit(actor: User, target_id: UUID) -> bool:
    return actor.id == target_id or "administrator" in actor.roles


def _failure(code: str, message: str) -> UserMetaOutput:
    return UserMetaOutput(success=False, errors=(UserMetaError(code=code, message=message),))


def _resolve_target(
    actor: User, target_id: str, user_repo: UserRepoPort
) -> User | UserMetaOutput:
    """Load the target user, or return the failure output."""
    try:
        uid = UUID(str(target_id))
    except (ValueError, TypeError):
        return _failure("invalid_user_id", "Invalid user ID format")

    if not _can_edit(actor, uid):
        return _failure("access_denied", "Access denied")

    target = user_repo.get_by_id(uid)
    if target is None:
        return _failure("user_not_found", "User not found")

    return target


def run_get_user_meta(
    inp: GetUserMetaInput,
    *,
    user_repo: UserRepoPort,
    user_meta: UserMetaStorePort,
) -> UserMetaOutput:
    """Read every registered meta field for the target user."""
    target = _resolve_target(inp.actor, inp.target_id, user_repo)
    if isinstance(target, UserMetaOutput):
        return target

    uid = str(target.id)
    meta = {key: user_meta.get(uid, key) for key in registered_fields_for(inp.actor)}
    return UserMetaOutput(meta=meta)


def run_update_user_meta(
    inp: UpdateUserMetaInput,
    *,
    user_repo: UserRepoPort,
    user_meta: UserMetaStorePort,
) -> UserMetaOutput:
    """
    Update registered meta fields for the target user.

    All keys are validated before anything is written.
    """
    target = _resolve_target(inp.actor, inp.target_id, user_repo)
    if isinstance(target, UserMetaOutput):
        return target

    fields = registered_fields_for(inp.actor)
    errors: list[UserMetaError] = []
    for key, value in inp.meta.items():
        if key not in fields:
            errors.append(
                UserMetaError(
                    code="unregistered_meta_key",
                    message=f"Meta key '{key}' is not registered",
                    field=key,
                )
            )
        elif not isinstance(value, str):
            errors.append(
                UserMetaError(
                    code="invalid_meta_value",
                    message=f"Meta key '{key}' must be a {fields[key].type}",
                    field=key,
                )
            )

    if errors:
        return UserMetaOutput(success=False, errors=tuple(errors))

    uid = str(target.id)
    for key, value in inp.meta.items():
        user_meta.set(uid, key, str(value))

    return UserMetaOutput(meta={key: user_meta.get(uid, key) for key in fields})
