import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from src.adapters.auth.crypto import JWTNonceAdapter
from src.adapters.sqlite.repos import SQLiteOptionsStore, SQLiteUserMetaStore, SQLiteUserRepo
from src.adapters.tracks import LoggingTracksSink, create_tracks_sink
from src.api.auth_utils import decode_access_token
from src.domain.entities import User
from src.domain.policy import StorefrontPolicy
from src.rules.loader import load_rules
from src.rules.models import Rules
from src.shell.hooks.lifecycle_hooks import LifecycleHooks, register_launch_your_store_hooks


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("STORE_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "store.db")
        self.rules_path = Path(os.environ.get("STORE_RULES_PATH", self.base_dir / "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


def get_policy(rules: Rules = Depends(get_rules)) -> StorefrontPolicy:
    return StorefrontPolicy(rules)


# --- Stores ---
def get_options_store(settings: Settings = Depends(get_settings)) -> SQLiteOptionsStore:
    return SQLiteOptionsStore(settings.db_path)


def get_user_meta_store(settings: Settings = Depends(get_settings)) -> SQLiteUserMetaStore:
    return SQLiteUserMetaStore(settings.db_path)


def get_user_repo(settings: Settings = Depends(get_settings)) -> SQLiteUserRepo:
    return SQLiteUserRepo(settings.db_path)


# --- Adapters ---

# Analytics sink singleton
_tracks_sink_instance: LoggingTracksSink | None = None


def get_tracks_sink() -> LoggingTracksSink:
    """Get analytics sink singleton."""
    global _tracks_sink_instance
    if _tracks_sink_instance is None:
        _tracks_sink_instance = create_tracks_sink()
    return _tracks_sink_instance


def get_nonce_adapter(rules: Rules = Depends(get_rules)) -> JWTNonceAdapter:
    return JWTNonceAdapter(ttl_minutes=rules.auth.nonce_ttl_minutes)


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def _resolve_user(request: Request, token: str | None, user_repo: SQLiteUserRepo) -> User | None:
    # Cookie first (HttpOnly), then Authorization header
    cookie_token = request.cookies.get("access_token")
    if cookie_token and cookie_token.startswith("Bearer "):
        token = cookie_token.split(" ")[1]

    if not token:
        return None

    payload = decode_access_token(token)
    if not payload or payload.get("typ") == "nonce":
        return None

    user_id = payload.get("sub")
    if user_id is None or not isinstance(user_id, str):
        return None

    try:
        user = user_repo.get_by_id(UUID(user_id))
    except ValueError:
        return None

    if user is None or user.status != "active":
        return None
    return user


async def get_optional_user(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
) -> User | None:
    """Current user, or None for anonymous visitors."""
    return _resolve_user(request, token, user_repo)


async def get_current_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_store_manager(
    user: User = Depends(get_current_user),
) -> User:
    """Current user, who must be a shop manager or administrator."""
    if not user.is_manager_or_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return user


# --- Lifecycle Hooks ---
def get_lifecycle_hooks(
    rules: Rules = Depends(get_rules),
    options: SQLiteOptionsStore = Depends(get_options_store),
    user_meta: SQLiteUserMetaStore = Depends(get_user_meta_store),
    analytics: LoggingTracksSink = Depends(get_tracks_sink),
    nonces: JWTNonceAdapter = Depends(get_nonce_adapter),
) -> LifecycleHooks:
    """Request-scoped hook registry with the launch-your-store handlers."""
    return register_launch_your_store_hooks(
        LifecycleHooks(),
        options=options,
        user_meta=user_meta,
        analytics=analytics,
        nonces=nonces,
        nonce_issuer=nonces,
        settings_url=rules.site_visibility.settings_url,
        rest_url_template=rules.banner.rest_url_template,
        is_store_page=StorefrontPolicy(rules).is_store_page,
        settings_nonce_action=rules.site_visibility.settings_nonce_action,
        saved_event_name=rules.site_visibility.saved_event_name,
    )
