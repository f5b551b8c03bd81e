from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from src.adapters.auth.crypto import JWTNonceAdapter
from src.adapters.sqlite.repos import SQLiteUserRepo
from src.api.auth_utils import create_access_token, verify_password
from src.api.deps import (
    get_current_user,
    get_lifecycle_hooks,
    get_nonce_adapter,
    get_rules,
    get_user_repo,
)
from src.api.schemas import NonceResponse, Token, UserResponse
from src.domain.entities import User
from src.rules.models import Rules
from src.shell.hooks.lifecycle_hooks import LifecycleHooks

router = APIRouter()


@router.post("/login", response_model=Token)
async def login_for_access_token(
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    rules: Rules = Depends(get_rules),
    hooks: LifecycleHooks = Depends(get_lifecycle_hooks),
) -> Token:
    """Authenticate user, set the access token cookie and run login hooks."""
    user = user_repo.get_by_email(form_data.username)
    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if user.status != "active":
        raise HTTPException(status_code=400, detail="User account is inactive")

    ttl_minutes = rules.auth.access_token_ttl_minutes
    access_token = create_access_token(
        data={"sub": str(user.id)}, expires_delta=timedelta(minutes=ttl_minutes)
    )

    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=ttl_minutes * 60,
        expires=ttl_minutes * 60,
        samesite="lax",
        secure=False,  # Set to True for HTTPS prod
    )

    hooks.user_logged_in(user)

    return Token(access_token=access_token, token_type="bearer")


@router.post("/logout")
def logout(response: Response) -> dict[str, str]:
    """Log out user by clearing cookie."""
    response.delete_cookie(key="access_token")
    return {"status": "success"}


@router.get("/me", response_model=UserResponse)
def read_users_me(
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    """Get current user info."""
    return UserResponse(
        id=current_user.id,
        email=current_user.email,
        display_name=current_user.display_name,
        roles=list(current_user.roles),
    )


@router.get("/nonce", response_model=NonceResponse)
def issue_nonce(
    action: str = Query(..., min_length=1, max_length=100),
    current_user: User = Depends(get_current_user),
    nonces: JWTNonceAdapter = Depends(get_nonce_adapter),
) -> NonceResponse:
    """Issue an anti-forgery token for the current user and an action."""
    return NonceResponse(action=action, nonce=nonces.create(action, str(current_user.id)))
