from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, status

from src.adapters.auth.crypto import JWTNonceAdapter
from src.adapters.sqlite.repos import SQLiteUserMetaStore, SQLiteUserRepo
from src.api.deps import get_current_user, get_nonce_adapter, get_user_meta_store, get_user_repo
from src.api.schemas import UserMetaErrorResponse, UserMetaResponse, UserMetaUpdateRequest
from src.components.coming_soon_banner import REST_NONCE_ACTION
from src.components.user_meta import (
    GetUserMetaInput,
    UpdateUserMetaInput,
    UserMetaOutput,
    run_get_user_meta,
    run_update_user_meta,
)
from src.domain.entities import User

router = APIRouter()


def _raise_for_errors(result: UserMetaOutput) -> None:
    codes = {e.code for e in result.errors}
    if "access_denied" in codes:
        raise HTTPException(status_code=403, detail="Access denied")
    if "user_not_found" in codes or "invalid_user_id" in codes:
        raise HTTPException(status_code=404, detail="User not found")
    raise HTTPException(
        status_code=400,
        detail={
            "message": "Invalid user meta",
            "errors": [
                UserMetaErrorResponse(field=e.field, code=e.code, message=e.message).model_dump()
                for e in result.errors
            ],
        },
    )


@router.get("/{user_id}/meta", response_model=UserMetaResponse)
def get_user_meta(
    user_id: str,
    current_user: User = Depends(get_current_user),
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    user_meta: SQLiteUserMetaStore = Depends(get_user_meta_store),
) -> Any:
    """Read the registered meta fields of a user."""
    result = run_get_user_meta(
        GetUserMetaInput(actor=current_user, target_id=user_id),
        user_repo=user_repo,
        user_meta=user_meta,
    )
    if not result.success:
        _raise_for_errors(result)
    return UserMetaResponse(id=user_id, meta=result.meta)


@router.post("/{user_id}", response_model=UserMetaResponse)
def update_user_meta(
    user_id: str,
    req: UserMetaUpdateRequest,
    x_rest_nonce: str | None = Header(default=None),
    current_user: User = Depends(get_current_user),
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    user_meta: SQLiteUserMetaStore = Depends(get_user_meta_store),
    nonces: JWTNonceAdapter = Depends(get_nonce_adapter),
) -> Any:
    """
    Update registered meta fields of a user.

    Used by the coming soon banner's dismiss control. Requires the REST
    nonce embedded in the banner (``X-REST-Nonce`` header).
    """
    if not x_rest_nonce or not nonces.verify(x_rest_nonce, REST_NONCE_ACTION, str(current_user.id)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Cookie nonce is invalid"
        )

    result = run_update_user_meta(
        UpdateUserMetaInput(actor=current_user, target_id=user_id, meta=req.meta),
        user_repo=user_repo,
        user_meta=user_meta,
    )
    if not result.success:
        _raise_for_errors(result)
    return UserMetaResponse(id=user_id, meta=result.meta)
