import os
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import jwt
from passlib.context import CryptContext

SECRET_KEY = os.environ.get("STORE_SECRET_KEY", "dev-secret-unsafe")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24  # 24 hours
NONCE_EXPIRE_MINUTES = 60 * 12

# Subject used for nonces issued to anonymous visitors.
ANONYMOUS_SUBJECT = "0"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    result: bool = pwd_context.verify(plain_password, hashed_password)
    return result


def get_password_hash(password: str) -> str:
    result: str = pwd_context.hash(password)
    return result


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode in the token
        expires_delta: Optional custom expiration delta
        now_utc: Current UTC time (for testing/determinism). Defaults to datetime.now(UTC).
    """
    to_encode = data.copy()
    current_time = now_utc if now_utc is not None else datetime.now(UTC)

    if expires_delta:
        expire = current_time + expires_delta
    else:
        expire = current_time + timedelta(minutes=15)

    to_encode.update({"exp": expire})
    encoded_jwt: str = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any] | None:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return cast(dict[str, Any], payload)
    except jwt.JWTError:
        return None


def create_nonce(
    action: str,
    user_id: str | None = None,
    expires_minutes: int = NONCE_EXPIRE_MINUTES,
    now_utc: datetime | None = None,
) -> str:
    """
    Create an anti-forgery token bound to an action and a user.

    The token is a short-lived signed JWT; it cannot be replayed for a
    different action or on behalf of a different user.
    """
    claims = {"typ": "nonce", "act": action, "sub": user_id or ANONYMOUS_SUBJECT}
    return create_access_token(claims, timedelta(minutes=expires_minutes), now_utc=now_utc)


def verify_nonce(token: str, action: str, user_id: str | None = None) -> bool:
    payload = decode_access_token(token)
    if not payload or payload.get("typ") != "nonce":
        return False
    return payload.get("act") == action and payload.get("sub") == (user_id or ANONYMOUS_SUBJECT)
