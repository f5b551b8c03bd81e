from src.api.auth_utils import NONCE_EXPIRE_MINUTES, create_nonce, verify_nonce


class JWTNonceAdapter:
    """Nonce adapter backed by signed, expiring JWTs.

    Implements both NonceIssuerPort and NonceVerifierPort.
    """

    def __init__(self, ttl_minutes: int = NONCE_EXPIRE_MINUTES) -> None:
        self.ttl_minutes = ttl_minutes

    def create(self, action: str, user_id: str | None = None) -> str:
        return create_nonce(action, user_id, expires_minutes=self.ttl_minutes)

    def verify(self, token: str, action: str, user_id: str | None = None) -> bool:
        if not token:
            return False
        return verify_nonce(token, action, user_id)
