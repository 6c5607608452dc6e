"""Revocation list for signed-out session tokens.

Tokens are stateless, so sign-out records the token's jti until the token
would have expired anyway. The list lives in process memory; a restart
forgets it, which is acceptable for a single front-desk instance.
"""

import time
from typing import Dict, Optional


class TokenRevocationList:
    """jti -> expiry (Unix seconds) of revoked tokens."""

    def __init__(self):
        self._revoked: Dict[str, float] = {}

    def revoke(self, jti: str, expires_at: float) -> None:
        self._purge()
        self._revoked[jti] = expires_at

    def is_revoked(self, jti: Optional[str]) -> bool:
        if not jti:
            return False
        expires_at = self._revoked.get(jti)
        if expires_at is None:
            return False
        if expires_at <= time.time():
            # Sync dependencies call this from the threadpool
            self._revoked.pop(jti, None)
            return False
        return True

    def clear(self) -> None:
        self._revoked.clear()

    def _purge(self) -> None:
        now = time.time()
        for jti, expires_at in list(self._revoked.items()):
            if expires_at <= now:
                self._revoked.pop(jti, None)


# Module-level instance shared by the gate and the logout endpoint
revoked_tokens = TokenRevocationList()
