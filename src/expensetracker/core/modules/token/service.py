import asyncio
from datetime import datetime
from typing import Any

import jwt
import structlog
from pydantic import ValidationError as PydanticValidationError

from expensetracker.core.core import Service
from expensetracker.core.modules.token.models import AuthToken, Identity, TokenClaims
from expensetracker.core.modules.user.models import User
from expensetracker.errors import InvalidTokenError, MissingTokenError, TokenExpiredError
from expensetracker.utils import now

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"

# Expiry is checked against an explicit clock below, so PyJWT only verifies the signature and claim presence
_DECODE_OPTIONS: dict[str, Any] = {
    "verify_exp": False,
    "verify_iat": False,
    "require": ["sub", "username", "iat", "exp"],
}


class TokenService(Service):
    """Issues and verifies stateless signed session tokens. Nothing is stored."""

    @property
    def _secret(self) -> str:
        return self.core.config.token_secret_key

    async def issue_token(self, user: User, issued_at: datetime | None = None) -> AuthToken:
        issued = (issued_at or now()).timestamp()
        claims = {
            "sub": str(user.id),
            "username": user.username,
            "iat": issued,
            "exp": issued + self.core.config.token_ttl_seconds,
        }
        token = await asyncio.to_thread(jwt.encode, claims, self._secret, algorithm=ALGORITHM)
        return AuthToken(token)

    async def verify_token(self, auth_token: AuthToken | None, at: datetime | None = None) -> Identity:
        """Return the identity embedded in the token.

        Raises:
            MissingTokenError: no token was presented
            InvalidTokenError: bad signature or malformed payload
            TokenExpiredError: ``at`` (default: now) is at or past the embedded expiry
        """
        if auth_token is None or not auth_token.strip():
            raise MissingTokenError

        claims = await asyncio.to_thread(self._decode, auth_token)
        if (at or now()).timestamp() >= claims.exp:
            logger.debug("token_rejected", reason="expired", user_id=str(claims.sub))
            raise TokenExpiredError
        return claims.to_identity()

    def _decode(self, auth_token: str) -> TokenClaims:
        try:
            payload = jwt.decode(auth_token, self._secret, algorithms=[ALGORITHM], options=_DECODE_OPTIONS)
            return TokenClaims.model_validate(payload)
        except (jwt.InvalidTokenError, PydanticValidationError) as e:
            logger.debug("token_rejected", reason=type(e).__name__)
            raise InvalidTokenError from None
