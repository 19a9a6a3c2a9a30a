"""
Refresh token exchange for the Auth service.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from shared.errors import TokenError, TokenErrorCode
from shared.logging import get_logger
from .claims import TokenKind, TokenPair, resolve_now
from .issuer import TokenIssuer
from ..validation.token_validator import TokenValidator


class TokenRefreshRequest(BaseModel):
    """Request model for token refresh."""
    refresh_token: str


class RefreshCoordinator:
    """Exchanges a valid refresh token for a brand-new token pair.

    The presented refresh token is not revoked; it stays usable until its
    own expiry.
    """

    def __init__(self, issuer: TokenIssuer, validator: TokenValidator):
        self.issuer = issuer
        self.validator = validator
        self.logger = get_logger("auth.refresh")

    def refresh(self, refresh_token: str, now: Optional[datetime] = None) -> TokenPair:
        """
        Validate a refresh token and issue a new pair for its principal.

        Raises:
            TokenError: Any validation failure, or WRONG_TOKEN_KIND when the
                token is not a refresh token
        """
        now = resolve_now(now)

        # Validation errors outrank the kind check
        claims = self.validator.validate(refresh_token, now)

        if claims.token_kind is not TokenKind.REFRESH:
            self.logger.warning(
                "Refresh attempted with non-refresh token",
                user_id=claims.principal.user_id,
                token_kind=claims.token_kind.value
            )
            raise TokenError(
                TokenErrorCode.WRONG_TOKEN_KIND,
                "Only refresh tokens can be exchanged for a new pair",
                details={"token_kind": claims.token_kind.value}
            )

        pair = self.issuer.issue_pair(claims.principal, now)

        self.logger.info(
            "Token pair refreshed",
            user_id=claims.principal.user_id,
            access_expires_in=pair.access_expires_in
        )

        return pair
