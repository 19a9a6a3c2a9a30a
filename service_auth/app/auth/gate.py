"""
Bearer token authentication for protected Auth service routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from fastapi import Request

from shared.errors import AuthenticationError, TokenError, TokenErrorCode
from shared.logging import get_logger, set_user_context
from shared.metrics import MetricsCollector
from ..tokens.claims import Claims, Principal, TokenKind
from ..validation.token_validator import TokenValidator

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthContext:
    """Authenticated request context derived from a verified token."""

    principal: Principal
    claims: Claims
    token: str


class AuthenticationGate:
    """Authenticates requests carrying ``Authorization: Bearer <token>``.

    Used as a FastAPI dependency; a failure raises before the route handler
    runs, and the service's exception handlers turn it into a 401.
    """

    def __init__(
        self,
        validator: TokenValidator,
        *,
        required_kind: TokenKind = TokenKind.ACCESS,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.validator = validator
        self.required_kind = required_kind
        self.metrics = metrics
        self.logger = get_logger("auth.gate")

    async def __call__(self, request: Request) -> AuthContext:
        context = self.authenticate(request.headers.get("Authorization"))

        # Cache context on the request for downstream handlers/middleware.
        request.state.auth_context = context
        set_user_context(context.principal.user_id)
        return context

    def authenticate(self, authorization: Optional[str], now: Optional[datetime] = None) -> AuthContext:
        """Validate the bearer token in an Authorization header value."""
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            self._record("missing")
            raise AuthenticationError("Missing or invalid Authorization header")

        token = authorization[len(BEARER_PREFIX):].strip()
        if not token:
            self._record("missing")
            raise AuthenticationError("Authorization header contained empty bearer token")

        try:
            claims = self.validator.validate(token, now)
        except TokenError as e:
            self.logger.warning("Bearer token rejected", code=e.code, reason=e.message)
            self._record(e.code)
            raise

        if claims.token_kind is not self.required_kind:
            self.logger.warning(
                "Bearer token has wrong kind",
                user_id=claims.principal.user_id,
                token_kind=claims.token_kind.value
            )
            self._record(TokenErrorCode.WRONG_TOKEN_KIND.value)
            raise TokenError(
                TokenErrorCode.WRONG_TOKEN_KIND,
                f"Expected a {self.required_kind.value} token",
                details={"token_kind": claims.token_kind.value}
            )

        self._record("ok")
        return AuthContext(principal=claims.principal, claims=claims, token=token)

    def _record(self, status: str) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter("token_validations_total", status=status)
