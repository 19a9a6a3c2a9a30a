"""
Auth service for the Todo API.
"""

import sys
from typing import Optional

from fastapi import Depends

from shared.base_service import BaseService
from shared.config import ServiceConfig, get_config
from shared.errors import SecretUnconfiguredError, TokenError
from shared.logging import get_logger
from shared.secrets_manager import SecretProvider
from .auth.gate import AuthContext, AuthenticationGate
from .tokens.claims import TokenKind, TokenPair
from .tokens.issuer import TokenIssuer
from .tokens.refresh import RefreshCoordinator, TokenRefreshRequest
from .validation.token_validator import (
    TokenValidator,
    TokenVerificationRequest,
    TokenVerificationResponse,
)

SERVICE_NAME = "auth"
SERVICE_PORT = 8010


class AuthService(BaseService):
    """Auth service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None):
        config = config or get_config(SERVICE_NAME, SERVICE_PORT)

        # Fails before the app exists when the secret is missing
        self.secrets = SecretProvider.from_config(config)

        self.token_issuer = TokenIssuer(
            self.secrets,
            access_ttl=config.access_token_ttl_seconds,
            refresh_ttl=config.refresh_token_ttl_seconds,
        )
        self.token_validator = TokenValidator(self.secrets)
        self.refresh_coordinator = RefreshCoordinator(self.token_issuer, self.token_validator)

        super().__init__(SERVICE_NAME, SERVICE_PORT, config=config)

        self.gate = AuthenticationGate(self.token_validator, metrics=self.metrics)

        self._setup_auth_routes()

    def _setup_auth_routes(self):
        """Set up auth-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": SERVICE_NAME,
                "message": "Todo API - Auth Service",
                "version": "1.0.0"
            }

        @self.app.post("/auth/verify", response_model=TokenVerificationResponse)
        async def verify_token(request: TokenVerificationRequest):
            """Token verification endpoint."""
            try:
                claims = self.token_validator.validate(request.token)
            except TokenError as e:
                self.metrics.increment_counter("token_validations_total", status=e.code)
                return TokenVerificationResponse(valid=False, error=e.code)

            self.metrics.increment_counter("token_validations_total", status="ok")
            return TokenVerificationResponse(valid=True, claims=claims.to_payload())

        @self.app.post("/auth/refresh", response_model=TokenPair)
        async def refresh_token(request: TokenRefreshRequest):
            """Token refresh endpoint."""
            try:
                pair = self.refresh_coordinator.refresh(request.refresh_token)
            except TokenError as e:
                self.metrics.increment_counter("token_refreshes_total", status=e.code)
                raise

            self.metrics.increment_counter("token_refreshes_total", status="ok")
            self.metrics.increment_counter("tokens_issued_total", kind=TokenKind.ACCESS.value)
            self.metrics.increment_counter("tokens_issued_total", kind=TokenKind.REFRESH.value)
            return pair

        @self.app.get("/auth/me")
        async def current_user(context: AuthContext = Depends(self.gate)):
            """Return the principal behind the presented access token."""
            return {
                "user_id": context.principal.user_id,
                "name": context.principal.name,
                "token_kind": context.claims.token_kind.value,
                "expires_at": context.claims.expires_at.isoformat(),
            }


def create_app(config: Optional[ServiceConfig] = None):
    """Create FastAPI application."""
    service = AuthService(config)
    return service.app


def main() -> int:
    """Start the service, refusing to serve without a signing secret."""
    try:
        service = AuthService()
    except SecretUnconfiguredError as e:
        get_logger(SERVICE_NAME).critical("Startup aborted", code=e.code, message=e.message)
        return 1

    service.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
