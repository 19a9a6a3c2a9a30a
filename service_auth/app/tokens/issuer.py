"""
Token issuance for the Auth service.
"""

from datetime import datetime, timedelta
from typing import Optional, Union

import jwt

from shared.secrets_manager import SecretProvider
from .claims import Claims, Principal, TokenKind, TokenPair, resolve_now

ALGORITHM = "HS256"

DEFAULT_ACCESS_TOKEN_TTL = timedelta(minutes=15)
DEFAULT_REFRESH_TOKEN_TTL = timedelta(days=7)

Duration = Union[timedelta, int]


def _to_timedelta(duration: Duration) -> timedelta:
    if isinstance(duration, int) and not isinstance(duration, bool):
        duration = timedelta(seconds=duration)
    if not isinstance(duration, timedelta):
        raise TypeError(f"Token lifetime must be a timedelta or seconds, got {duration!r}")
    if duration <= timedelta(0):
        raise ValueError("Token lifetime must be positive")
    if duration.microseconds:
        raise ValueError("Token lifetime must be a whole number of seconds")
    return duration


class TokenIssuer:
    """Creates signed access and refresh tokens.

    Example:
        issuer = TokenIssuer(SecretProvider(secret))
        pair = issuer.issue_pair(Principal(user_id=2, name="alice"))
    """

    def __init__(
        self,
        secrets: SecretProvider,
        access_ttl: Duration = DEFAULT_ACCESS_TOKEN_TTL,
        refresh_ttl: Duration = DEFAULT_REFRESH_TOKEN_TTL,
    ):
        self._secrets = secrets
        self.access_ttl = _to_timedelta(access_ttl)
        self.refresh_ttl = _to_timedelta(refresh_ttl)

        if self.access_ttl >= self.refresh_ttl:
            raise ValueError("Access token lifetime must be shorter than refresh token lifetime")

    def issue(
        self,
        principal: Principal,
        kind: TokenKind,
        duration: Duration,
        now: Optional[datetime] = None,
    ) -> str:
        """Issue one signed token valid from ``now`` for ``duration``."""
        return self._sign(self._build_claims(principal, kind, duration, now))

    def issue_pair(self, principal: Principal, now: Optional[datetime] = None) -> TokenPair:
        """Issue an access token and a refresh token for the same instant."""
        issued_at = resolve_now(now)

        access = self._build_claims(principal, TokenKind.ACCESS, self.access_ttl, issued_at)
        refresh = self._build_claims(principal, TokenKind.REFRESH, self.refresh_ttl, issued_at)

        return TokenPair(
            access_token=self._sign(access),
            refresh_token=self._sign(refresh),
            access_expires_in=access.remaining_seconds(issued_at),
            refresh_expires_in=refresh.remaining_seconds(issued_at),
        )

    def _build_claims(
        self,
        principal: Principal,
        kind: TokenKind,
        duration: Duration,
        now: Optional[datetime],
    ) -> Claims:
        issued_at = resolve_now(now)
        return Claims(
            principal=principal,
            issued_at=issued_at,
            not_before=issued_at,
            expires_at=issued_at + _to_timedelta(duration),
            token_kind=TokenKind(kind),
        )

    def _sign(self, claims: Claims) -> str:
        return jwt.encode(claims.to_payload(), self._secrets.secret(), algorithm=ALGORITHM)
