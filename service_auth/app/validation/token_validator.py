"""
Token validation service for Auth service.
"""

from datetime import datetime
from typing import Dict, Any, Optional

import jwt
from jwt.utils import base64url_decode, base64url_encode
from pydantic import BaseModel

from shared.errors import TokenError, TokenErrorCode
from shared.secrets_manager import SecretProvider
from ..tokens.claims import Claims, resolve_now
from ..tokens.issuer import ALGORITHM

REQUIRED_CLAIMS = ["sub", "name", "iat", "nbf", "exp", "typ"]
SEGMENT_NAMES = ("header", "payload", "signature")


def _is_canonical_segment(segment: str) -> bool:
    """True when the segment is unpadded base64url that re-encodes to itself."""
    try:
        return base64url_encode(base64url_decode(segment)).decode("ascii") == segment
    except ValueError:
        return False


class TokenVerificationRequest(BaseModel):
    """Request model for token verification."""
    token: str


class TokenVerificationResponse(BaseModel):
    """Response model for token verification."""
    valid: bool
    claims: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class TokenValidator:
    """
    Verifies tokens issued by TokenIssuer.

    Validation depends only on the token string, the signing secret and the
    time passed in; nothing is looked up. The signature is checked before
    the payload is parsed, so unsigned claim values never reach the time
    checks.
    """

    def __init__(self, secrets: SecretProvider):
        self._secrets = secrets

    def validate(self, token: str, now: Optional[datetime] = None) -> Claims:
        """
        Verify a token and return its claims.

        Raises:
            TokenError: MALFORMED, BAD_SIGNATURE, NOT_YET_VALID or EXPIRED
        """
        if not isinstance(token, str):
            raise TokenError(TokenErrorCode.MALFORMED, "Token must be a string")

        segments = token.split(".")
        if len(segments) != 3 or not all(segments):
            raise TokenError(
                TokenErrorCode.MALFORMED,
                "Token must have three non-empty segments"
            )

        # Lenient base64 decoding maps several texts onto one token; only the
        # canonical encoding of each segment is accepted
        for name, segment in zip(SEGMENT_NAMES, segments):
            if not _is_canonical_segment(segment):
                raise TokenError(
                    TokenErrorCode.MALFORMED,
                    f"Token {name} is not canonical base64url"
                )

        payload = self._verify_signature(token)

        try:
            claims = Claims.from_payload(payload)
        except ValueError as e:
            raise TokenError(TokenErrorCode.MALFORMED, f"Invalid claims: {e}")

        current = resolve_now(now)
        if current < claims.not_before:
            raise TokenError(
                TokenErrorCode.NOT_YET_VALID,
                details={"not_before": claims.not_before.isoformat()}
            )
        if current >= claims.expires_at:
            raise TokenError(
                TokenErrorCode.EXPIRED,
                details={"expires_at": claims.expires_at.isoformat()}
            )

        return claims

    def _verify_signature(self, token: str) -> Dict[str, Any]:
        """Check the HMAC and decode the claim set without any time checks."""
        try:
            return jwt.decode(
                token,
                self._secrets.secret(),
                algorithms=[ALGORITHM],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidSignatureError:
            raise TokenError(TokenErrorCode.BAD_SIGNATURE)
        except jwt.InvalidAlgorithmError as e:
            raise TokenError(TokenErrorCode.BAD_SIGNATURE, f"Unsupported algorithm: {e}")
        except jwt.DecodeError as e:
            raise TokenError(TokenErrorCode.MALFORMED, f"Token could not be decoded: {e}")
        except jwt.InvalidTokenError as e:
            raise TokenError(TokenErrorCode.MALFORMED, f"Invalid token: {e}")
