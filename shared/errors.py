"""
Shared error handling for the Todo Auth service.
"""

from enum import Enum
from typing import Dict, Any, Optional
from pydantic import BaseModel

from .logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class TokenErrorCode(str, Enum):
    """Reasons a presented token is refused."""

    MALFORMED = "MALFORMED"
    BAD_SIGNATURE = "BAD_SIGNATURE"
    NOT_YET_VALID = "NOT_YET_VALID"
    EXPIRED = "EXPIRED"
    WRONG_TOKEN_KIND = "WRONG_TOKEN_KIND"


class TodoAuthException(Exception):
    """Base exception for Todo Auth services."""

    status_code: int = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class AuthenticationError(TodoAuthException):
    """Authentication-related errors."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUTHENTICATION_ERROR", message, details)


class TokenError(AuthenticationError):
    """A presented token failed validation or was used for the wrong purpose."""

    _DEFAULT_MESSAGES = {
        TokenErrorCode.MALFORMED: "Token is malformed",
        TokenErrorCode.BAD_SIGNATURE: "Token signature is invalid",
        TokenErrorCode.NOT_YET_VALID: "Token is not valid yet",
        TokenErrorCode.EXPIRED: "Token has expired",
        TokenErrorCode.WRONG_TOKEN_KIND: "Token kind is not accepted here",
    }

    def __init__(
        self,
        code: TokenErrorCode,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message or self._DEFAULT_MESSAGES[code], details)
        self.error_code = code
        self.code = code.value


class SecretUnconfiguredError(TodoAuthException):
    """The signing secret is missing; the process must not start."""

    status_code = 500

    def __init__(self, message: str = "Signing secret is not configured", details: Optional[Dict[str, Any]] = None):
        super().__init__("SECRET_UNCONFIGURED", message, details)
