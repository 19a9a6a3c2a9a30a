"""
Signing secret management for the Todo Auth service.
"""

from typing import Optional, Union

from .config import BaseConfig
from .errors import SecretUnconfiguredError
from .logging import get_logger

# HS256 keys shorter than the digest size weaken the MAC (RFC 7518, section 3.2)
MIN_SECRET_BYTES = 32

logger = get_logger("auth.secrets")


class SecretProvider:
    """
    Holds the symmetric signing secret for the lifetime of the process.

    The secret is read once at startup and never changes afterwards. Build
    one instance per process and hand it to the token issuer and validator.
    """

    def __init__(self, secret: Optional[Union[str, bytes]]):
        """
        Initialize the secret provider.

        Args:
            secret: Raw signing secret

        Raises:
            SecretUnconfiguredError: If the secret is missing or blank
        """
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not secret or not secret.strip():
            raise SecretUnconfiguredError()

        if len(secret) < MIN_SECRET_BYTES:
            logger.warning(
                "Signing secret is shorter than recommended",
                length=len(secret),
                recommended=MIN_SECRET_BYTES
            )

        self._secret = secret

    @classmethod
    def from_config(cls, config: BaseConfig) -> "SecretProvider":
        """
        Build the provider from loaded service configuration.

        Args:
            config: Configuration loaded from the process environment

        Returns:
            SecretProvider instance
        """
        if config.jwt_secret is None:
            logger.error("Signing secret missing from environment", variable="TODO_AUTH_JWT_SECRET")
            raise SecretUnconfiguredError(
                "Signing secret is not configured; set TODO_AUTH_JWT_SECRET"
            )
        return cls(config.jwt_secret.get_secret_value())

    def secret(self) -> bytes:
        """Return the signing secret."""
        return self._secret

    def __repr__(self) -> str:
        return "SecretProvider(secret='**********')"
