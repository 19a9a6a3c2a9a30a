"""
Claims model for tokens issued by the Auth service.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict


class TokenKind(str, Enum):
    """Role of a credential. Signed into every token as the ``typ`` claim."""

    ACCESS = "access"
    REFRESH = "refresh"


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` as an aware UTC datetime, defaulting to the current time.

    Naive datetimes are taken to be UTC.
    """
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def _to_numeric_date(moment: datetime) -> Union[int, float]:
    # Whole seconds stay integers; sub-second instants keep their microseconds
    seconds = moment.timestamp()
    return int(seconds) if seconds.is_integer() else seconds


def _from_numeric_date(value: Any) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"NumericDate must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"NumericDate must be finite, got {value!r}")
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"NumericDate out of range: {value!r}") from e


@dataclass(frozen=True)
class Principal:
    """Authenticated identity a token speaks for."""

    user_id: int
    name: str

    def __post_init__(self):
        if isinstance(self.user_id, bool) or not isinstance(self.user_id, int) or self.user_id < 0:
            raise ValueError(f"user_id must be a non-negative integer, got {self.user_id!r}")
        if not isinstance(self.name, str):
            raise ValueError(f"name must be a string, got {self.name!r}")


@dataclass(frozen=True)
class Claims:
    """Signed payload of a token: who, when, and for what."""

    principal: Principal
    issued_at: datetime
    not_before: datetime
    expires_at: datetime
    token_kind: TokenKind

    def __post_init__(self):
        if not (self.not_before <= self.issued_at < self.expires_at):
            raise ValueError("Claims must satisfy not_before <= issued_at < expires_at")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JWT claim set."""
        return {
            "sub": str(self.principal.user_id),
            "name": self.principal.name,
            "iat": _to_numeric_date(self.issued_at),
            "nbf": _to_numeric_date(self.not_before),
            "exp": _to_numeric_date(self.expires_at),
            "typ": self.token_kind.value,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Claims":
        """Rebuild claims from a verified JWT claim set.

        Raises:
            ValueError: A claim is missing or carries an invalid value
        """
        try:
            subject = payload["sub"]
            name = payload["name"]
            kind = TokenKind(payload["typ"])
            issued_at = _from_numeric_date(payload["iat"])
            not_before = _from_numeric_date(payload["nbf"])
            expires_at = _from_numeric_date(payload["exp"])
        except KeyError as e:
            raise ValueError(f"Missing claim: {e.args[0]}") from e

        if not isinstance(subject, str) or not (subject.isascii() and subject.isdigit()):
            raise ValueError(f"Subject must be a numeric user id, got {subject!r}")
        if not isinstance(name, str):
            raise ValueError("Name claim must be a string")

        return cls(
            principal=Principal(user_id=int(subject), name=name),
            issued_at=issued_at,
            not_before=not_before,
            expires_at=expires_at,
            token_kind=kind,
        )

    def remaining_seconds(self, now: Optional[datetime] = None) -> int:
        """Whole seconds left before expiry, never negative."""
        remaining = (self.expires_at - resolve_now(now)).total_seconds()
        return max(int(remaining), 0)


class TokenPair(BaseModel):
    """Access and refresh credentials handed to a caller."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str
    access_expires_in: int
    refresh_expires_in: int
    token_type: str = "Bearer"
