"""
tasksapi.auth.jwt

Session token issuing and validation.

Responsibilities:
- Mint short-lived HS256 JWTs binding an identity to an expiry (`SessionIssuer`).
- Verify signature, freshness and identity of a presented token (`SessionValidator`).

Note:
- There is no revocation list; a token is trusted until its embedded expiry, so the
  configured ttl is the upper bound on how long a leaked token stays usable.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from tasksapi.auth.models import SessionClaim
from tasksapi.errors import Expired, IdentityMismatch, MalformedToken, MissingToken

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer are enforced during decoding.
    alg: str
    issuer: str
    secret: str
    ttl: timedelta


class SessionIssuer:
    def __init__(self, cfg: JwtConfig, *, clock: Clock = utcnow) -> None:
        if cfg.ttl <= timedelta(0):
            raise ValueError("token ttl must be positive")
        self._cfg = cfg
        self._clock = clock

    def issue(self, identity: str, now: datetime | None = None) -> str:
        issued = _as_utc(now or self._clock())
        # NumericDate is whole seconds: floor iat, ceil exp so that exp >= now + ttl.
        payload: dict[str, Any] = {
            "iss": self._cfg.issuer,
            "sub": identity,
            "iat": math.floor(issued.timestamp()),
            "exp": math.ceil((issued + self._cfg.ttl).timestamp()),
        }
        return jwt.encode(payload, self._cfg.secret, algorithm=self._cfg.alg)


class SessionValidator:
    def __init__(self, cfg: JwtConfig, *, clock: Clock = utcnow) -> None:
        self._cfg = cfg
        self._clock = clock

    def decode(self, token: str | None) -> SessionClaim:
        """
        Verify signature and structure only. Freshness is checked by `validate`
        against an explicit `now` so it stays testable.
        """

        if not token:
            raise MissingToken()
        try:
            payload = jwt.decode(
                token,
                self._cfg.secret,
                algorithms=[self._cfg.alg],
                issuer=self._cfg.issuer,
                options={
                    "require": ["exp", "iat", "iss", "sub"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
            claim = SessionClaim(
                identity=str(payload["sub"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
            )
        except (InvalidTokenError, TypeError, ValueError, OverflowError) as e:
            raise MalformedToken() from e

        if not claim.identity or claim.expires_at <= claim.issued_at:
            raise MalformedToken()
        return claim

    def is_fresh(self, claim: SessionClaim, now: datetime | None = None) -> bool:
        return claim.is_fresh(_as_utc(now or self._clock()))

    def validate(
        self,
        token: str | None,
        expected_identity: str,
        now: datetime | None = None,
    ) -> SessionClaim:
        claim = self.decode(token)
        if not self.is_fresh(claim, now):
            raise Expired()
        if claim.identity != expected_identity:
            raise IdentityMismatch()
        return claim


# --- Module Notes -----------------------------------------------------------
# Both classes are constructed once per process in `tasksapi.api.deps.build_container`
# and shared read-only across requests; neither performs I/O.
