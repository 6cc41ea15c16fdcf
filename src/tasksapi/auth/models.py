"""
tasksapi.auth.models

Auth domain models.

Responsibilities:
- Define the decoded session claim (`SessionClaim`).
- Define the gate's states and its terminal decision (`GateState`, `GateDecision`).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime

from tasksapi.errors import AuthError


@dataclass(frozen=True, slots=True)
class SessionClaim:
    """
    Identity proof carried inside a signed token. Never persisted.
    """

    identity: str
    issued_at: datetime
    expires_at: datetime

    def is_fresh(self, now: datetime) -> bool:
        return now < self.expires_at


class GateState(enum.StrEnum):
    anonymous = "ANONYMOUS"
    token_presented = "TOKEN_PRESENTED"
    validated = "VALIDATED"
    admitted = "ADMITTED"
    denied = "DENIED"


@dataclass(frozen=True, slots=True)
class GateDecision:
    state: GateState
    target_identity: str
    # Set only when state == denied: the state the request had reached when it was refused.
    denied_at: GateState | None = None
    error: AuthError | None = None
    # Set only when the token verified (admitted, or denied on expiry/identity mismatch).
    claim: SessionClaim | None = None

    @property
    def admitted(self) -> bool:
        return self.state is GateState.admitted


# --- Module Notes -----------------------------------------------------------
# Keep these models free of FastAPI/SQLAlchemy imports so they can be reused by CLIs and tests.
