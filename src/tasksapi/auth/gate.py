"""
tasksapi.auth.gate

Authorization gate for tenant-scoped requests.

Responsibilities:
- Walk a request through Anonymous -> TokenPresented -> Validated -> Admitted.
- Deny with a typed error at the first failing transition.
- Guarantee that a structurally valid token for one identity never admits a request
  addressed to another identity's namespace.
"""

from __future__ import annotations

from datetime import datetime

from tasksapi.auth.jwt import SessionValidator
from tasksapi.auth.models import GateDecision, GateState, SessionClaim
from tasksapi.errors import AuthError, Expired, IdentityMismatch, MissingToken


class AuthorizationGate:
    def __init__(self, validator: SessionValidator) -> None:
        self._validator = validator

    def evaluate(
        self,
        token: str | None,
        target_identity: str,
        now: datetime | None = None,
    ) -> GateDecision:
        def deny(at: GateState, error: AuthError, claim: SessionClaim | None = None):
            return GateDecision(
                GateState.denied, target_identity, denied_at=at, error=error, claim=claim
            )

        state = GateState.anonymous
        if not token:
            return deny(state, MissingToken())

        # Signature/structure, then freshness.
        state = GateState.token_presented
        try:
            claim = self._validator.decode(token)
        except AuthError as e:
            return deny(state, e)
        if not self._validator.is_fresh(claim, now):
            return deny(state, Expired(), claim)

        # Tenant isolation enforcement point.
        state = GateState.validated
        if claim.identity != target_identity:
            return deny(state, IdentityMismatch(), claim)

        return GateDecision(GateState.admitted, target_identity, claim=claim)

    def admit(self, token: str | None, target_identity: str, now: datetime | None = None) -> str:
        """
        Raising variant of `evaluate`: returns the admitted identity or raises the denial.
        """

        decision = self.evaluate(token, target_identity, now)
        if decision.error is not None:
            raise decision.error
        return decision.target_identity


# --- Module Notes -----------------------------------------------------------
# The FastAPI dependency `tasksapi.auth.deps.require_tenant` is the only caller in the
# request path; every tasks route depends on it before touching storage.
