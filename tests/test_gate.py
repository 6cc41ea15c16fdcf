from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tasksapi.auth.gate import AuthorizationGate
from tasksapi.auth.jwt import JwtConfig, SessionIssuer, SessionValidator
from tasksapi.auth.models import GateState
from tasksapi.errors import Expired, IdentityMismatch, MalformedToken, MissingToken

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def gate(jwt_cfg: JwtConfig) -> AuthorizationGate:
    return AuthorizationGate(SessionValidator(jwt_cfg))


@pytest.fixture
def alice_token(jwt_cfg: JwtConfig) -> str:
    return SessionIssuer(jwt_cfg).issue("alice", now=NOW)


def test_admits_matching_identity(gate: AuthorizationGate, alice_token: str) -> None:
    decision = gate.evaluate(alice_token, "alice", now=NOW)
    assert decision.state is GateState.admitted
    assert decision.admitted
    assert decision.denied_at is None
    assert decision.error is None
    assert decision.claim is not None and decision.claim.identity == "alice"
    assert gate.admit(alice_token, "alice", now=NOW) == "alice"


def test_denies_without_token(gate: AuthorizationGate) -> None:
    decision = gate.evaluate("", "alice", now=NOW)
    assert decision.state is GateState.denied
    assert decision.denied_at is GateState.anonymous
    assert isinstance(decision.error, MissingToken)
    assert decision.claim is None


def test_denies_malformed_token(gate: AuthorizationGate) -> None:
    decision = gate.evaluate("abc", "alice", now=NOW)
    assert decision.state is GateState.denied
    assert decision.denied_at is GateState.token_presented
    assert isinstance(decision.error, MalformedToken)


def test_denies_expired_token(gate: AuthorizationGate, alice_token: str, jwt_cfg: JwtConfig) -> None:
    decision = gate.evaluate(alice_token, "alice", now=NOW + jwt_cfg.ttl + timedelta(seconds=1))
    assert decision.state is GateState.denied
    assert decision.denied_at is GateState.token_presented
    assert isinstance(decision.error, Expired)


def test_denies_other_tenant(gate: AuthorizationGate, alice_token: str) -> None:
    decision = gate.evaluate(alice_token, "bob", now=NOW)
    assert decision.state is GateState.denied
    assert decision.denied_at is GateState.validated
    assert isinstance(decision.error, IdentityMismatch)
    with pytest.raises(IdentityMismatch):
        gate.admit(alice_token, "bob", now=NOW)
