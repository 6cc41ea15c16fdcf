"""
tests.test_sessions

Session token issuing/validation: integrity, freshness window and identity binding.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from tasksapi.auth.jwt import JwtConfig, SessionIssuer, SessionValidator
from tasksapi.errors import Expired, IdentityMismatch, MalformedToken, MissingToken

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
EPS = timedelta(seconds=1)


def test_valid_until_just_before_expiry(jwt_cfg: JwtConfig) -> None:
    token = SessionIssuer(jwt_cfg).issue("alice", now=NOW)
    claim = SessionValidator(jwt_cfg).validate(token, "alice", now=NOW + jwt_cfg.ttl - EPS)
    assert claim.identity == "alice"
    assert claim.issued_at == NOW
    assert claim.expires_at == NOW + jwt_cfg.ttl


def test_sub_second_issue_time_never_shortens_lifetime(jwt_cfg: JwtConfig) -> None:
    issued = NOW + timedelta(milliseconds=900)
    token = SessionIssuer(jwt_cfg).issue("alice", now=issued)
    validator = SessionValidator(jwt_cfg)
    claim = validator.validate(
        token, "alice", now=issued + jwt_cfg.ttl - timedelta(milliseconds=100)
    )
    assert claim.issued_at <= issued
    assert claim.expires_at >= issued + jwt_cfg.ttl


@pytest.mark.parametrize("offset", [timedelta(0), EPS])
def test_expired_at_and_after_expiry(jwt_cfg: JwtConfig, offset: timedelta) -> None:
    token = SessionIssuer(jwt_cfg).issue("alice", now=NOW)
    with pytest.raises(Expired):
        SessionValidator(jwt_cfg).validate(token, "alice", now=NOW + jwt_cfg.ttl + offset)


def test_token_for_one_identity_never_validates_for_another(jwt_cfg: JwtConfig) -> None:
    token = SessionIssuer(jwt_cfg).issue("alice", now=NOW)
    with pytest.raises(IdentityMismatch):
        SessionValidator(jwt_cfg).validate(token, "bob", now=NOW)


@pytest.mark.parametrize("token", ["", None])
def test_missing_token(jwt_cfg: JwtConfig, token: str | None) -> None:
    with pytest.raises(MissingToken):
        SessionValidator(jwt_cfg).validate(token, "alice", now=NOW)


def test_garbage_token_is_malformed(jwt_cfg: JwtConfig) -> None:
    with pytest.raises(MalformedToken):
        SessionValidator(jwt_cfg).validate("not.a.jwt", "alice", now=NOW)


def test_token_signed_with_other_key_is_malformed(jwt_cfg: JwtConfig) -> None:
    other = JwtConfig(alg="HS256", issuer=jwt_cfg.issuer, secret="another-key", ttl=jwt_cfg.ttl)
    token = SessionIssuer(other).issue("alice", now=NOW)
    with pytest.raises(MalformedToken):
        SessionValidator(jwt_cfg).validate(token, "alice", now=NOW)


def test_token_without_expiry_is_malformed(jwt_cfg: JwtConfig) -> None:
    token = jwt.encode(
        {"iss": jwt_cfg.issuer, "sub": "alice", "iat": int(NOW.timestamp())},
        jwt_cfg.secret,
        algorithm="HS256",
    )
    with pytest.raises(MalformedToken):
        SessionValidator(jwt_cfg).validate(token, "alice", now=NOW)


def test_issue_is_deterministic_for_same_inputs(jwt_cfg: JwtConfig) -> None:
    issuer = SessionIssuer(jwt_cfg)
    assert issuer.issue("alice", now=NOW) == issuer.issue("alice", now=NOW)
    assert issuer.issue("alice", now=NOW) != issuer.issue("alice", now=NOW + EPS)


def test_naive_now_is_treated_as_utc(jwt_cfg: JwtConfig) -> None:
    token = SessionIssuer(jwt_cfg).issue("alice", now=NOW.replace(tzinfo=None))
    claim = SessionValidator(jwt_cfg).decode(token)
    assert claim.issued_at == NOW


def test_clock_is_used_when_now_is_omitted(jwt_cfg: JwtConfig) -> None:
    issuer = SessionIssuer(jwt_cfg, clock=lambda: NOW)
    token = issuer.issue("alice")
    late = SessionValidator(jwt_cfg, clock=lambda: NOW + jwt_cfg.ttl)
    with pytest.raises(Expired):
        late.validate(token, "alice")


def test_non_positive_ttl_rejected(jwt_cfg: JwtConfig) -> None:
    cfg = JwtConfig(alg="HS256", issuer="tasksapi", secret="k", ttl=timedelta(0))
    with pytest.raises(ValueError):
        SessionIssuer(cfg)
