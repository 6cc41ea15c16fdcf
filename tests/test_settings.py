from __future__ import annotations

from datetime import timedelta

import pydantic
import pytest

from tasksapi.settings import DEV_JWT_SECRET, Settings


def test_defaults() -> None:
    s = Settings()
    assert s.token_ttl == timedelta(minutes=10)
    assert s.jwt_alg == "HS256"


def test_secret_hidden_from_repr() -> None:
    s = Settings(jwt_secret="super-secret-value")
    assert "super-secret-value" not in repr(s)


def test_prod_rejects_builtin_secret() -> None:
    with pytest.raises(pydantic.ValidationError):
        Settings(env="prod", jwt_secret=DEV_JWT_SECRET)


def test_prod_accepts_supplied_secret() -> None:
    s = Settings(env="prod", jwt_secret="from-the-vault")
    assert s.env == "prod"


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKS_TOKEN_TTL_MINUTES", "3")
    assert Settings().token_ttl == timedelta(minutes=3)
