from __future__ import annotations

from tasksapi.auth.passwords import hash_secret, verify_secret


def test_hash_is_not_plaintext_and_verifies() -> None:
    h = hash_secret("s3cret", rounds=4)
    assert "s3cret" not in h
    assert verify_secret("s3cret", h)
    assert not verify_secret("wrong", h)


def test_hash_is_salted() -> None:
    assert hash_secret("s3cret", rounds=4) != hash_secret("s3cret", rounds=4)


def test_corrupt_hash_does_not_verify() -> None:
    assert not verify_secret("s3cret", "not-a-bcrypt-hash")
