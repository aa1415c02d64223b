"""Unit tests for password hashing."""

from tasklists.auth.passwords import hash_password, verify_password


def test_hash_is_not_the_password():
    password_hash = hash_password("correct horse")

    assert password_hash != "correct horse"
    assert password_hash.startswith("$argon2")


def test_verify_accepts_matching_password():
    assert verify_password("correct horse", hash_password("correct horse")) is True


def test_verify_rejects_wrong_password():
    assert verify_password("battery staple", hash_password("correct horse")) is False


def test_verify_rejects_unknown_hash_format():
    assert verify_password("correct horse", "plain-text") is False


def test_hashes_are_salted():
    assert hash_password("same") != hash_password("same")
