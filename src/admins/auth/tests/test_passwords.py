import bcrypt

from src.admins.auth.passwords import hash_password, verify_password


def test_hash_password_is_salted():
    first = hash_password("correct-horse")
    second = hash_password("correct-horse")

    assert first != second
    assert verify_password("correct-horse", first)
    assert verify_password("correct-horse", second)


def test_verify_wrong_password():
    password_hash = bcrypt.hashpw(b"correct-horse", bcrypt.gensalt(rounds=4)).decode()

    assert not verify_password("battery-staple", password_hash)


def test_verify_against_malformed_hash():
    assert not verify_password("correct-horse", "not-a-bcrypt-hash")
