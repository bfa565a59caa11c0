"""
Password hashing for accounts created through invitation acceptance.
"""

import bcrypt

BCRYPT_ROUNDS = 12


def hash_password(plaintext: str) -> str:
    if not plaintext:
        raise ValueError("Cannot hash empty password")
    return bcrypt.hashpw(
        plaintext.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    ).decode("utf-8")
