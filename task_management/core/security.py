"""
Password hashing and verification utilities.
"""

from typing import Optional

import bcrypt

DEFAULT_BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of the input
BCRYPT_MAX_BYTES = 72

_decoy_hash: Optional[str] = None


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash a plain password using bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor (log2 of the key expansion iterations)

    Returns:
        Bcrypt hashed password as string
    """
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(_password_bytes(password), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: Plain text password from user input
        hashed_password: Previously hashed password from database

    Returns:
        True if password matches, False otherwise (including a malformed hash)
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def decoy_password_hash(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash checked against when a login names an unknown account.

    Verifying against it costs the same as a real verification.
    """
    global _decoy_hash
    if _decoy_hash is None:
        _decoy_hash = hash_password("decoy-password-never-matches", rounds=rounds)
    return _decoy_hash
