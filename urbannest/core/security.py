"""
Password hashing (bcrypt) and password-reset token helpers.
"""
import hashlib
import secrets
from typing import Tuple

import bcrypt

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
PASSWORD_MAX_BYTES = 72


def password_too_long(plain: str) -> bool:
    return len(plain.encode()) > PASSWORD_MAX_BYTES


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time bcrypt comparison; malformed hashes never match."""
    if not plain or not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        return False


def hash_reset_token(raw_token: str) -> str:
    """One-way digest stored in place of the emailed reset token"""
    return hashlib.sha256(raw_token.encode()).hexdigest()


def generate_reset_token() -> Tuple[str, str]:
    """
    Create a new password-reset token.

    Returns:
        tuple: (raw token to email, hash to persist)
    """
    raw_token = secrets.token_hex(20)
    return raw_token, hash_reset_token(raw_token)
