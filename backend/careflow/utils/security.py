"""
Credential hashing.
"""

import bcrypt


def hash_credential(credential: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(credential.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_credential(credential: str, hashed: str) -> bool:
    """Check a plain credential against its stored bcrypt hash."""
    if not credential or not hashed:
        return False
    try:
        return bcrypt.checkpw(credential.encode(), hashed.encode())
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
