"""Password Hashing: bcrypt hash/verify for user credentials.

Invariants:
    - Stored value is the bcrypt hash decoded as ASCII text
    - verify_password never raises on a malformed stored hash; it returns False
"""

import bcrypt


def hash_password(password: str, rounds: int = 10) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("ascii"))
    except ValueError:
        return False
