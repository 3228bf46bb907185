"""Password hashing and verification (PBKDF2-SHA256).

Stored format: ``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``.
The iteration count is stored with each hash so it can be raised later
without invalidating existing users.
"""

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 310_000
SALT_BYTES = 16


def _derive(password: str, salt: str, iterations: int) -> str:
    key = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    )
    return key.hex()


def hash_password(password: str, salt: str | None = None, iterations: int = ITERATIONS) -> str:
    """Hash a password with a random salt."""
    if salt is None:
        salt = secrets.token_hex(SALT_BYTES)
    digest = _derive(password, salt, iterations)
    return f"{ALGORITHM}${iterations}${salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its stored hash (constant-time comparison)."""
    try:
        algorithm, iterations, salt, digest = password_hash.split("$")
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != ALGORITHM:
        return False
    return hmac.compare_digest(_derive(password, salt, rounds), digest)
