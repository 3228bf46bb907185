"""Cross-cutting utilities.

Modules:
    encryption: Fernet encryption for stored OAuth tokens.
    jwt: Bearer token issuance and validation.
    logging: structlog configuration and flush-on-exit.
    passwords: PBKDF2 password hashing.
"""

from content_api.utils.encryption import (
    DecryptionError,
    EncryptionKeyMissingError,
    EncryptionService,
)
from content_api.utils.jwt import IssuedToken, JwtHelper
from content_api.utils.passwords import hash_password, verify_password

__all__ = [
    "DecryptionError",
    "EncryptionKeyMissingError",
    "EncryptionService",
    "IssuedToken",
    "JwtHelper",
    "hash_password",
    "verify_password",
]
