"""Fernet symmetric encryption for OAuth tokens.

YouTube OAuth access and refresh tokens are encrypted with Fernet before
they are written to ``youtube_channels``. The key comes from
``encryption.fernet_key`` (or the FERNET_KEY environment variable) and can be
generated with ``scripts/generate_secrets.py``.

Usage:
    from content_api.utils.encryption import EncryptionService

    service = EncryptionService(settings.encryption.fernet_key)
    encrypted = service.encrypt("ya29.a0...")
    decrypted = service.decrypt(encrypted)

Security Notes:
    - NEVER log or expose encrypted values or plaintext tokens
    - Key rotation requires re-linking every channel (tokens are not re-encrypted)
"""

from cryptography.fernet import Fernet, InvalidToken

from content_api.exceptions import ConfigurationError


class EncryptionKeyMissingError(ConfigurationError):
    """Raised when no Fernet key is configured or the key is malformed."""

    pass


class DecryptionError(Exception):
    """Raised when decryption fails due to invalid key or corrupted data.

    Attributes:
        channel_id: The channel associated with the failed decryption
            (if available). Useful for debugging without exposing secrets.
    """

    def __init__(self, message: str, channel_id: str | None = None) -> None:
        self.channel_id = channel_id
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with channel context if available."""
        if self.channel_id:
            return f"{super().__str__()} (channel_id={self.channel_id})"
        return super().__str__()


class EncryptionService:
    """Fernet encrypt/decrypt operations for credential storage.

    One instance is created per application and shared through
    ``app.state``; the key must be 32 url-safe base64-encoded bytes.

    Raises:
        EncryptionKeyMissingError: If the key is empty or malformed.
    """

    def __init__(self, key: str | None) -> None:
        if not key:
            raise EncryptionKeyMissingError(
                "Fernet key is required for OAuth token storage. "
                "Generate one with: python scripts/generate_secrets.py"
            )
        try:
            self._cipher = Fernet(key.encode())
        except ValueError as e:
            raise EncryptionKeyMissingError(
                "Invalid Fernet key format: must be 32 url-safe base64-encoded bytes"
            ) from e

    def encrypt(self, plaintext: str) -> bytes:
        """Encrypt plaintext string to bytes suitable for LargeBinary columns."""
        return self._cipher.encrypt(plaintext.encode())

    def decrypt(self, ciphertext: bytes, channel_id: str | None = None) -> str:
        """Decrypt ciphertext bytes to plaintext string.

        Args:
            ciphertext: The encrypted bytes from database storage.
            channel_id: Optional channel identifier for error context.

        Raises:
            DecryptionError: If decryption fails (invalid key or corrupted data).
        """
        try:
            return self._cipher.decrypt(ciphertext).decode()
        except InvalidToken as e:
            raise DecryptionError(
                "Decryption failed: invalid encryption key or corrupted data",
                channel_id=channel_id,
            ) from e
        except (TypeError, UnicodeDecodeError) as e:
            raise DecryptionError(
                f"Decryption failed: {type(e).__name__}",
                channel_id=channel_id,
            ) from e
