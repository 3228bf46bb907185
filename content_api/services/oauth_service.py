"""Google OAuth 2.0 linking for YouTube channels.

Flow:
    1. An authenticated user asks for a consent URL for one of the tracked
       channels. The ``state`` parameter is a short-lived signed JWT naming
       the channel and the requesting user.
    2. Google redirects back to the callback with ``code`` and ``state``.
       The state is validated, the code is exchanged at the token endpoint
       and the tokens are stored Fernet-encrypted on the channel.
    3. Access tokens are refreshed on demand with the stored refresh token.

Token endpoint calls go through the shared ``httpx.AsyncClient`` and are
retried with tenacity on 429, 5xx and transport errors (3 attempts,
exponential backoff). Other 4xx responses fail immediately with OAuthError.

Security Notes:
    - NEVER log tokens, codes or client secrets
    - Plaintext tokens only exist in memory between the HTTP call and encrypt()
"""

import uuid
from datetime import datetime, timedelta
from typing import Any
from urllib.parse import urlencode

import httpx
import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from content_api.config import GoogleOAuthSettings
from content_api.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    OAuthError,
)
from content_api.models import YouTubeChannel, utcnow
from content_api.repositories import Repository
from content_api.utils.encryption import DecryptionError, EncryptionService
from content_api.utils.jwt import JwtHelper

log = structlog.get_logger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
RETRIABLE_STATUS_CODES = (429, 500, 502, 503, 504)
TOKEN_REQUEST_TIMEOUT = 15.0


class TransientUpstreamError(Exception):
    """Token endpoint returned a retriable status (429/5xx)."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Google token endpoint returned {status_code}")


class GoogleOAuthService:
    """Links YouTube channels to Google accounts and keeps their tokens fresh.

    Example:
        >>> service = GoogleOAuthService(settings.google_oauth, jwt_helper,
        ...                              encryption_service, http_client, session)
        >>> url, state = await service.build_authorization_url(channel_id, user_id)
    """

    def __init__(
        self,
        settings: GoogleOAuthSettings,
        jwt_helper: JwtHelper,
        encryption_service: EncryptionService | None,
        http_client: httpx.AsyncClient,
        session: AsyncSession,
        retry_wait: wait_base | None = None,
    ) -> None:
        self.settings = settings
        self.jwt_helper = jwt_helper
        self.encryption_service = encryption_service
        self.http_client = http_client
        self.channels = Repository(YouTubeChannel, session)
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=8)

    def _require_configured(self) -> EncryptionService:
        if not self.settings.is_configured:
            raise ConfigurationError("Google OAuth is not configured")
        if self.encryption_service is None:
            raise ConfigurationError("Credential encryption is not configured (FERNET_KEY)")
        return self.encryption_service

    async def build_authorization_url(
        self, channel_id: uuid.UUID, user_id: uuid.UUID
    ) -> tuple[str, str]:
        """Build the Google consent URL for linking a channel.

        Returns:
            Tuple of (authorization_url, state).

        Raises:
            ConfigurationError: If OAuth or encryption is not configured.
            NotFoundError: If the channel does not exist.
        """
        self._require_configured()
        await self.channels.get_or_raise(channel_id)

        state = self.jwt_helper.create_state_token(
            {"sub": str(user_id), "channel_id": str(channel_id)}
        )
        params = {
            "client_id": self.settings.client_id,
            "redirect_uri": self.settings.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.settings.scopes),
            "access_type": "offline",
            "prompt": "consent",
            "include_granted_scopes": "true",
            "state": state,
        }
        log.info("oauth_authorization_started", channel_id=str(channel_id), user_id=str(user_id))
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}", state

    async def handle_callback(self, code: str, state: str) -> YouTubeChannel:
        """Exchange an authorization code and store the channel's tokens.

        Raises:
            AuthenticationError: If ``state`` is invalid or expired.
            OAuthError: If Google rejects the code.
        """
        encryption = self._require_configured()
        claims = self.jwt_helper.validate_state_token(state)
        try:
            channel_id = uuid.UUID(claims["channel_id"])
        except (KeyError, ValueError) as e:
            raise AuthenticationError("Invalid OAuth state") from e

        channel = await self.channels.get_or_raise(channel_id)
        tokens = await self._token_request(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.settings.redirect_uri,
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
            }
        )
        if "refresh_token" not in tokens:
            raise OAuthError("Google did not return a refresh token")

        channel = await self._store_tokens(channel, tokens, encryption)
        log.info("oauth_channel_linked", channel_id=str(channel.id), user_id=claims.get("sub"))
        return channel

    async def refresh_channel_token(self, channel_id: uuid.UUID) -> YouTubeChannel:
        """Refresh a linked channel's access token.

        Raises:
            ConflictError: If the channel is not linked or its stored
                credentials cannot be decrypted (relink required).
            OAuthError: If Google rejects the refresh token.
        """
        encryption = self._require_configured()
        channel = await self.channels.get_or_raise(channel_id)
        if not channel.is_oauth_linked:
            raise ConflictError("Channel is not linked to a Google account")

        try:
            refresh_token = encryption.decrypt(
                channel.oauth_refresh_token_encrypted, channel_id=str(channel.id)
            )
        except DecryptionError as e:
            log.error("oauth_refresh_token_unreadable", channel_id=str(channel.id))
            raise ConflictError("Stored credentials are unreadable; relink the channel") from e

        tokens = await self._token_request(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
            }
        )
        channel = await self._store_tokens(channel, tokens, encryption)
        log.info("oauth_token_refreshed", channel_id=str(channel.id))
        return channel

    async def _store_tokens(
        self,
        channel: YouTubeChannel,
        tokens: dict[str, Any],
        encryption: EncryptionService,
    ) -> YouTubeChannel:
        if "access_token" not in tokens:
            raise OAuthError("Google token response is missing access_token")

        values: dict[str, Any] = {
            "oauth_access_token_encrypted": encryption.encrypt(tokens["access_token"]),
            "oauth_token_expires_at": self._expiry(tokens.get("expires_in")),
        }
        # Google only returns a new refresh token on consent, not on refresh
        if tokens.get("refresh_token"):
            values["oauth_refresh_token_encrypted"] = encryption.encrypt(tokens["refresh_token"])
        return await self.channels.update(channel, values)

    @staticmethod
    def _expiry(expires_in: Any) -> datetime | None:
        try:
            return utcnow() + timedelta(seconds=int(expires_in))
        except (TypeError, ValueError):
            return None

    async def _token_request(self, form: dict[str, Any]) -> dict[str, Any]:
        """POST to the token endpoint with retry on transient failures.

        Raises:
            OAuthError: On non-retriable 4xx, on retry exhaustion, or on a
                response that is not JSON.
        """
        grant_type = form["grant_type"]

        @retry(
            retry=retry_if_exception_type((TransientUpstreamError, httpx.TransportError)),
            stop=stop_after_attempt(3),
            wait=self.retry_wait,
            before_sleep=lambda retry_state: log.warning(
                "oauth_token_request_retry",
                grant_type=grant_type,
                attempt=retry_state.attempt_number,
            ),
            reraise=True,
        )
        async def _post() -> httpx.Response:
            response = await self.http_client.post(
                GOOGLE_TOKEN_URL,
                data=form,
                headers={"Accept": "application/json"},
                timeout=TOKEN_REQUEST_TIMEOUT,
            )
            if response.status_code in RETRIABLE_STATUS_CODES:
                raise TransientUpstreamError(response.status_code)
            return response

        try:
            response = await _post()
        except TransientUpstreamError as e:
            log.error("oauth_token_request_failed", grant_type=grant_type, status=e.status_code)
            raise OAuthError(
                "Google token endpoint unavailable", upstream_status=e.status_code
            ) from e
        except httpx.TransportError as e:
            log.error("oauth_token_request_failed", grant_type=grant_type, error=type(e).__name__)
            raise OAuthError("Could not reach Google token endpoint") from e

        if response.status_code >= 400:
            error = _error_code(response)
            log.warning(
                "oauth_token_request_rejected",
                grant_type=grant_type,
                status=response.status_code,
                error=error,
            )
            raise OAuthError(
                f"Google rejected the token request: {error}",
                upstream_status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise OAuthError("Google token response was not valid JSON") from e


def _error_code(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "unknown_error"
    if isinstance(body, dict):
        return str(body.get("error", "unknown_error"))
    return "unknown_error"
