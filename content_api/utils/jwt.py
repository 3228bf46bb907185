"""JWT issuance and validation for API bearer tokens.

Tokens are HS256-signed with the symmetric key from ``jwt.key``. Validation
checks signature, issuer, audience and expiry with zero leeway: a token that
expired one second ago is rejected.

The same helper signs the short-lived ``state`` parameter of the Google
OAuth flow, under a separate audience so a state token can never be used as
an API bearer token (and vice versa).

Usage:
    helper = JwtHelper(settings.jwt)
    issued = helper.generate_token(user)
    claims = helper.validate_token(issued.access_token)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from jose import ExpiredSignatureError, JWTError, jwt

from content_api.config import JwtSettings
from content_api.exceptions import AuthenticationError

if TYPE_CHECKING:
    from content_api.models import User

OAUTH_STATE_AUDIENCE_SUFFIX = ":oauth-state"
OAUTH_STATE_TTL = timedelta(minutes=10)

_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_aud": True,
    "verify_iss": True,
    "verify_exp": True,
    "require_exp": True,
    "require_iat": True,
    "require_sub": True,
    "leeway": 0,
}


@dataclass(frozen=True)
class IssuedToken:
    """A signed access token and its expiry."""

    access_token: str
    expires_at: datetime
    expires_in: int
    token_type: str = "Bearer"


class JwtHelper:
    """Issues and validates bearer tokens for the API."""

    def __init__(self, settings: JwtSettings) -> None:
        self._settings = settings

    @property
    def issuer(self) -> str:
        return self._settings.issuer

    @property
    def audience(self) -> str:
        return self._settings.audience

    @property
    def state_audience(self) -> str:
        return f"{self._settings.audience}{OAUTH_STATE_AUDIENCE_SUFFIX}"

    def encode(self, claims: dict[str, Any]) -> str:
        """Sign arbitrary claims with the configured key and algorithm."""
        return jwt.encode(claims, self._settings.key, algorithm=self._settings.algorithm)

    def generate_token(self, user: "User", now: datetime | None = None) -> IssuedToken:
        """Issue an access token for a user.

        Args:
            user: Authenticated user.
            now: Issue time (defaults to current UTC time).

        Returns:
            IssuedToken with the encoded JWT and its expiry.
        """
        issued_at = now or datetime.now(timezone.utc)
        lifetime = timedelta(minutes=self._settings.expiry_minutes)
        expires_at = issued_at + lifetime

        claims = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.full_name,
            "role": user.role.value,
            "iss": self._settings.issuer,
            "aud": self._settings.audience,
            "iat": issued_at,
            "exp": expires_at,
        }
        return IssuedToken(
            access_token=self.encode(claims),
            expires_at=expires_at,
            expires_in=int(lifetime.total_seconds()),
        )

    def _decode(self, token: str, audience: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._settings.key,
                algorithms=[self._settings.algorithm],
                audience=audience,
                issuer=self._settings.issuer,
                options=_DECODE_OPTIONS,
            )
        except ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired") from e
        except JWTError as e:
            raise AuthenticationError("Invalid token") from e

    def validate_token(self, token: str) -> dict[str, Any]:
        """Validate an API bearer token and return its claims.

        Raises:
            AuthenticationError: On bad signature, issuer, audience, missing
                claims, or expiry.
        """
        return self._decode(token, self.audience)

    def create_state_token(self, payload: dict[str, Any], now: datetime | None = None) -> str:
        """Sign an OAuth ``state`` value carrying ``payload``.

        ``payload`` must contain ``sub`` (the requesting user id).
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            **payload,
            "iss": self._settings.issuer,
            "aud": self.state_audience,
            "iat": issued_at,
            "exp": issued_at + OAUTH_STATE_TTL,
        }
        return self.encode(claims)

    def validate_state_token(self, token: str) -> dict[str, Any]:
        """Validate an OAuth ``state`` value and return its claims."""
        return self._decode(token, self.state_audience)
