"""Google OAuth link-flow schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class AuthorizationUrlResponse(BaseModel):
    authorization_url: str
    state: str


class OAuthLinkResult(BaseModel):
    """Outcome of a successful code exchange or token refresh."""

    channel_id: UUID
    linked: bool
    token_expires_at: datetime | None
