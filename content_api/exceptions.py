"""Shared exceptions for the application.

Services and repositories raise these domain exceptions; the FastAPI
application maps them to JSON error responses in ``content_api.main``.
Each class carries the HTTP status and machine-readable code used in
the response body so route handlers never build error payloads by hand.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from content_api.models import TaskStatus


class ContentApiError(Exception):
    """Base class for errors that surface as structured API responses.

    Attributes:
        message: Human-readable description returned as ``detail``.
        status_code: HTTP status code for the response.
        code: Machine-readable error code returned as ``code``.
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body."""
        body: dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class ConfigurationError(ContentApiError):
    """Raised when required configuration is missing or invalid.

    At startup this is fatal (the host logs it and exits). At request time
    it means an optional integration (Google OAuth, credential encryption)
    was used without being configured.
    """

    status_code = 503
    code = "NOT_CONFIGURED"


class NotFoundError(ContentApiError):
    """Raised when an entity does not exist."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: Any) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} not found: {entity_id}",
            details={"entity": entity, "id": str(entity_id)},
        )


class ConflictError(ContentApiError):
    """Raised when a write would violate a uniqueness rule."""

    status_code = 409
    code = "CONFLICT"


class AuthenticationError(ContentApiError):
    """Raised when credentials or bearer tokens are missing or invalid."""

    status_code = 401
    code = "UNAUTHORIZED"


class PermissionDeniedError(ContentApiError):
    """Raised when an authenticated user lacks the required role."""

    status_code = 403
    code = "FORBIDDEN"


class OAuthError(ContentApiError):
    """Raised when the Google OAuth token endpoint rejects a request.

    Attributes:
        upstream_status: HTTP status returned by Google, if any.
    """

    status_code = 502
    code = "OAUTH_ERROR"

    def __init__(self, message: str, upstream_status: int | None = None) -> None:
        self.upstream_status = upstream_status
        details = {"upstream_status": upstream_status} if upstream_status else None
        super().__init__(message, details=details)


class InvalidStateTransitionError(ContentApiError):
    """Raised when attempting an invalid TaskStatus transition.

    Only transitions listed in ``Task.VALID_TRANSITIONS`` are allowed.

    Attributes:
        from_status: The current TaskStatus before the attempted transition.
        to_status: The TaskStatus that was attempted but is not valid.

    Example:
        >>> task.status = TaskStatus.TODO
        >>> task.status = TaskStatus.DONE  # Invalid - skips in_progress/review
        InvalidStateTransitionError: Invalid transition: todo → done
    """

    status_code = 409
    code = "INVALID_STATE_TRANSITION"

    def __init__(self, message: str, from_status: "TaskStatus", to_status: "TaskStatus"):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            message,
            details={"from_status": from_status.value, "to_status": to_status.value},
        )

    def __str__(self) -> str:
        """Return error message with transition context."""
        base_message = super().__str__()
        return f"{base_message} (from={self.from_status.value}, to={self.to_status.value})"
