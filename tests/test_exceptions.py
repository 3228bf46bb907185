"""Tests for domain exceptions and their API response bodies."""

import uuid

import pytest

from content_api.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    ContentApiError,
    InvalidStateTransitionError,
    NotFoundError,
    OAuthError,
    PermissionDeniedError,
)
from content_api.models import TaskStatus


class TestContentApiError:
    @pytest.mark.parametrize(
        "exc_class,status_code,code",
        [
            (ConfigurationError, 503, "NOT_CONFIGURED"),
            (ConflictError, 409, "CONFLICT"),
            (AuthenticationError, 401, "UNAUTHORIZED"),
            (PermissionDeniedError, 403, "FORBIDDEN"),
        ],
    )
    def test_status_and_code(self, exc_class, status_code: int, code: str) -> None:
        exc = exc_class("message")

        assert isinstance(exc, ContentApiError)
        assert exc.status_code == status_code
        assert exc.to_dict() == {"detail": "message", "code": code}

    def test_details_included_when_present(self) -> None:
        exc = ConflictError("taken", details={"email": "a@example.com"})

        assert exc.to_dict() == {
            "detail": "taken",
            "code": "CONFLICT",
            "details": {"email": "a@example.com"},
        }


class TestNotFoundError:
    def test_message_and_details(self) -> None:
        entity_id = uuid.uuid4()

        exc = NotFoundError("Video", entity_id)

        assert exc.status_code == 404
        assert exc.message == f"Video not found: {entity_id}"
        assert exc.details == {"entity": "Video", "id": str(entity_id)}


class TestOAuthError:
    def test_upstream_status_in_details(self) -> None:
        exc = OAuthError("rejected", upstream_status=400)

        assert exc.status_code == 502
        assert exc.upstream_status == 400
        assert exc.to_dict()["details"] == {"upstream_status": 400}

    def test_no_upstream_status(self) -> None:
        exc = OAuthError("unreachable")

        assert "details" not in exc.to_dict()


class TestInvalidStateTransitionError:
    def test_str_includes_transition(self) -> None:
        exc = InvalidStateTransitionError(
            "Invalid transition", from_status=TaskStatus.TODO, to_status=TaskStatus.DONE
        )

        assert exc.status_code == 409
        assert str(exc) == "Invalid transition (from=todo, to=done)"
        assert exc.details == {"from_status": "todo", "to_status": "done"}
