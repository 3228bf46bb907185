"""Route tests for /api/tasks: CRUD, the status workflow, assignment and comments."""

import uuid
from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from content_api.models import UserRole


@pytest.fixture
def employee(register_user) -> tuple[str, dict[str, str]]:
    """Registered employee: (user id, bearer header)."""
    body = register_user(email="worker@example.com")
    return body["user"]["id"], {"Authorization": f"Bearer {body['access_token']}"}


@pytest.fixture
def create_task(client: TestClient) -> Callable[..., dict]:
    def _create(headers: dict[str, str], **payload) -> dict:
        payload.setdefault("title", "Edit thumbnail")
        response = client.post("/api/tasks", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


class TestTaskCrud:
    def test_create_task_records_creator(
        self, client: TestClient, employee, create_task
    ) -> None:
        """[P0] The creator comes from the token; new tasks start in todo."""
        user_id, headers = employee

        task = create_task(headers, title="Write script", priority="high", due_date="2026-12-01")

        assert task["created_by_id"] == user_id
        assert task["status"] == "todo"
        assert task["priority"] == "high"
        assert task["completed_at"] is None

    def test_get_and_update(self, client: TestClient, employee, create_task) -> None:
        _, headers = employee
        task = create_task(headers)

        updated = client.put(
            f"/api/tasks/{task['id']}",
            json={"title": "Edit thumbnail v2", "priority": "urgent"},
            headers=headers,
        )
        fetched = client.get(f"/api/tasks/{task['id']}", headers=headers)

        assert updated.status_code == 200
        assert fetched.json()["title"] == "Edit thumbnail v2"
        assert fetched.json()["priority"] == "urgent"

    def test_unknown_task(self, client: TestClient, auth_headers) -> None:
        response = client.get(f"/api/tasks/{uuid.uuid4()}", headers=auth_headers())

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_list_filters_by_status(self, client: TestClient, employee, create_task) -> None:
        _, headers = employee
        first = create_task(headers, title="First")
        create_task(headers, title="Second")
        client.post(
            f"/api/tasks/{first['id']}/status", json={"status": "in_progress"}, headers=headers
        )

        response = client.get("/api/tasks", params={"status": "in_progress"}, headers=headers)

        assert response.status_code == 200
        assert [t["title"] for t in response.json()] == ["First"]

    def test_mine_lists_open_assigned_tasks(
        self, client: TestClient, employee, create_task, admin_headers: dict[str, str]
    ) -> None:
        user_id, headers = employee
        create_task(admin_headers, title="Assigned", assignee_id=user_id)
        create_task(admin_headers, title="Unassigned")

        response = client.get("/api/tasks/mine", headers=headers)

        assert response.status_code == 200
        assert [t["title"] for t in response.json()] == ["Assigned"]


class TestTaskDelete:
    def test_creator_can_delete(self, client: TestClient, employee, create_task) -> None:
        _, headers = employee
        task = create_task(headers)

        response = client.delete(f"/api/tasks/{task['id']}", headers=headers)

        assert response.status_code == 204
        assert client.get(f"/api/tasks/{task['id']}", headers=headers).status_code == 404

    def test_other_employee_cannot_delete(
        self, client: TestClient, employee, create_task, register_user
    ) -> None:
        """[P0] Only the creator or an admin/manager may delete."""
        _, headers = employee
        task = create_task(headers)
        other = register_user(email="other@example.com")["access_token"]

        response = client.delete(
            f"/api/tasks/{task['id']}", headers={"Authorization": f"Bearer {other}"}
        )

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_manager_can_delete(
        self, client: TestClient, employee, create_task, auth_headers
    ) -> None:
        _, headers = employee
        task = create_task(headers)

        response = client.delete(
            f"/api/tasks/{task['id']}", headers=auth_headers(UserRole.MANAGER)
        )

        assert response.status_code == 204


class TestTaskWorkflow:
    def test_full_workflow_stamps_completion(
        self, client: TestClient, employee, create_task
    ) -> None:
        """[P0] todo -> in_progress -> review -> done sets completed_at.

        GIVEN: A new task
        WHEN: Walking it through the workflow
        THEN: Each step succeeds and done stamps completed_at
        """
        _, headers = employee
        task = create_task(headers)

        # WHEN: Walking the workflow
        for target in ("in_progress", "review", "done"):
            response = client.post(
                f"/api/tasks/{task['id']}/status", json={"status": target}, headers=headers
            )
            assert response.status_code == 200, response.text

        # THEN: Completed
        assert response.json()["status"] == "done"
        assert response.json()["completed_at"] is not None

    def test_invalid_transition_conflicts(
        self, client: TestClient, employee, create_task
    ) -> None:
        _, headers = employee
        task = create_task(headers)

        response = client.post(
            f"/api/tasks/{task['id']}/status", json={"status": "done"}, headers=headers
        )

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "INVALID_STATE_TRANSITION"
        assert body["details"] == {"from_status": "todo", "to_status": "done"}

    def test_unknown_status_value(self, client: TestClient, employee, create_task) -> None:
        _, headers = employee
        task = create_task(headers)

        response = client.post(
            f"/api/tasks/{task['id']}/status", json={"status": "archived"}, headers=headers
        )

        assert response.status_code == 422


class TestTaskAssignment:
    def test_assign_and_unassign(
        self, client: TestClient, employee, create_task, admin_headers: dict[str, str]
    ) -> None:
        user_id, _ = employee
        task = create_task(admin_headers)

        assigned = client.post(
            f"/api/tasks/{task['id']}/assign", json={"assignee_id": user_id}, headers=admin_headers
        )
        unassigned = client.post(
            f"/api/tasks/{task['id']}/assign", json={"assignee_id": None}, headers=admin_headers
        )

        assert assigned.json()["assignee_id"] == user_id
        assert unassigned.json()["assignee_id"] is None

    def test_assign_unknown_user(
        self, client: TestClient, create_task, admin_headers: dict[str, str]
    ) -> None:
        task = create_task(admin_headers)

        response = client.post(
            f"/api/tasks/{task['id']}/assign",
            json={"assignee_id": str(uuid.uuid4())},
            headers=admin_headers,
        )

        assert response.status_code == 404


class TestTaskComments:
    def test_add_and_list_comments(self, client: TestClient, employee, create_task) -> None:
        user_id, headers = employee
        task = create_task(headers)

        first = client.post(
            f"/api/tasks/{task['id']}/comments", json={"body": "Draft ready"}, headers=headers
        )
        reply = client.post(
            f"/api/tasks/{task['id']}/comments",
            json={"body": "Looks good", "parent_id": first.json()["id"]},
            headers=headers,
        )
        listed = client.get(f"/api/tasks/{task['id']}/comments", headers=headers)

        assert first.status_code == 201
        assert first.json()["author_id"] == user_id
        assert reply.json()["parent_id"] == first.json()["id"]
        assert [c["body"] for c in listed.json()] == ["Draft ready", "Looks good"]

    def test_empty_comment_rejected(self, client: TestClient, employee, create_task) -> None:
        _, headers = employee
        task = create_task(headers)

        response = client.post(
            f"/api/tasks/{task['id']}/comments", json={"body": "   "}, headers=headers
        )

        assert response.status_code == 422
