"""
API tests for the todo endpoints, including the smart todo endpoint.
"""

from datetime import date, timedelta

import pytest
from fastapi import status
from httpx import AsyncClient

from tests.factories import TodoPayloadFactory


class TestTodoController:
    """Test cases for Todo API endpoints."""

    @pytest.mark.asyncio
    async def test_create_todo(self, client: AsyncClient):
        payload = TodoPayloadFactory(title="Book flights")

        response = await client.post("/api/todos", json=payload)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["status"] == "success"
        assert body["message"] == "Todo created successfully"
        assert body["data"]["title"] == "Book flights"
        assert body["data"]["assignee"] == "rodion"
        assert body["data"]["created_by"] == "rodion"
        assert body["data"]["due_date"] == payload["dueDate"]
        assert body["data"]["completed"] is False

    @pytest.mark.asyncio
    async def test_create_todo_minimal(self, client: AsyncClient):
        response = await client.post("/api/todos", json={"title": "Minimal"})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["assignee"] == "coby"
        assert data["due_date"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   "}])
    async def test_create_todo_requires_title(self, client: AsyncClient, payload):
        response = await client.post("/api/todos", json=payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        body = response.json()
        assert body["status"] == "error"
        assert body["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_list_open_todos(self, client: AsyncClient, test_todo, completed_todo):
        response = await client.get("/api/todos")

        assert response.status_code == status.HTTP_200_OK
        ids = [t["id"] for t in response.json()["data"]]
        assert ids == [test_todo.id]

    @pytest.mark.asyncio
    async def test_list_with_completed(self, client: AsyncClient, test_todo, completed_todo):
        response = await client.get("/api/todos", params={"completed": "true"})

        ids = [t["id"] for t in response.json()["data"]]
        assert ids == [test_todo.id, completed_todo.id]

    @pytest.mark.asyncio
    async def test_list_by_assignee(self, client: AsyncClient, test_todo, due_todo):
        response = await client.get("/api/todos", params={"assignee": "rodion"})

        assert [t["title"] for t in response.json()["data"]] == ["Call dentist"]

    @pytest.mark.asyncio
    async def test_due_soon(self, client: AsyncClient, test_todo, due_todo):
        response = await client.get("/api/todos/due-soon")

        assert response.status_code == status.HTTP_200_OK
        assert [t["id"] for t in response.json()["data"]] == [due_todo.id]

    @pytest.mark.asyncio
    async def test_due_soon_zero_days(self, client: AsyncClient, due_todo):
        response = await client.get("/api/todos/due-soon", params={"within_days": 0})

        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_get_todo(self, client: AsyncClient, test_todo):
        response = await client.get(f"/api/todos/{test_todo.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["title"] == "Call dentist"

    @pytest.mark.asyncio
    async def test_get_missing_todo(self, client: AsyncClient):
        response = await client.get("/api/todos/does-not-exist")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Todo not found"
        assert body["error_code"] == "TODO_NOT_FOUND"
        assert body["request_id"]

    @pytest.mark.asyncio
    async def test_patch_completes_todo(self, client: AsyncClient, test_todo):
        response = await client.patch(f"/api/todos/{test_todo.id}", json={"completed": True})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["completed"] is True
        assert data["completed_at"] is not None

    @pytest.mark.asyncio
    async def test_patch_reopens_todo(self, client: AsyncClient, completed_todo):
        response = await client.patch(f"/api/todos/{completed_todo.id}", json={"completed": False})

        data = response.json()["data"]
        assert data["completed"] is False
        assert data["completed_at"] is None

    @pytest.mark.asyncio
    async def test_patch_due_date_alias(self, client: AsyncClient, test_todo):
        response = await client.patch(f"/api/todos/{test_todo.id}", json={"dueDate": "2030-01-02"})

        data = response.json()["data"]
        assert data["due_date"] == "2030-01-02"
        assert data["title"] == "Call dentist"

    @pytest.mark.asyncio
    async def test_delete_todo(self, client: AsyncClient, test_todo):
        response = await client.delete(f"/api/todos/{test_todo.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Todo deleted successfully"
        missing = await client.get(f"/api/todos/{test_todo.id}")
        assert missing.status_code == status.HTTP_404_NOT_FOUND


class TestSmartTodoController:
    """Test cases for POST /api/todos/smart."""

    @pytest.mark.asyncio
    async def test_smart_create(self, client: AsyncClient):
        response = await client.post("/api/todos/smart", json={"text": "call dentist tomorrow"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        assert body["status"] == "success"
        assert body["data"]["action"] == "created"
        assert body["data"]["todo"]["title"] == "Call dentist"
        assert body["data"]["todo"]["assignee"] == "rodion"
        assert body["data"]["todo"]["due_date"] == tomorrow
        assert body["message"] == f'Created "Call dentist" for rodion - due {tomorrow}'

    @pytest.mark.asyncio
    async def test_smart_complete(self, client: AsyncClient, test_todo):
        response = await client.post("/api/todos/smart", json={"text": "done with the dentist call"})

        body = response.json()
        assert body["data"]["action"] == "completed"
        assert body["data"]["todo"]["id"] == test_todo.id
        assert body["data"]["todo"]["completed"] is True
        assert body["message"] == 'Marked "Call dentist" as done'

    @pytest.mark.asyncio
    async def test_smart_update(self, client: AsyncClient, test_todo):
        response = await client.post("/api/todos/smart", json={"text": "push dentist to next week"})

        body = response.json()
        next_week = (date.today() + timedelta(days=7)).isoformat()
        assert body["data"]["action"] == "updated"
        assert body["data"]["todo"]["due_date"] == next_week

    @pytest.mark.asyncio
    async def test_smart_unclear(self, client: AsyncClient, test_todo):
        response = await client.post("/api/todos/smart", json={"text": "finished the laundry"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["status"] == "unclear"
        assert body["message"] == "Couldn't find a matching todo to complete"
        assert body["data"] == {"action": "unclear", "todo": None}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"text": "   "}])
    async def test_smart_requires_text(self, client: AsyncClient, payload):
        response = await client.post("/api/todos/smart", json=payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
