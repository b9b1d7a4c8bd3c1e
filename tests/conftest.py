"""
pytest configuration and fixtures for the ToDo service test suite
Both HTTP front ends are exposed through the same client interface
"""

import threading

import httpx
import pytest
from fastapi.testclient import TestClient

from todo_service.app import create_app
from todo_service.services.todo_service import TodoService
from todo_service.stdlib_server import make_server


@pytest.fixture
def todo_service():
    """Fresh, empty collection for each test"""
    return TodoService()


@pytest.fixture
def fastapi_client(todo_service):
    """Client for the FastAPI application"""
    with TestClient(create_app(todo_service)) as client:
        yield client


@pytest.fixture
def stdlib_client(todo_service):
    """Client for the http.server variant, running on an ephemeral port"""
    server = make_server("127.0.0.1", 0, todo_service)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    port = server.server_address[1]
    try:
        with httpx.Client(base_url=f"http://127.0.0.1:{port}", timeout=5.0) as client:
            yield client
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture(params=["fastapi", "stdlib"])
def client(request):
    """Each behavioral test runs against both front ends"""
    return request.getfixturevalue(f"{request.param}_client")


@pytest.fixture
def create_todo(client):
    """Create a ToDo through the API and return the response JSON"""
    def _create(title: str = "task", done: bool = False) -> dict:
        response = client.post("/todos", json={"title": title, "done": done})
        assert response.status_code == 201, f"Create failed: {response.text}"
        return response.json()
    return _create
