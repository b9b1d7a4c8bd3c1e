"""
http.server front end - routing rules that differ from the FastAPI application
"""

import pytest


@pytest.mark.parametrize("method", ["PUT", "DELETE", "PATCH", "TRACE", "FOO"])
def test_collection_method_not_allowed(stdlib_client, method):
    response = stdlib_client.request(method, "/todos")
    assert response.status_code == 405
    assert response.headers["allow"] == "GET, POST"
    assert response.json() == {"error": "method not allowed"}


@pytest.mark.parametrize("method", ["POST", "PATCH", "TRACE", "FOO"])
def test_item_method_not_allowed(stdlib_client, method):
    stdlib_client.post("/todos", json={"title": "x"})
    response = stdlib_client.request(method, "/todos/1")
    assert response.status_code == 405
    assert response.headers["allow"] == "GET, PUT, DELETE"
    assert response.json() == {"error": "method not allowed"}


@pytest.mark.parametrize("path,allow", [("/todos", "GET, POST"), ("/todos/1", "GET, PUT, DELETE")])
def test_head_is_method_not_allowed_without_body(stdlib_client, path, allow):
    stdlib_client.post("/todos", json={"title": "x"})
    response = stdlib_client.head(path)
    assert response.status_code == 405
    assert response.headers["allow"] == allow
    assert response.content == b""
    # The connection is still usable afterwards
    assert stdlib_client.get("/todos/1").json()["title"] == "x"


def test_head_on_greeting(stdlib_client):
    response = stdlib_client.head("/")
    assert response.status_code == 200
    assert response.headers["content-length"] == str(len("Hello, World!"))
    assert response.content == b""


def test_chunked_body_is_decoded(stdlib_client):
    def chunks():
        yield b'{"title": '
        yield b'"sent in chunks", "done": true}'

    response = stdlib_client.post("/todos", content=chunks())
    assert response.status_code == 201
    assert response.json() == {"id": 1, "title": "sent in chunks", "done": True}
    # Nothing left over on the keep-alive connection
    assert stdlib_client.get("/todos").json() == [{"id": 1, "title": "sent in chunks", "done": True}]


def test_chunked_body_on_rejected_request_is_drained(stdlib_client):
    def chunks():
        yield b'{"title": "never stored"}'

    assert stdlib_client.put("/todos/abc", content=chunks()).status_code == 400
    assert stdlib_client.get("/todos").json() == []


def test_item_id_checked_before_method(stdlib_client):
    response = stdlib_client.post("/todos/abc")
    assert response.status_code == 400
    assert response.json() == {"error": "invalid ID"}


@pytest.mark.parametrize("path", ["/todos/", "/todos/1/extra"])
def test_item_path_without_plain_id(stdlib_client, path):
    response = stdlib_client.get(path)
    assert response.status_code == 400
    assert response.json() == {"error": "invalid ID"}


@pytest.mark.parametrize("path", ["/anything", "/todo", "/nested/path?q=1"])
def test_unknown_paths_get_greeting(stdlib_client, path):
    response = stdlib_client.get(path)
    assert response.status_code == 200
    assert response.text == "Hello, World!"


def test_query_string_ignored(stdlib_client):
    stdlib_client.post("/todos", json={"title": "q"})
    response = stdlib_client.get("/todos?page=2")
    assert response.json() == [{"id": 1, "title": "q", "done": False}]


def test_keep_alive_survives_unread_error_body(stdlib_client):
    # Body of a rejected request must not leak into the next one on the same connection
    assert stdlib_client.put("/todos/abc", content=b'{"title": "ignored"}').status_code == 400
    assert stdlib_client.get("/todos").json() == []


def test_internal_error_returns_500(stdlib_client, todo_service, monkeypatch):
    def explode():
        raise RuntimeError("boom")

    monkeypatch.setattr(todo_service, "list_todos", explode)
    response = stdlib_client.get("/todos")
    assert response.status_code == 500
    assert response.json() == {"error": "internal server error"}
