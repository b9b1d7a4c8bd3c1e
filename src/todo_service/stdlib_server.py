"""
ToDo Resource Service on the standard library http.server

Same endpoints and error bodies as the FastAPI application, routed by hand:

    /todos          GET list, POST create, anything else 405
    /todos/<id>     id parsed first, then GET / PUT / DELETE, anything else 405
    everything else root greeting
"""

import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Optional
from urllib.parse import unquote, urlsplit

from todo_service import __version__
from todo_service.api.routes.root import GREETING
from todo_service.config.settings import TODO_ID_STRATEGY
from todo_service.services.exceptions import TodoServiceError
from todo_service.services.todo_service import TodoService
from todo_service.utils.error_handling import INTERNAL_ERROR_MESSAGE, StructuredLogger, error_body, new_trace_id, request_id_var
from todo_service.utils.helpers import parse_todo_id

logger = logging.getLogger(__name__)

COLLECTION_PATH = "/todos"
ITEM_PREFIX = "/todos/"
COLLECTION_METHODS = ("GET", "POST")
ITEM_METHODS = ("GET", "PUT", "DELETE")
METHOD_NOT_ALLOWED_MESSAGE = "method not allowed"

def make_handler_class(service: TodoService) -> type:
    """Create a handler class bound to one TodoService"""

    class TodoRequestHandler(BaseHTTPRequestHandler):
        server_version = f"todo-service/{__version__}"
        protocol_version = "HTTP/1.1"

        def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
            logger.info(f"{self.address_string()} - {format % args}")

        def do_GET(self) -> None:  # noqa: N802
            self._dispatch()

        def do_POST(self) -> None:  # noqa: N802
            self._dispatch()

        def do_PUT(self) -> None:  # noqa: N802
            self._dispatch()

        def do_DELETE(self) -> None:  # noqa: N802
            self._dispatch()

        def do_PATCH(self) -> None:  # noqa: N802
            self._dispatch()

        def do_OPTIONS(self) -> None:  # noqa: N802
            self._dispatch()

        def __getattr__(self, name: str) -> Any:
            # http.server answers 501 for any verb without a do_<VERB>; route
            # HEAD, TRACE and custom verbs through the same dispatch instead
            if name.startswith("do_"):
                return self._dispatch
            raise AttributeError(name)

        def _dispatch(self) -> None:
            request_id_var.set(new_trace_id())
            path = unquote(urlsplit(self.path).path)
            # Drain the body up front so keep-alive connections stay in sync
            body = self._read_body()

            try:
                if path == COLLECTION_PATH:
                    self._route_collection(body)
                elif path.startswith(ITEM_PREFIX):
                    self._route_item(path[len(ITEM_PREFIX):], body)
                else:
                    self._send_text(HTTPStatus.OK, GREETING)
            except TodoServiceError as e:
                self._send_json(e.status_code, error_body(e.message))
            except Exception as e:
                StructuredLogger.log_error(
                    "internal_server_error",
                    f"Unhandled exception: {str(e)}",
                    method=self.command,
                    path=path,
                    exception=e
                )
                self._send_json(HTTPStatus.INTERNAL_SERVER_ERROR, error_body(INTERNAL_ERROR_MESSAGE))

        def _route_collection(self, body: bytes) -> None:
            if self.command == "GET":
                todos = service.list_todos()
                self._send_json(HTTPStatus.OK, [todo.model_dump() for todo in todos])
            elif self.command == "POST":
                todo = service.create_todo(body)
                self._send_json(HTTPStatus.CREATED, todo.model_dump())
            else:
                self._send_method_not_allowed(COLLECTION_METHODS)

        def _route_item(self, raw_id: str, body: bytes) -> None:
            todo_id = parse_todo_id(raw_id)

            if self.command == "GET":
                self._send_json(HTTPStatus.OK, service.get_todo(todo_id).model_dump())
            elif self.command == "PUT":
                self._send_json(HTTPStatus.OK, service.update_todo(todo_id, body).model_dump())
            elif self.command == "DELETE":
                service.delete_todo(todo_id)
                self._send_empty(HTTPStatus.NO_CONTENT)
            else:
                self._send_method_not_allowed(ITEM_METHODS)

        def _read_body(self) -> bytes:
            if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
                return self._read_chunked_body()
            try:
                content_length = int(self.headers.get("Content-Length", 0))
            except ValueError:
                content_length = 0
            if content_length <= 0:
                return b""
            return self.rfile.read(content_length)

        def _read_chunked_body(self) -> bytes:
            chunks = []
            while True:
                size_line = self.rfile.readline()
                try:
                    size = int(size_line.split(b";", 1)[0].strip(), 16)
                except ValueError:
                    # Framing is lost; the rest of the stream cannot be trusted
                    self.close_connection = True
                    return b""
                if size == 0:
                    break
                chunks.append(self.rfile.read(size))
                self.rfile.readline()

            # Trailer section ends with an empty line
            while self.rfile.readline() not in (b"\r\n", b"\n", b""):
                pass
            return b"".join(chunks)

        def _write_body(self, data: bytes) -> None:
            # HEAD gets the headers of the GET answer without its body
            if self.command != "HEAD":
                self.wfile.write(data)

        def _send_method_not_allowed(self, allowed: tuple) -> None:
            self._send_json(
                HTTPStatus.METHOD_NOT_ALLOWED,
                error_body(METHOD_NOT_ALLOWED_MESSAGE),
                extra_headers={"Allow": ", ".join(allowed)}
            )

        def _send_json(self, status: int, payload: Any, extra_headers: Optional[dict] = None) -> None:
            data = json.dumps(payload).encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(data)))
            for name, value in (extra_headers or {}).items():
                self.send_header(name, value)
            self.end_headers()
            self._write_body(data)

        def _send_text(self, status: int, text: str) -> None:
            data = text.encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "text/plain; charset=utf-8")
            self.send_header("Content-Length", str(len(data)))
            self.end_headers()
            self._write_body(data)

        def _send_empty(self, status: int) -> None:
            self.send_response(status)
            self.end_headers()

    return TodoRequestHandler

def make_server(host: str, port: int, service: Optional[TodoService] = None) -> ThreadingHTTPServer:
    """Bind a threading HTTP server for the given service (port 0 picks a free port)"""
    todo_service = service if service is not None else TodoService(id_strategy=TODO_ID_STRATEGY)
    server = ThreadingHTTPServer((host, port), make_handler_class(todo_service))
    server.daemon_threads = True
    return server

def serve(host: str, port: int, service: Optional[TodoService] = None) -> None:
    """Run the standard-library server until interrupted"""
    server = make_server(host, port, service)
    logger.info(f"Server is listening on {host}:{server.server_address[1]}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        server.server_close()
