"""
Centralized Error Handling and Logging
Every error leaves the service as {"error": <message>} with structured logging for server faults.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional
from contextvars import ContextVar

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from todo_service.models.todo import ErrorResponse
from todo_service.services.exceptions import TodoServiceError

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"

def new_trace_id() -> str:
    return str(uuid.uuid4())[:8]

class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        method: Optional[str] = None,
        path: Optional[str] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log a structured error entry and return its trace ID"""

        trace_id = request_id_var.get('') or new_trace_id()

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if method or path:
            log_entry["request"] = {"method": method, "path": path}

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
                "module": getattr(exception, '__module__', 'unknown')
            }

            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = extra_context

        logger.error(json.dumps(log_entry, indent=2))

        return trace_id

def error_body(message: str) -> dict:
    """The one error shape every response uses"""
    return ErrorResponse(error=message).model_dump()

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a trace ID to every request and echoes it in X-Trace-ID"""

    async def dispatch(self, request: Request, call_next):
        trace_id = new_trace_id()
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)
        response.headers["X-Trace-ID"] = trace_id
        return response

# Global Exception Handlers
async def todo_service_exception_handler(request: Request, exc: TodoServiceError) -> JSONResponse:
    """Translate domain errors into their status and error body"""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions, including router 404/405 defaults"""

    if exc.status_code >= 500:
        StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            method=request.method,
            path=request.url.path,
            exception=exc,
            include_traceback=False
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internals"""

    StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        method=request.method,
        path=request.url.path,
        exception=exc
    )

    return JSONResponse(
        status_code=500,
        content=error_body(INTERNAL_ERROR_MESSAGE)
    )

def setup_error_handling(app: FastAPI):
    """Setup error handling for the FastAPI app"""

    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(TodoServiceError, todo_service_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Error handling initialized")
