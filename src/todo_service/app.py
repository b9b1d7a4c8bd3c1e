"""
ToDo Resource Service - FastAPI application
Root greeting plus CRUD over the in-memory ToDo collection
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_service import __version__
from todo_service.config.settings import ALLOWED_ORIGINS, TODO_ID_STRATEGY
from todo_service.api.routes import root, todos
from todo_service.services.todo_service import TodoService
from todo_service.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)

def create_app(service: Optional[TodoService] = None) -> FastAPI:
    """
    Build the FastAPI application around a TodoService

    Args:
        service: Collection to serve; a fresh one using the configured id strategy if omitted
    """
    todo_service = service if service is not None else TodoService(id_strategy=TODO_ID_STRATEGY)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        logger.info(f"ToDo service starting with {len(todo_service)} records")
        yield
        logger.info("ToDo service stopped; in-memory records discarded")

    app = FastAPI(
        title="ToDo Resource Service",
        description="In-memory CRUD API for ToDo records",
        version=__version__,
        lifespan=lifespan
    )
    app.state.todo_service = todo_service

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    # Include API routes
    app.include_router(root.router, tags=["Root"])
    app.include_router(todos.router, prefix="/todos", tags=["ToDos"])

    return app
