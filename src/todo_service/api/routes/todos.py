"""
ToDo API routes
"""

from typing import List
from fastapi import APIRouter, Depends, Request, Response, status

from todo_service.models.todo import ToDo, ErrorResponse
from todo_service.services.todo_service import TodoService
from todo_service.utils.helpers import parse_todo_id

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid ID or unparseable JSON"},
    404: {"model": ErrorResponse, "description": "ToDo not found"},
}

def get_todo_service(request: Request) -> TodoService:
    """Service instance owned by the running application"""
    return request.app.state.todo_service

# The id segment and the body are parsed here rather than by FastAPI
# validation, so PUT reports an unknown id before a malformed body. Routes
# that need the raw body are async; the rest run in the threadpool.

@router.get("", response_model=List[ToDo])
def list_todos(service: TodoService = Depends(get_todo_service)):
    """List every ToDo in creation order"""
    return service.list_todos()

@router.post(
    "",
    response_model=ToDo,
    status_code=status.HTTP_201_CREATED,
    responses={400: ERROR_RESPONSES[400]}
)
async def create_todo(request: Request, service: TodoService = Depends(get_todo_service)):
    """Create a ToDo; any id in the body is replaced by a server-assigned one"""
    body = await request.body()
    return service.create_todo(body)

@router.get("/{todo_id}", response_model=ToDo, responses=ERROR_RESPONSES)
def get_todo(todo_id: str, service: TodoService = Depends(get_todo_service)):
    """Get a ToDo by ID"""
    return service.get_todo(parse_todo_id(todo_id))

@router.put("/{todo_id}", response_model=ToDo, responses=ERROR_RESPONSES)
async def update_todo(todo_id: str, request: Request, service: TodoService = Depends(get_todo_service)):
    """Merge the body over a ToDo; fields left out of the body keep their value"""
    parsed_id = parse_todo_id(todo_id)
    body = await request.body()
    return service.update_todo(parsed_id, body)

@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES
)
def delete_todo(todo_id: str, service: TodoService = Depends(get_todo_service)):
    """Delete a ToDo by ID"""
    service.delete_todo(parse_todo_id(todo_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
