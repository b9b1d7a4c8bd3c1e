"""
Root greeting API route
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

GREETING = "Hello, World!"

router = APIRouter()

@router.get("/", response_class=PlainTextResponse)
async def greet_root():
    return GREETING
