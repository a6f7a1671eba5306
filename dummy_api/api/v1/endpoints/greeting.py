"""
Greeting endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from dummy_api.models.user import GreetingRequest

router = APIRouter(tags=["greeting"])


@router.get(
    "/greeting",
    response_class=PlainTextResponse,
    summary="hello world",
    description="sends a greeting to the world",
)
async def greet_world() -> str:
    return "Hello world!"


@router.post(
    "/greeting",
    response_class=PlainTextResponse,
    summary="greet user",
    description="sends a greeting to a person",
)
async def greet_user(request: GreetingRequest) -> str:
    return f"Hello {request.name}!"
