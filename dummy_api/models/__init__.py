"""
Pydantic models for the Dummy JSON API.
"""

from dummy_api.models.results import ErrorResponse, ItemOutcome
from dummy_api.models.user import GreetingRequest, User, UserPatch

__all__ = [
    "User",
    "UserPatch",
    "GreetingRequest",
    "ErrorResponse",
    "ItemOutcome",
]
