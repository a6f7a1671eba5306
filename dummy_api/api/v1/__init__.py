"""
API v1 package.

Exports the main API router that aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from dummy_api.api.v1.endpoints import admin, greeting, users

# Create the main v1 router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(greeting.router)
api_router.include_router(users.router)
api_router.include_router(admin.router)

__all__ = ["api_router"]
