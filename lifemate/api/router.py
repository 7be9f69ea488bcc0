from fastapi import APIRouter
from .endpoints import health, profile

# Add a common prefix for all API routes
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
