"""
Central place to register all API routes
Import and include routers here
"""

from fastapi import APIRouter
from urbannest.api.v1.auth_controller import router as auth_router
from urbannest.api.v1.admin_controller import router as admin_router

# Create a combined router
router = APIRouter()

router.include_router(auth_router)
router.include_router(admin_router)

__all__ = ["router"]
