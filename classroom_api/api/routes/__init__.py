"""
API Routes - Combines resource route modules into single router.

The auth router is exported separately: it lives at /auth, outside /api.
"""

from fastapi import APIRouter

from classroom_api.api.routes.auth_routes import router as auth_router
from classroom_api.api.routes.teacher_routes import router as teacher_router
from classroom_api.api.routes.student_routes import router as student_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(teacher_router)
api_router.include_router(student_router)

__all__ = ["api_router", "auth_router"]
