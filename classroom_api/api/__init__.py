"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from classroom_api.api import api_router, auth_router
    app.include_router(api_router, prefix="/api")
    app.include_router(auth_router)
"""

from classroom_api.api.routes import api_router, auth_router

__all__ = ["api_router", "auth_router"]
