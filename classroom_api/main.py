"""
Classroom API - Main Application

FastAPI backend with:
- MongoDB for teachers, students and users
- GitHub OAuth login with a cookie session
- Swagger docs served at /docs

Run: uvicorn classroom_api.main:app --reload
"""

import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from classroom_api import __version__
from classroom_api.api.routes import api_router, auth_router
from classroom_api.core import errors
from classroom_api.core.log import get_logger
from classroom_api.db.mongodb import init_mongo_indexes, test_mongo_connection

logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Classroom API",
    description="""
    CRUD API for teachers and students.

    ## Features
    - **Teachers**: staff records with unique email and employee ID
    - **Students**: each assigned to one existing teacher
    - **Authentication**: log in with GitHub at `/auth/github`;
      creating, updating and deleting records requires a session
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    logger.info(
        "http_request",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(duration * 1000, 2)
    )
    return response


# ============================================================
# ERROR HANDLERS
# ============================================================

@app.exception_handler(errors.ClassroomError)
async def classroom_error_handler(request: Request, exc: errors.ClassroomError):
    """Render every domain error as {"message": ..., ...} with its status code."""
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=type(exc).__name__, message=exc.message)
    else:
        logger.warning("request_rejected", path=request.url.path, error=type(exc).__name__, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed requests (bad JSON, missing body) are 400s, same shape as schema errors."""
    field_errors = {}
    for err in exc.errors():
        loc = err.get("loc") or ("body",)
        field = "body" if loc[0] == "body" else str(loc[-1])
        field_errors.setdefault(field, err.get("msg", "Invalid value"))
    return await classroom_error_handler(request, errors.ValidationError(field_errors))


# Include API routes
app.include_router(api_router, prefix="/api")
app.include_router(auth_router)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    logger.info("starting_classroom_api", version=__version__)
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.error("mongodb_index_initialization_failed", error=str(e))


@app.get("/", tags=["Health"])
async def root():
    """Basic route."""
    return {
        "status": "healthy",
        "app": "Classroom API",
        "message": "Classroom API is running. Go to /docs for Swagger documentation."
    }


@app.get("/health", tags=["Health"])
def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
