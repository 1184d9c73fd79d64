"""
Career Hub - Main Application

FastAPI backend with:
- MongoDB for all documents (users, companies, jobs, reviews, applications)
- JWT authentication
- Company reviews with one-review-per-company enforcement
- Job application tracking with a status lifecycle
- Account settings (profile, password, notifications, privacy, deletion)

Run: uvicorn app.main:app --reload
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.logging_config import setup_logging, get_logger
from app.db.mongodb import init_mongo_indexes

settings = get_settings()

setup_logging(settings.log_level)
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Career Hub API",
    description="""
    Job board backend.

    ## Features
    - **Authentication**: JWT-based auth
    - **Reviews**: Company reviews, one per user per company
    - **Applications**: Track job applications and their status
    - **Settings**: Profile, password, notifications, privacy, account deletion
    - **Jobs / Companies**: Browse postings and company ratings
    """,
    version="1.0.0",
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

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400 instead of FastAPI's 422."""
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.error("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Career Hub API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    from app.db.mongodb import test_mongo_connection

    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
