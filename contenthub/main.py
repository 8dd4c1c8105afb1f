# contenthub/main.py
"""
Content Hub API - Main Application

Agency content-production tracker: client projects moving through an
approval workflow, versioned project files in S3, and a content calendar
of social posts.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from contenthub.config import settings
from contenthub.database import engine, Base
from contenthub.services.storage import StorageError
import contenthub.models  # noqa: F401  registers tables on Base.metadata

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: create tables, report configuration
    - Shutdown: dispose of the connection pool
    """
    logger.info("=" * 80)
    logger.info("🚀 CONTENT HUB API STARTING UP")
    logger.info("=" * 80)
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug Mode: {settings.DEBUG}")
    logger.info(f"Database: {settings.database_host}")
    logger.info(f"S3 Bucket: {settings.S3_BUCKET_NAME} ({settings.AWS_REGION})")

    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables created/verified")
    except Exception as e:
        logger.error(f"❌ Database initialization error: {e}")
        raise

    if not (settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY):
        logger.warning("⚠️  AWS credentials not set - falling back to the default boto3 credential chain")

    logger.info("✅ Content Hub API ready to accept requests")
    logger.info("=" * 80)

    yield

    logger.info("🛑 CONTENT HUB API SHUTTING DOWN")
    engine.dispose()
    logger.info("✅ Shutdown complete")


# =============================================================================
# FASTAPI APPLICATION
# =============================================================================

app = FastAPI(
    title=settings.APP_NAME,
    description=(
        "Content production tracker: projects, approval workflow, "
        "versioned files and the content calendar."
    ),
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check and status endpoints"},
        {"name": "Projects", "description": "Projects and the approval workflow"},
        {"name": "Files", "description": "Versioned project files"},
        {"name": "Clients", "description": "Client management"},
        {"name": "Posts", "description": "Content calendar"},
        {"name": "Editors", "description": "Content editors"},
    ]
)


# =============================================================================
# MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"]
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    logger.info(f"{request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} - {response.status_code}")
    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors"""
    logger.error(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"detail": exc.errors()})
    )


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    """Handle object store failures"""
    logger.error(f"Storage error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "detail": "File storage error occurred",
            "error": str(exc) if settings.DEBUG else None
        }
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors"""
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Database error occurred",
            "error": str(exc) if settings.DEBUG else "Internal server error"
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error": str(exc) if settings.DEBUG else None
        }
    )


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint with API information.
    """
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "operational",
        "environment": settings.ENVIRONMENT,
        "docs": "/docs" if settings.DEBUG else None,
        "health": "/health"
    }


# =============================================================================
# REGISTER ROUTERS
# =============================================================================

from contenthub.routers import health, projects, files, clients, posts, editors

app.include_router(health.router, prefix="/health", tags=["Health"])
app.include_router(projects.router, prefix="/api/v1/projects", tags=["Projects"])
app.include_router(files.router, prefix="/api/v1/files", tags=["Files"])
app.include_router(clients.router, prefix="/api/v1/clients", tags=["Clients"])
app.include_router(posts.router, prefix="/api/v1/posts", tags=["Posts"])
app.include_router(editors.router, prefix="/api/v1/editors", tags=["Editors"])


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Content Hub API in development mode")
    logger.info("Visit: http://localhost:8000/docs for API documentation")

    uvicorn.run(
        "contenthub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
