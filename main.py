"""
VerbLab - Backend Application

FastAPI application serving an English irregular-verbs reference.
Provides endpoints for verb search, lookup, pronunciation and user
preferences.

Features:
    - Two-phase search (exact base form, then ranked partial matches)
    - UK/US dialect variants and pronunciation requests
    - Transparent reading of verbs stored in the single-meaning layout
    - Persisted user preferences

Run:
    python main.py
    # or
    uvicorn main:app --reload
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
import uvicorn

from config.settings import settings
from core.dependencies import build_services
from core.schemas import HealthResponse
from utils.logging import setup_logging, get_logger
from utils.exceptions import VerbLabError, ErrorSeverity
from utils.rate_limit import limiter, rate_limit_exceeded_handler

# Import Routers
from routers import verbs, preferences

# Initialize logging
setup_logging(settings.LOG_LEVEL, json_format=settings.LOG_JSON)
logger = get_logger(__name__)


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events:
        - Startup: Build services, create or upgrade and seed the verb store
        - Shutdown: Dispose the database engine
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    services = getattr(app.state, "services", None)
    if services is None:
        services = build_services()
        app.state.services = services

    await services.repository.initialize_store()
    logger.info("Verb store initialized")

    yield

    # Shutdown
    logger.info("Shutting down application")
    await services.close()


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=settings.APP_NAME,
    description="English irregular verbs reference API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Attach rate limiter to app state
app.state.limiter = limiter


# =============================================================================
# Middleware
# =============================================================================

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=500)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(VerbLabError)
async def verblab_exception_handler(request: Request, exc: VerbLabError):
    """
    Handle custom VerbLab exceptions.

    Returns standardized error response with appropriate status code.
    """
    if exc.severity == ErrorSeverity.LOW:
        logger.info(f"{exc.__class__.__name__}: {exc.message}")
    else:
        logger.error(f"{exc.__class__.__name__}: {exc.message}", extra={"details": exc.details})
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


# =============================================================================
# Routers
# =============================================================================

app.include_router(verbs.router)
app.include_router(preferences.router)


# =============================================================================
# Health Check Endpoints
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint - basic health check.

    Returns:
        dict: Simple status message
    """
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


@app.get("/health", tags=["Health"], response_model=HealthResponse)
async def health_check(request: Request):
    """
    Detailed health check endpoint.

    Checks database connectivity and reports the number of stored verbs.
    """
    services = request.app.state.services
    db_healthy = await services.database.check_health()

    verb_count = None
    if db_healthy:
        try:
            verb_count = await services.repository.get_count()
        except VerbLabError as e:
            logger.warning(f"Health check could not count verbs: {e.message}")

    return HealthResponse(
        status="healthy" if db_healthy and verb_count is not None else "degraded",
        database=db_healthy,
        verb_count=verb_count,
        version=settings.APP_VERSION,
    )


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
