from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from app.config import get_settings
from app.database import Base, engine, ping_database, dispose_engine
from app.middleware.security import SecurityHeadersMiddleware
from app.routes import auth, genres, movies, saved_movies, users
from app.schemas.common import ErrorResponse
from app.utils.errors import APIError, STATUS_CODES, error_body

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


# ============================================
# Application Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events

    Startup:
    - Verify the database is reachable (fatal if not)
    - Optionally create tables

    Shutdown:
    - Release the connection pool
    """
    # Startup
    logger.info("=" * 60)
    logger.info("🚀 Movie Saves API Starting...")
    logger.info(f"   Environment: {settings.ENVIRONMENT}")
    logger.info(f"   CORS Origins: {len(settings.allowed_origins)} configured")

    ping_database(engine)
    logger.info("   Database connection OK")

    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("   Tables created (AUTO_CREATE_TABLES)")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("=" * 60)
    logger.info("🛑 Movie Saves API Shutting Down...")
    dispose_engine(engine)
    logger.info("   Connection pool released")
    logger.info("=" * 60)


# Create FastAPI app with lifespan handler
app = FastAPI(
    title="Movie Saves API",
    description="Movie catalog with country availability and per-user saved movies",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request parameter"},
        500: {"model": ErrorResponse, "description": "Unexpected server error"},
    },
)

# ============================================
# Security Configuration
# ============================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.is_production)

# Trusted Hosts - Production only
if settings.is_production and settings.trusted_hosts:
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)


# ============================================
# Exception Handlers - every error uses the same envelope
# ============================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    APIError carries its own code; plain HTTPExceptions raised by the
    framework (unknown route, wrong method) get a code from the status.
    """
    if isinstance(exc, APIError):
        content = error_body(exc.code, exc.message, exc.details)
    else:
        code = STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
        content = error_body(code, str(exc.detail))

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON or body fields of the wrong type"""
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=error_body("INVALID_REQUEST", "Invalid request body", {"errors": errors}),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Catch-all for unexpected failures (usually the database).
    The underlying error text is only returned when EXPOSE_INTERNAL_ERRORS allows it.
    """
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {str(exc)}", exc_info=True)

    message = "Internal server error"
    if settings.expose_internal_errors:
        message = f"{message}: {str(exc)}"

    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_ERROR", message),
    )


# ============================================
# Routes
# ============================================

@app.get("/", tags=["Health"])
async def root():
    """Basic health check"""
    return {
        "message": "Movie Saves API",
        "version": "1.0.0",
        "status": "healthy",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check for monitoring"""
    return {
        "status": "healthy",
        "api_version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Core routes
app.include_router(auth.router)
app.include_router(genres.router)
app.include_router(movies.router)
app.include_router(users.router)
app.include_router(saved_movies.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8080,
        log_level="info"
    )
