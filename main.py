"""
FastAPI main application entry point.
"""
import logging
import time
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_database_time, get_db
from api import sitters_router, search_router, owners_router, restaurants_router, mapbox_router


logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

PLACEHOLDER_DEFAULT_SIZE = 120

# Create FastAPI application
app = FastAPI(
    title="PetBnB API",
    description="Location-based marketplace API connecting pet owners with pet sitters",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """
    Surface database outages as an explicit degraded-mode response.

    Clients get a 503 they can distinguish from an empty result.
    """
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Database unavailable", "degraded": True}
    )


# Include routers
app.include_router(sitters_router, prefix=settings.API_PREFIX)
app.include_router(search_router, prefix=settings.API_PREFIX)
app.include_router(owners_router, prefix=settings.API_PREFIX)
app.include_router(restaurants_router, prefix=settings.API_PREFIX)
app.include_router(mapbox_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Root endpoint - status check."""
    return {
        "status": "ok",
        "message": "PetBnB API is running",
        "version": "1.0.0"
    }


@app.get(f"{settings.API_PREFIX}/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Always answers 200; a database outage is reported as degraded.
    """
    now = datetime.now(timezone.utc).isoformat()
    try:
        db_time = get_database_time(db)
    except SQLAlchemyError as e:
        logger.warning("Health check could not reach the database: %s", e)
        return {"status": "degraded", "time": now, "db_status": "not connected"}

    return {"status": "ok", "time": now, "db_time": db_time}


@app.get(f"{settings.API_PREFIX}/placeholder/{{width}}/{{height}}")
def placeholder_image(width: str, height: str):
    """
    Redirect to a generic placeholder image of the requested size.

    Sizes that are not positive integers fall back to 120.
    """
    return RedirectResponse(settings.PLACEHOLDER_IMAGE_URL.format(
        width=_placeholder_size(width),
        height=_placeholder_size(height)
    ))


def _placeholder_size(value: str, default: int = PLACEHOLDER_DEFAULT_SIZE) -> int:
    try:
        size = int(value)
    except ValueError:
        return default
    return size if size > 0 else default


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )
