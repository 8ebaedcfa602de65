import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.core.exceptions import AppException, app_exception_handler, validation_exception_handler
from app.database import init_models
from app.routers import search, tracks
from app.schemas.track import AliveResponse
from app.services.http_client import HTTPClientManager

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} ({settings.environment})...")
    await init_models()
    yield
    # Shutdown
    await HTTPClientManager.close()
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    description="Caches Spotify track metadata by ISRC",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Access log line per request."""
    started = time.perf_counter()
    status_code = 500  # Unhandled errors surface as a 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} {status_code} {elapsed_ms:.1f}ms"
        )


# Include routers
app.include_router(tracks.router, tags=["Tracks"])

if settings.debug:
    app.include_router(search.router, tags=["Debug"])


@app.get("/alive", response_model=AliveResponse, tags=["Health"])
async def alive():
    """Route to make sure API is alive."""
    return AliveResponse()


def run() -> None:
    """Serve the app with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
