import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from imagesearch.api.v1.health import router as health_router
from imagesearch.api.v1.router import api_router
from imagesearch.config import settings
from imagesearch.core.logging_config import configure_logging
from imagesearch.exceptions import ExtractionFormatError, ImageSearchError
from imagesearch.middleware.request_id import RequestIDMiddleware, get_request_id
from imagesearch.schemas.images import ErrorResponse

configure_logging(log_format=settings.LOG_FORMAT, log_level=settings.LOG_LEVEL)

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        environment=settings.SENTRY_ENVIRONMENT,
        release=f"imagesearch@{settings.APP_VERSION}",
    )

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Structured Google Images results: image URL, source page and source host.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ImageSearchError)
async def image_search_error_handler(request: Request, exc: ImageSearchError):
    phase = exc.phase if isinstance(exc, ExtractionFormatError) else None
    if phase:
        logger.error("Upstream page structure changed (%s): %s", phase, exc)
    else:
        logger.warning("Image search failed: %s", exc)
    body = ErrorResponse(
        error=str(exc),
        error_type=exc.error_type,
        phase=phase,
        request_id=get_request_id() or None,
    )
    return JSONResponse(status_code=502, content=body.model_dump(exclude_none=True))


app.include_router(api_router)
app.include_router(health_router)


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "status": "running",
    }
