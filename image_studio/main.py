"""Main FastAPI application entry point."""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from image_studio import __version__
from image_studio.config import settings
from image_studio.models.response import ErrorResponse
from image_studio.routers import generate_router, web_router, STATIC_DIR
from image_studio.services.session import get_session, close_session


# Configure loguru
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level=settings.log_level,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting Image Studio v{__version__}")
    logger.info(f"Server running on {settings.host}:{settings.port}")
    logger.info(f"Text model: {settings.image_model}")
    logger.info(f"Reference backend: {settings.reference_backend}")
    logger.info(f"Proxy: {settings.proxy or 'None'}")
    logger.info(f"Timeout: {settings.timeout}s")

    if not settings.gemini_api_key:
        logger.warning(
            "GEMINI_API_KEY is not set; generation requests will fail until it is configured"
        )

    await get_session()

    yield

    logger.info("Shutting down...")
    await close_session()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Image Studio",
    description="Generate images from a prompt, optionally with a reference image, using the Gemini API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as an ErrorResponse body."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = ErrorResponse(error=str(exc.detail)).model_dump(exclude_none=True)
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 instead of FastAPI's default 422."""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    logger.warning(f"Invalid request to {request.url.path}: {details}")
    body = ErrorResponse(error="Invalid request", details=details)
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


# Include routers
app.include_router(generate_router, tags=["Generate"])
app.include_router(web_router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


def run():
    """Run the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "image_studio.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.uvicorn_log_level,
    )


if __name__ == "__main__":
    run()
