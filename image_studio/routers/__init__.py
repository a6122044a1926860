"""API routers."""

from .generate import router as generate_router
from .web import router as web_router, STATIC_DIR

__all__ = ["generate_router", "web_router", "STATIC_DIR"]
