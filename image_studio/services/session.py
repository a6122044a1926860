"""Shared upstream HTTP session and the provider dependency built on it."""

from curl_cffi.requests import AsyncSession

from image_studio.config import settings
from image_studio.services.provider import GeminiImageProvider


_session: AsyncSession | None = None


async def get_session() -> AsyncSession:
    """Get or create the shared async session."""
    global _session
    if _session is None:
        _session = AsyncSession(timeout=settings.timeout)
    return _session


async def close_session() -> None:
    """Close the shared async session."""
    global _session
    if _session is not None:
        await _session.close()
        _session = None


async def get_provider() -> GeminiImageProvider:
    """FastAPI dependency returning a provider bound to the shared session."""
    return GeminiImageProvider(await get_session())
