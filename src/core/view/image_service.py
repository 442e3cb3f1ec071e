"""
Image Service Client
====================

Optional image compression collaborator used by the lazy-load rewriter.
The HTTP client talks to an external compression service that returns the
URL of a resized variant of an image.
"""

import aiohttp
from abc import ABC, abstractmethod
from typing import Any, Optional

from src.config.logging import get_logger
from src.config.settings import Settings
from src.core.view.exceptions import ImageCompressionError

logger = get_logger(__name__)


class BaseImageCompressor(ABC):
    """Abstract base class for image compression collaborators."""

    @abstractmethod
    async def get_compressed_image(self, source: str, width: int) -> str:
        """Return the location of a compressed variant of ``source``."""
        pass

    async def close(self) -> None:
        """Release held resources."""
        return None


class ImageServiceClient(BaseImageCompressor):
    """Client for the image compression HTTP service."""

    def __init__(self, service_url: str, timeout: float = 5.0):
        self.service_url = service_url.rstrip("/")
        self.timeout = timeout
        self.logger: Any = logger.bind(component="image_service_client")
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def get_compressed_image(self, source: str, width: int) -> str:
        """
        Request a compressed image.

        Args:
            source: Original image URL or path
            width: Target width in pixels

        Returns:
            URL of the compressed image

        Raises:
            ImageCompressionError: If the service call fails
        """
        try:
            session = await self._get_session()
            payload = {"source": source, "width": width}

            async with session.post(f"{self.service_url}/compress", json=payload) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise ImageCompressionError(
                        f"Image compression failed: {response.status} - {error_text}"
                    )
                data = await response.json()
        except ImageCompressionError:
            raise
        except Exception as e:
            raise ImageCompressionError(f"Image compression request failed: {e}") from e

        compressed = data.get("url") if isinstance(data, dict) else None
        if not compressed:
            raise ImageCompressionError("Image compression response has no url")

        self.logger.debug("Image compressed", source=source, compressed=compressed, width=width)
        return str(compressed)


def get_image_compressor(settings: Settings) -> Optional[BaseImageCompressor]:
    """Create the image compression client when a service is configured."""
    if not settings.image_service_url:
        return None
    return ImageServiceClient(settings.image_service_url, timeout=settings.image_service_timeout)
