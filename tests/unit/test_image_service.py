"""
Unit Tests for Image Service Client
===================================
"""

import pytest
import aiohttp
from unittest.mock import AsyncMock, MagicMock

from src.config.settings import Settings
from src.core.view.exceptions import ImageCompressionError
from src.core.view.image_service import (
    BaseImageCompressor,
    ImageServiceClient,
    get_image_compressor,
)


def mock_session(status: int = 200, payload=None, text: str = "") -> MagicMock:
    """Session whose POST responds with the given status and body."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=text)

    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.post.return_value.__aenter__.return_value = response
    return session


class TestGetImageCompressor:
    """Test collaborator construction from settings."""

    def test_no_service_configured(self, test_settings):
        assert get_image_compressor(test_settings) is None

    def test_blank_url_disables_service(self, template_path):
        settings = Settings(environment="testing", template_path=template_path, image_service_url="  ")
        assert get_image_compressor(settings) is None

    def test_service_configured(self, template_path):
        settings = Settings(
            environment="testing",
            template_path=template_path,
            image_service_url="http://images:8080/",
            image_service_timeout=2.5,
        )

        client = get_image_compressor(settings)

        assert isinstance(client, ImageServiceClient)
        assert isinstance(client, BaseImageCompressor)
        assert client.service_url == "http://images:8080"
        assert client.timeout == 2.5


class TestImageServiceClient:
    """Test the HTTP image compression client."""

    @pytest.fixture
    def client(self):
        return ImageServiceClient("http://images:8080")

    @pytest.mark.asyncio
    async def test_get_compressed_image(self, client):
        session = mock_session(payload={"url": "/img/a-600.webp"})
        client._session = session

        result = await client.get_compressed_image("/img/a.png", 600)

        assert result == "/img/a-600.webp"
        session.post.assert_called_once_with(
            "http://images:8080/compress", json={"source": "/img/a.png", "width": 600}
        )

    @pytest.mark.asyncio
    async def test_error_status_raises(self, client):
        client._session = mock_session(status=503, text="unavailable")

        with pytest.raises(ImageCompressionError, match="503 - unavailable"):
            await client.get_compressed_image("/img/a.png", 600)

    @pytest.mark.asyncio
    async def test_missing_url_raises(self, client):
        client._session = mock_session(payload={"status": "ok"})

        with pytest.raises(ImageCompressionError):
            await client.get_compressed_image("/img/a.png", 600)

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self, client):
        session = mock_session()
        session.post.side_effect = aiohttp.ClientError("connection refused")
        client._session = session

        with pytest.raises(ImageCompressionError) as exc_info:
            await client.get_compressed_image("/img/a.png", 600)

        assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)

    @pytest.mark.asyncio
    async def test_close(self, client):
        session = mock_session()
        client._session = session

        await client.close()

        session.close.assert_awaited_once()
        assert client._session is None
