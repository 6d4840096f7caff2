"""Precise unit tests for HTTPClient.

Tests focus on session management and request dispatch.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from laakhay.graphquery.utils import HTTPClient


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        """Test HTTPClient initialization."""
        client = HTTPClient(timeout=10.0)
        assert client.timeout.total == 10.0
        assert client._session is None
        assert client.headers == {}

    def test_init_with_base_url(self):
        """Test HTTPClient strips a trailing slash from base_url."""
        client = HTTPClient(base_url="https://api.example.com/", timeout=30.0)
        assert client.base_url == "https://api.example.com"

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        """Test session property creates session when needed."""
        client = HTTPClient(headers={"Authorization": "Bearer t"})

        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_session_property_recreates_closed_session(self):
        """Test session property recreates closed session."""
        client = HTTPClient()
        session1 = client.session
        await session1.close()

        session2 = client.session
        assert session1 is not session2
        assert not session2.closed
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        """Test close() can be called multiple times."""
        client = HTTPClient()
        await client.close()
        await client.close()  # Should not raise

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test HTTPClient as async context manager."""
        async with HTTPClient() as client:
            assert client.session is not None

        # Session should be closed after context exit
        assert client._session is None or client._session.closed


class TestHTTPClientPost:
    """Test HTTPClient.post."""

    @pytest.mark.asyncio
    async def test_post_joins_base_url(self):
        """Test relative URLs are joined with base_url and JSON is returned."""
        client = HTTPClient(base_url="https://api.example.com")

        mock_response = AsyncMock()
        mock_response.raise_for_status = MagicMock()
        mock_response.json = AsyncMock(return_value={"items": {}})
        mock_response.__aenter__ = AsyncMock(return_value=mock_response)
        mock_response.__aexit__ = AsyncMock(return_value=None)

        mock_session = MagicMock()
        mock_session.closed = False
        mock_session.post = MagicMock(return_value=mock_response)
        client._session = mock_session

        result = await client.post("/query", json_body={"with": {}})

        assert result == {"items": {}}
        mock_session.post.assert_called_once_with(
            "https://api.example.com/query", json={"with": {}}, headers=None
        )
        mock_response.raise_for_status.assert_called_once()
