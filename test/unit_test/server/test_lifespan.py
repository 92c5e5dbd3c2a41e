"""
Unit tests for FastAPI application lifespan management.

Tests verify that startup initializes the database, that a failing database
does not prevent startup, and that shutdown closes the outbound clients.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

pytestmark = pytest.mark.asyncio


class TestLifespan:
    async def test_startup_initializes_database_and_shutdown_closes_clients(self):
        from chanchis.server.main import lifespan

        with patch("chanchis.server.main.init_db", new_callable=AsyncMock) as init_db, patch(
            "chanchis.server.main.close_clients", new_callable=AsyncMock
        ) as close_clients:
            async with lifespan(FastAPI()):
                init_db.assert_awaited_once()
                close_clients.assert_not_awaited()

        close_clients.assert_awaited_once()

    async def test_database_failure_does_not_block_startup(self):
        from chanchis.server.main import lifespan

        with patch(
            "chanchis.server.main.init_db", new_callable=AsyncMock, side_effect=ConnectionError("db down")
        ), patch("chanchis.server.main.close_clients", new_callable=AsyncMock), patch(
            "chanchis.server.main.logger"
        ) as mock_logger:
            async with lifespan(FastAPI()):
                pass

        mock_logger.error.assert_called_once()


async def test_routes_are_registered():
    from chanchis.server.main import app

    paths = set(app.openapi()["paths"])
    assert {
        "/health",
        "/version",
        "/api/v1/transfer/nonce",
        "/api/v1/transfer",
        "/api/v1/wallet/{address}/balance",
        "/api/v1/transactions",
        "/api/v1/businesses",
        "/api/v1/businesses/{business_id}",
        "/api/v1/businesses/{business_id}/cashback",
        "/api/v1/upload",
    } <= paths
