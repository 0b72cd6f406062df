"""
Pytest configuration and fixtures for Storefront Service tests.
"""

import asyncio
import os
import tempfile
from decimal import Decimal
from pathlib import Path
from typing import Any, AsyncGenerator, List
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

# Set up test environment before any storefront module reads its settings
TEST_DB_PATH = Path(tempfile.gettempdir()) / f"storefront_test_{os.getpid()}.db"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["TRACKING_SINK"] = "database"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"

from storefront_service.app.core.database import database_manager  # noqa: E402
from storefront_service.app.core.setting import get_settings  # noqa: E402
from storefront_service.app.events.base import EventPublisher  # noqa: E402
from storefront_service.app.events.event_producers import (  # noqa: E402
    InteractionEventProducer,
)
from storefront_service.app.main import app  # noqa: E402
from storefront_service.app.models import Product  # noqa: E402

SAMPLE_PRODUCTS = [
    {
        "name": f"Product {i}",
        "description": f"Description for product {i}",
        "category": "Electronics" if i % 2 else "Books",
        "brand": "MyKart",
        "price": Decimal("10.00") + i,
        "stock_quantity": 100 + i,
        "image_url": f"https://img.example.com/{i}.png",
    }
    for i in range(1, 26)
]


async def _reset_schema() -> None:
    await database_manager.drop_tables()
    await database_manager.create_tables()


async def _insert_products(rows: List[dict]) -> None:
    async with database_manager.async_session_maker() as session:
        session.add_all([Product(**row) for row in rows])
        await session.commit()


def pytest_sessionfinish(session, exitstatus):
    try:
        TEST_DB_PATH.unlink()
    except FileNotFoundError:
        pass


@pytest.fixture
def test_settings():
    return get_settings()


@pytest.fixture
async def db_session() -> AsyncGenerator[Any, None]:
    """Fresh schema and a session on it."""
    await _reset_schema()
    async with database_manager.async_session_maker() as session:
        yield session


@pytest.fixture
async def seeded_session(db_session):
    """Session on a schema holding SAMPLE_PRODUCTS."""
    await _insert_products(SAMPLE_PRODUCTS)
    yield db_session


@pytest.fixture
def client() -> TestClient:
    """TestClient on a fresh, empty schema (lifespan not started)."""
    asyncio.run(_reset_schema())
    return TestClient(app)


@pytest.fixture
def seeded_client(client) -> TestClient:
    """TestClient on a schema holding SAMPLE_PRODUCTS."""
    asyncio.run(_insert_products(SAMPLE_PRODUCTS))
    return client


@pytest.fixture
def mock_publisher():
    """Event publisher double recording every publish call."""
    publisher = Mock(spec=EventPublisher)
    publisher.publish = AsyncMock(return_value=None)
    return publisher


@pytest.fixture
def event_producer(mock_publisher):
    return InteractionEventProducer(
        mock_publisher,
        topics={
            "page_hit": "page-hits",
            "click": "clicks",
            "impression": "impressions",
            "cart_event": "cart-events",
        },
    )
