"""Pytest fixtures for the trade document gateway.

Provides reusable test fixtures for:
- Sample orders (one item and three items)
- A codec instance with default limits
- A TestClient for the FastAPI app

Usage:
    def test_round_trip(codec, sample_order):
        assert codec.decode(codec.encode(sample_order)).order == sample_order
"""

import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Plain log lines keep pytest output readable
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import pytest
from fastapi.testclient import TestClient

from domain.edifact import EdifactOrdersCodec, Order, OrderItem


@pytest.fixture
def sample_item() -> OrderItem:
    return OrderItem(
        line_number=1,
        product_code="40123456789010",
        quantity=5,
        unit_price=Decimal("12.50"),
    )


@pytest.fixture
def sample_order(sample_item) -> Order:
    """One-item order matching the reference ORDERS example."""
    return Order(
        order_number="PO-1001",
        buyer_id="BUYER-GLN-1",
        seller_id="SELLER-GLN-2",
        order_date=date(2024, 1, 15),
        items=(sample_item,),
    )


@pytest.fixture
def multi_item_order() -> Order:
    return Order(
        order_number="PO-2002",
        buyer_id="4012345000009",
        seller_id="4098765000002",
        order_date=date(2024, 2, 29),
        items=(
            OrderItem(1, "40123456789010", 10, Decimal("1.23")),
            OrderItem(2, "ABC-123", 1, Decimal("0")),
            OrderItem(3, "XYZ/9", 250, Decimal("1999.99")),
        ),
    )


@pytest.fixture
def codec() -> EdifactOrdersCodec:
    return EdifactOrdersCodec()


@pytest.fixture
def client():
    """TestClient with settings and the shared codec reset per test."""
    from config import get_settings
    from dependencies import get_codec
    from main import app

    get_settings.cache_clear()
    get_codec.cache_clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    get_codec.cache_clear()
