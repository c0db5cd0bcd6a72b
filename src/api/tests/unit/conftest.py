"""Unit test fixtures with mocked dependencies."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from ulid import ULID

from catalog.domain.value_objects import ProductSnapshot, VariantSnapshot
from ordering.domain.value_objects import PostalAddress


@pytest.fixture
def tenant_id() -> str:
    """A valid tenant identifier."""
    return str(ULID())


@pytest.fixture
def other_tenant_id() -> str:
    """A second tenant, for isolation checks."""
    return str(ULID())


@pytest.fixture
def mock_probe():
    """Probe double recording every call."""
    return MagicMock()


@pytest.fixture
def mock_catalog():
    """Catalog repository double; configure get_product/get_variant per test."""
    catalog = AsyncMock()
    catalog.get_product.return_value = None
    catalog.get_variant.return_value = None
    return catalog


@pytest.fixture
def widget() -> ProductSnapshot:
    """A published, stock-tracked product with 10 units."""
    return ProductSnapshot(
        id="01HZX0000000000000000WIDGT",
        name="Widget",
        sku="WID-001",
        price=Decimal("29.99"),
        inventory_qty=10,
        track_inventory=True,
        is_published=True,
        is_deleted=False,
    )


@pytest.fixture
def widget_large(widget: ProductSnapshot) -> VariantSnapshot:
    """A variant of the widget with its own price and stock."""
    return VariantSnapshot(
        id="01HZX00000000000000WIDGTLG",
        product_id=widget.id,
        name="Large",
        sku="WID-001-L",
        stock_quantity=3,
        is_deleted=False,
        price=Decimal("34.99"),
    )


@pytest.fixture
def shipping_address() -> PostalAddress:
    """A domestic shipping address in a region without tax."""
    return PostalAddress(
        name="Ada Lovelace",
        line1="1 Analytical Way",
        city="Portland",
        region="OR",
        postal_code="97201",
        country="US",
    )
