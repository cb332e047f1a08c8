"""Shared fixtures: documents that satisfy every constraint of the sample schemas."""

import copy
import logging

import pytest


VALID_PRODUCT = {
    "_type": "product",
    "name": "Trail Runner",
    "description": "Lightweight trail running shoe with grip.",
    "rating": 4.5,
    "price": 50,
    "discountedPrice": 40,
    "stockQuantity": 10,
    "brand": "Acme",
    "dimensions": {"width": 10, "height": 5, "depth": 30},
    "colors": ["red", "black"],
    "categories": [{"_type": "reference", "_ref": "category-shoes"}],
    "tags": ["running"],
    "image": {"asset": {"_ref": "image-abc123"}, "alt": "A red trail shoe"},
}

VALID_ORDER = {
    "_type": "order",
    "customerId": {"_type": "reference", "_ref": "customer-1"},
    "customerName": "Ada Lovelace",
    "customerEmail": "ada@example.com",
    "items": [
        {"productId": {"_type": "reference", "_ref": "product-1"}, "quantity": 2},
        {"productId": {"_type": "reference", "_ref": "product-2"}, "quantity": 1},
    ],
    "totalPrice": 120,
    "orderStatus": "Pending",
    "paymentStatus": "Paid",
    "deliveryAddress": {
        "street": "12 Analytical Way",
        "city": "London",
        "state": "Greater London",
        "postalCode": "NW1 6XE",
        "country": "UK",
    },
    "timestamp": "2026-10-19T12:00:00.000Z",
}

VALID_SHIPMENT = {
    "_type": "shipment",
    "trackingNumber": "1Z999AA10123456784",
    "order": {"_type": "reference", "_ref": "order-1"},
    "carrier": "UPS",
    "status": "In Transit",
    "estimatedDeliveryDate": "2026-10-25T09:00:00Z",
}


@pytest.fixture
def valid_product():
    return copy.deepcopy(VALID_PRODUCT)


@pytest.fixture
def valid_order():
    return copy.deepcopy(VALID_ORDER)


@pytest.fixture
def valid_shipment():
    return copy.deepcopy(VALID_SHIPMENT)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """The checker CLI installs handlers bound to the current streams; drop them after each test."""
    yield
    logger = logging.getLogger("content_schema")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
