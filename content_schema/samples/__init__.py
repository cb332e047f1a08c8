"""Sample document types: product, order and shipment."""

from ..registry import SchemaRegistry
from .order import order
from .product import product
from .shipment import shipment

SAMPLE_SCHEMAS = (product, order, shipment)


def sample_registry() -> SchemaRegistry:
    """A fresh registry holding the sample document types."""
    return SchemaRegistry(SAMPLE_SCHEMAS)


__all__ = ["SAMPLE_SCHEMAS", "order", "product", "sample_registry", "shipment"]
