import pytest

from content_schema import DocumentType, FieldDefinition, SchemaError, SchemaRegistry
from content_schema.samples import order, product


def test_register_and_lookup():
    registry = SchemaRegistry([product])
    registry.register(order)

    assert len(registry) == 2
    assert "order" in registry
    assert registry["product"] is product
    assert registry.get("missing") is None
    assert list(registry) == [product, order]


def test_duplicate_names_are_rejected():
    registry = SchemaRegistry([product])
    with pytest.raises(SchemaError, match="Duplicate document type 'product'"):
        registry.register(product)


def test_malformed_schemas_are_rejected():
    broken = DocumentType(name="broken", fields=(FieldDefinition(name="x", type="object"),))
    with pytest.raises(SchemaError) as exc:
        SchemaRegistry([broken])
    assert exc.value.schema_path == "broken/x"


def test_unknown_name():
    with pytest.raises(SchemaError, match="Unknown document type 'invoice'"):
        SchemaRegistry()["invoice"]
