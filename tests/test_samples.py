"""Scenario tests against the product, order and shipment document types."""

import pytest

from content_schema import ConstraintKind, Severity, validate
from content_schema.samples import order, product, sample_registry, shipment


class TestValidDocuments:
    """A document meeting every constraint yields an empty report."""

    def test_valid_product(self, valid_product):
        report = validate(product, valid_product)
        assert report.outcomes == ()
        assert report.has_errors is False
        assert report.has_only_warnings is False

    def test_valid_order(self, valid_order):
        report = validate(order, valid_order)
        assert report.outcomes == ()
        assert report.has_errors is False

    def test_valid_shipment(self, valid_shipment):
        report = validate(shipment, valid_shipment)
        assert report.outcomes == ()
        assert report.has_errors is False

    def test_optional_fields_may_be_left_out(self, valid_product):
        for key in ("discountedPrice", "dimensions", "colors", "categories", "tags", "image"):
            del valid_product[key]
        assert validate(product, valid_product).outcomes == ()


class TestProduct:
    """Cross-field and warning-level rules on products."""

    def test_discounted_price_above_price(self, valid_product):
        valid_product["price"] = 50
        valid_product["discountedPrice"] = 60

        report = validate(product, valid_product)

        assert len(report.outcomes) == 1
        outcome = report.outcomes[0]
        assert outcome.path == ("discountedPrice",)
        assert outcome.severity == Severity.ERROR
        assert outcome.constraint == ConstraintKind.CUSTOM
        assert outcome.message == "Discounted price cannot be greater than the original price."

    def test_discounted_price_equal_to_price_passes(self, valid_product):
        valid_product["discountedPrice"] = valid_product["price"]
        assert validate(product, valid_product).outcomes == ()

    def test_discounted_price_without_price(self, valid_product):
        del valid_product["price"]
        valid_product["discountedPrice"] = 60
        report = validate(product, valid_product)
        assert [o.path for o in report.outcomes] == [("price",)]

    def test_negative_discount_reports_min_and_is_not_masked(self, valid_product):
        valid_product["discountedPrice"] = -1
        report = validate(product, valid_product)
        assert [(o.path, o.constraint) for o in report.outcomes] == [(("discountedPrice",), ConstraintKind.MIN)]

    def test_rating_out_of_range_is_a_warning(self, valid_product):
        valid_product["rating"] = 7
        report = validate(product, valid_product)
        assert [(o.path, o.severity, o.message) for o in report.outcomes] == [
            (("rating",), Severity.WARNING, "Rating must be between 0 and 5."),
        ]
        assert report.has_only_warnings
        assert report.is_valid

    def test_short_description_is_an_error(self, valid_product):
        valid_product["description"] = "Too short."
        report = validate(product, valid_product)
        assert report.outcomes[0].path == ("description",)
        assert report.outcomes[0].message == "Must be at least 20 characters long"
        assert report.has_errors

    def test_missing_alt_text_warns_at_nested_path(self, valid_product):
        del valid_product["image"]["alt"]
        report = validate(product, valid_product)
        assert [(o.path, o.severity) for o in report.outcomes] == [(("image", "alt"), Severity.WARNING)]

    def test_negative_dimensions_in_declaration_order(self, valid_product):
        valid_product["dimensions"] = {"depth": -1, "width": -2, "height": 3}
        report = validate(product, valid_product)
        assert [o.path for o in report.outcomes] == [("dimensions", "width"), ("dimensions", "depth")]

    def test_category_references_are_structural(self, valid_product):
        valid_product["categories"] = [{"_ref": "category-a"}, {"_type": "reference"}]
        report = validate(product, valid_product)
        assert [o.path for o in report.outcomes] == [("categories", 1)]

    def test_nan_rating_is_not_a_number(self, valid_product):
        valid_product["rating"] = float("nan")
        report = validate(product, valid_product)
        assert [(o.path, o.severity, o.message) for o in report.outcomes] == [
            (("rating",), Severity.ERROR, "Expected a number"),
        ]

    def test_deeply_nested_extra_key_is_ignored(self, valid_product):
        extra = {}
        for _ in range(3000):
            extra = {"x": extra}
        valid_product["extra"] = extra
        assert validate(product, valid_product).outcomes == ()


class TestOrder:
    """Array-level and nested rules on orders."""

    def test_empty_items_and_missing_total(self, valid_order):
        valid_order["items"] = []
        del valid_order["totalPrice"]

        report = validate(order, valid_order)

        assert [(o.path, o.severity, o.message) for o in report.outcomes] == [
            (("items",), Severity.ERROR, "Order must include at least one item."),
            (("totalPrice",), Severity.ERROR, "Total price must be a positive value."),
        ]

    def test_item_quantity_and_product(self, valid_order):
        valid_order["items"][1] = {"quantity": 0}
        report = validate(order, valid_order)
        assert [(o.path, o.message) for o in report.outcomes] == [
            (("items", 1, "productId"), "Each item must include a product."),
            (("items", 1, "quantity"), "Quantity must be at least 1."),
        ]

    def test_invalid_email(self, valid_order):
        valid_order["customerEmail"] = "ada-at-example"
        report = validate(order, valid_order)
        assert [(o.path, o.message) for o in report.outcomes] == [
            (("customerEmail",), "Must be a valid email address."),
        ]

    def test_missing_address_parts(self, valid_order):
        valid_order["deliveryAddress"] = {"street": "1 Main St", "country": "US"}
        report = validate(order, valid_order)
        assert [o.dotted_path for o in report.outcomes] == [
            "deliveryAddress.city",
            "deliveryAddress.state",
            "deliveryAddress.postalCode",
        ]

    def test_short_customer_name_warns(self, valid_order):
        valid_order["customerName"] = "A"
        report = validate(order, valid_order)
        assert report.has_only_warnings
        assert report.warnings[0].message == "Name should be between 2 to 100 characters."


class TestShipment:
    """Mixed severities on shipments."""

    def test_short_tracking_number_and_missing_carrier(self, valid_shipment):
        valid_shipment["trackingNumber"] = "AB1"
        del valid_shipment["carrier"]

        report = validate(shipment, valid_shipment)

        assert [(o.path, o.severity) for o in report.outcomes] == [
            (("trackingNumber",), Severity.WARNING),
            (("carrier",), Severity.ERROR),
        ]
        assert report.outcomes[1].message == "Carrier is required."
        assert report.has_errors
        assert not report.has_only_warnings

    def test_missing_order_reference(self, valid_shipment):
        del valid_shipment["order"]
        report = validate(shipment, valid_shipment)
        assert [(o.path, o.message) for o in report.outcomes] == [
            (("order",), "A shipment must be associated with an order."),
        ]

    def test_notes_and_actual_delivery_are_optional(self, valid_shipment):
        valid_shipment["shipmentNotes"] = "Leave at the door."
        valid_shipment["actualDeliveryDate"] = "2026-10-24T16:30:00Z"
        assert validate(shipment, valid_shipment).outcomes == ()


class TestSampleRegistry:
    def test_holds_all_sample_types(self):
        registry = sample_registry()
        assert registry.names() == ["product", "order", "shipment"]
        assert registry["order"] is order

    @pytest.mark.parametrize("name", ["product", "order", "shipment"])
    def test_reports_are_reproducible(self, name, valid_product, valid_order, valid_shipment):
        documents = {"product": valid_product, "order": valid_order, "shipment": valid_shipment}
        document = dict(documents[name])
        document.pop(next(k for k in document if not k.startswith("_")))
        schema = sample_registry()[name]
        assert validate(schema, document) == validate(schema, document)
