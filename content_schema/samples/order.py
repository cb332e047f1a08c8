"""Order document type."""

from ..initial_values import current_timestamp
from ..models.rules import Rule
from ..models.schema import DocumentType, FieldDefinition
from .common import DATETIME_OPTIONS, dropdown

ORDER_STATUSES = ("Pending", "Processing", "Shipped", "Delivered", "Cancelled")
PAYMENT_STATUSES = ("Unpaid", "Paid", "Refunded")


def _required_string(name, title, message):
    return FieldDefinition(name=name, title=title, type="string", rules=Rule().required().error(message))


order = DocumentType(
    name="order",
    title="Order",
    fields=(
        FieldDefinition(
            name="customerId",
            title="Customer ID",
            type="reference",
            to=("customer",),
            rules=Rule().required().error("Customer ID is required."),
        ),
        FieldDefinition(
            name="customerName",
            title="Customer Name",
            type="string",
            rules=Rule().required().min(2).max(100).warning("Name should be between 2 to 100 characters."),
        ),
        FieldDefinition(
            name="customerEmail",
            title="Customer Email",
            type="string",
            rules=Rule().required().email().error("Must be a valid email address."),
        ),
        FieldDefinition(
            name="items",
            title="Ordered Items",
            type="array",
            of=(
                FieldDefinition(
                    name="",
                    type="object",
                    fields=(
                        FieldDefinition(
                            name="productId",
                            title="Product ID",
                            type="reference",
                            to=("product",),
                            rules=Rule().required().error("Each item must include a product."),
                        ),
                        FieldDefinition(
                            name="quantity",
                            title="Quantity",
                            type="number",
                            rules=Rule().required().min(1).error("Quantity must be at least 1."),
                        ),
                    ),
                ),
            ),
            rules=Rule().required().min(1).error("Order must include at least one item."),
        ),
        FieldDefinition(
            name="totalPrice",
            title="Total Price",
            type="number",
            rules=Rule().required().min(0).error("Total price must be a positive value."),
        ),
        FieldDefinition(
            name="orderStatus",
            title="Order Status",
            type="string",
            options=dropdown(ORDER_STATUSES),
            initial_value="Pending",
            rules=Rule().required(),
        ),
        FieldDefinition(
            name="paymentStatus",
            title="Payment Status",
            type="string",
            options=dropdown(PAYMENT_STATUSES),
            initial_value="Unpaid",
            rules=Rule().required(),
        ),
        FieldDefinition(
            name="deliveryAddress",
            title="Delivery Address",
            type="object",
            fields=(
                _required_string("street", "Street", "Street address is required."),
                _required_string("city", "City", "City is required."),
                _required_string("state", "State", "State is required."),
                _required_string("postalCode", "Postal Code", "Postal code is required."),
                _required_string("country", "Country", "Country is required."),
            ),
        ),
        FieldDefinition(
            name="timestamp",
            title="Order Timestamp",
            type="datetime",
            options=DATETIME_OPTIONS,
            initial_value=current_timestamp,
            rules=Rule().required(),
        ),
    ),
)
