"""Product document type."""

from ..models.field_types import is_number
from ..models.rules import Rule
from ..models.schema import DocumentType, FieldDefinition


def discounted_price_not_above_price(discounted_price, context):
    price = context.sibling("price")
    if is_number(discounted_price) and is_number(price) and discounted_price > price:
        return "Discounted price cannot be greater than the original price."
    return True


product = DocumentType(
    name="product",
    title="Product",
    fields=(
        FieldDefinition(
            name="name",
            title="Name",
            type="string",
            rules=Rule().required().max(100).warning("Keep the name short!"),
        ),
        FieldDefinition(
            name="description",
            title="Description",
            type="text",
            rules=Rule().required().min(20).max(500),
        ),
        FieldDefinition(
            name="rating",
            title="Rating",
            type="number",
            rules=Rule().required().min(0).max(5).warning("Rating must be between 0 and 5."),
        ),
        FieldDefinition(
            name="price",
            title="Price",
            type="number",
            rules=Rule().required().min(0).warning("Price cannot be negative."),
        ),
        FieldDefinition(
            name="discountedPrice",
            title="Discounted Price",
            type="number",
            rules=Rule().min(0).custom(discounted_price_not_above_price),
        ),
        FieldDefinition(
            name="stockQuantity",
            title="Stock Quantity",
            type="number",
            rules=Rule().required().min(0).warning("Stock quantity cannot be negative."),
        ),
        FieldDefinition(
            name="brand",
            title="Brand",
            type="string",
            rules=Rule().required().max(50).warning("Brand name should be short."),
        ),
        FieldDefinition(
            name="dimensions",
            title="Dimensions / Size",
            type="object",
            options={"collapsible": True},
            fields=(
                FieldDefinition(
                    name="width",
                    title="Width",
                    type="number",
                    rules=Rule().min(0).warning("Width cannot be negative."),
                ),
                FieldDefinition(
                    name="height",
                    title="Height",
                    type="number",
                    rules=Rule().min(0).warning("Height cannot be negative."),
                ),
                FieldDefinition(
                    name="depth",
                    title="Depth",
                    type="number",
                    rules=Rule().min(0).warning("Depth cannot be negative."),
                ),
            ),
        ),
        FieldDefinition(
            name="colors",
            title="Colors",
            type="array",
            of=(FieldDefinition(name="", type="string"),),
            options={"layout": "tags"},
        ),
        FieldDefinition(
            name="categories",
            title="Categories",
            type="array",
            of=(FieldDefinition(name="", type="reference", to=("category",)),),
        ),
        FieldDefinition(
            name="tags",
            title="Tags",
            type="array",
            of=(FieldDefinition(name="", type="string"),),
            options={"layout": "tags"},
        ),
        FieldDefinition(
            name="image",
            title="Image",
            type="image",
            options={"hotspot": True},
            fields=(
                FieldDefinition(
                    name="alt",
                    title="Alt Text",
                    type="string",
                    rules=Rule().required().warning("Alt text is important for accessibility."),
                ),
            ),
        ),
    ),
)
