"""Shipment document type."""

from ..models.rules import Rule
from ..models.schema import DocumentType, FieldDefinition
from .common import DATETIME_OPTIONS, dropdown

CARRIERS = ("FedEx", "UPS", "DHL", "USPS")
SHIPMENT_STATUSES = ("In Transit", "Out for Delivery", "Delivered", "Pending")


shipment = DocumentType(
    name="shipment",
    title="Shipment",
    fields=(
        FieldDefinition(
            name="trackingNumber",
            title="Tracking Number",
            type="string",
            rules=Rule().required().min(5).max(50).warning("Tracking number should be between 5 to 50 characters."),
        ),
        FieldDefinition(
            name="order",
            title="Associated Order",
            type="reference",
            to=("order",),
            rules=Rule().required().error("A shipment must be associated with an order."),
        ),
        FieldDefinition(
            name="carrier",
            title="Carrier",
            type="string",
            options=dropdown(CARRIERS),
            rules=Rule().required().error("Carrier is required."),
        ),
        FieldDefinition(
            name="status",
            title="Shipment Status",
            type="string",
            options=dropdown(SHIPMENT_STATUSES),
            initial_value="Pending",
            rules=Rule().required(),
        ),
        FieldDefinition(
            name="estimatedDeliveryDate",
            title="Estimated Delivery Date",
            type="datetime",
            options=DATETIME_OPTIONS,
            rules=Rule().required().error("Estimated delivery date is required."),
        ),
        FieldDefinition(
            name="actualDeliveryDate",
            title="Actual Delivery Date",
            type="datetime",
            options=DATETIME_OPTIONS,
        ),
        FieldDefinition(
            name="shipmentNotes",
            title="Shipment Notes",
            type="text",
            description="Optional notes about the shipment.",
        ),
    ),
)
