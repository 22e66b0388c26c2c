from datetime import date
from typing import Any, Callable, Dict, Optional

import pandas as pd

from dealerdesk.core.references import Reference
from dealerdesk.core.validator import BooleanField, DateField, EntitySchema, StringField
from dealerdesk.reporting.utils import count_where
from .base import BaseEntity

TIME_SLOTS = (
    "9:00 AM - 11:00 AM",
    "11:00 AM - 1:00 PM",
    "1:00 PM - 3:00 PM",
    "3:00 PM - 5:00 PM",
    "5:00 PM - 7:00 PM",
)

# shipping field <- customer billing field
BILLING_FIELDS = {
    "shipping_address": "billing_address",
    "city": "city",
    "state": "state",
    "district": "district",
    "pincode": "pincode",
}


class ShippingEntity(BaseEntity):
    name = "shipping"
    description = "Delivery scheduling per order"

    id_prefix = "SHIP"

    schema = EntitySchema(
        fields={
            "order_id": StringField("Order is required"),
            "customer_name": StringField("Customer name is required"),
            "shipping_address": StringField("Shipping address must be at least 5 characters", min_length=5),
            "city": StringField("City is required", min_length=2),
            "state": StringField("State is required", min_length=2),
            "district": StringField("District is required", min_length=2),
            "pincode": StringField("Pincode must be 6 digits", min_length=6),
            "contact_person": StringField("Contact person is required", min_length=2),
            "contact_number": StringField("Contact number must be at least 10 digits", min_length=10),
            "delivery_date": DateField("Delivery date is required"),
            "delivery_time_slot": StringField("Delivery time slot is required"),
            "special_instructions": StringField(optional=True),
            "is_same_as_billing": BooleanField(default=False),
        }
    )

    search_fields = ["customer_name", "order_id", "city", "state"]
    static_options = {"delivery_time_slot": TIME_SLOTS}

    references = [
        Reference(
            "order_id",
            "order",
            snapshot={"model_name": "model_name"},
            prefill={"customer_name": "customer_name"},
        ),
    ]

    statuses = ("pending", "scheduled", "delivered")
    initial_status = "scheduled"

    def billing_address_for(
        self,
        order_id: Any,
        lookup: Callable[[str, Any], Optional[Dict[str, Any]]],
    ) -> Optional[Dict[str, Any]]:
        """
        Follow order -> customer and return the shipping fields to fill in,
        or None when either hop does not resolve.
        """
        order = lookup("order", order_id)
        if order is None:
            return None
        customer = lookup("customer", order.get("customer_id"))
        if customer is None:
            return None
        return {dest: customer.get(src, "") or "" for dest, src in BILLING_FIELDS.items()}

    def calculate_kpis(self, df: pd.DataFrame, today: date) -> Dict[str, Any]:
        return {
            "total": len(df),
            "scheduled": count_where(df, "status", "scheduled"),
            "delivered": count_where(df, "status", "delivered"),
            "pending": count_where(df, "status", "pending"),
        }
