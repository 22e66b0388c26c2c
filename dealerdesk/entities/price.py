from datetime import date
from decimal import Decimal
from typing import Any, Dict, Mapping

import pandas as pd

from dealerdesk.core.pricing import calculate_balance
from dealerdesk.core.references import Reference
from dealerdesk.core.validator import EntitySchema, NumberField, StringField
from dealerdesk.reporting.utils import safe_mean, safe_sum
from .base import BaseEntity


def _amount(message: str) -> NumberField:
    return NumberField(message, minimum=0, default=Decimal("0"))


class PriceEntity(BaseEntity):
    name = "price"
    description = "Price sheet per order with derived total and balance"

    id_prefix = "PRICE"

    schema = EntitySchema(
        fields={
            "order_id": StringField("Order is required"),
            "booking_amount": _amount("Booking amount must be positive"),
            "selling_price": _amount("Selling price must be positive"),
            "discount_amount": _amount("Discount amount must be positive"),
            "received_amount": _amount("Received amount must be positive"),
            "additional_charges": _amount("Additional charges must be positive"),
            "gst_amount": _amount("GST amount must be positive"),
            "insurance_amount": _amount("Insurance amount must be positive"),
            "registration_amount": _amount("Registration amount must be positive"),
            "notes": StringField(optional=True),
        }
    )

    search_fields = ["customer_name", "order_id", "model_name"]

    references = [
        Reference(
            "order_id",
            "order",
            snapshot={"customer_name": "customer_name", "model_name": "model_name"},
        ),
    ]

    def derive(self, record: Dict[str, Any]) -> Dict[str, Any]:
        record.update(calculate_balance(record).as_dict())
        return record

    def preview(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return calculate_balance(values).as_dict()

    def calculate_kpis(self, df: pd.DataFrame, today: date) -> Dict[str, Any]:
        return {
            "total": len(df),
            "total_revenue": safe_sum(df, "received_amount"),
            "total_pending": safe_sum(df, "balance_amount"),
            "average_order_value": safe_mean(df, "total_amount"),
        }
