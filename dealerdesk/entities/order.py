from datetime import date
from decimal import Decimal
from typing import Any, Dict, Mapping

import pandas as pd

from dealerdesk.core.references import Reference
from dealerdesk.core.validator import DateField, EntitySchema, NumberField, StringField
from dealerdesk.reporting.utils import count_where
from dealerdesk.utils.dates import parse_date
from .base import BaseEntity

NO_ENQUIRY = "none"

LOAN_FIELDS = ("financier_name", "finance_amount", "emi_amount", "tenure_months")


def loan_details_required(record: Dict[str, Any]) -> Dict[str, str]:
    """LOAN payments need every finance field filled in (non-empty, non-zero)."""
    if record.get("payment_type") != "LOAN":
        return {}

    errors = {}
    for field in LOAN_FIELDS:
        if not record.get(field):
            errors[field] = f"{field.replace('_', ' ').capitalize()} is required for loan payment type"

    if "financier_name" in errors:
        errors["financier_name"] = "Finance details are required for loan payment type"
    return errors


def delivery_delayed(order: Mapping[str, Any]) -> bool:
    """Expected delivery date earlier than the tentative one."""
    tentative = parse_date(order.get("tentative_delivery_date"))
    expected = parse_date(order.get("expected_delivery_date"))
    if tentative is None or expected is None:
        return False
    return expected < tentative


class OrderEntity(BaseEntity):
    name = "order"
    description = "Vehicle orders with payment and finance details"

    id_prefix = "ORD"
    embed_date = True

    schema = EntitySchema(
        fields={
            "customer_id": StringField("Customer is required"),
            "enquiry_id": StringField(optional=True),
            "order_type": StringField(
                "Order type is required", choices=("NEW", "EXCHANGE"), invalid_message="Invalid order type"
            ),
            "payment_type": StringField(
                "Payment type is required", choices=("CASH", "LOAN"), invalid_message="Invalid payment type"
            ),
            "financier_name": StringField(optional=True),
            "finance_amount": NumberField(optional=True),
            "emi_amount": NumberField(optional=True),
            "tenure_months": NumberField(kind="int", optional=True),
            "down_payment": NumberField(
                "Down payment must be positive", minimum=0, default=Decimal("0")
            ),
            "preferred_delivery_location": StringField("Delivery location is required"),
            "sale_type": StringField(
                "Sale type is required",
                choices=("INDIVIDUAL", "CORPORATE"),
                invalid_message="Invalid sale type",
            ),
            "tentative_delivery_date": DateField("Tentative delivery date is required"),
            "expected_delivery_date": DateField("Expected delivery date is required"),
            "reason_for_delay": StringField(optional=True),
        },
        rules=[loan_details_required],
    )

    search_fields = ["customer_name", "id", "preferred_delivery_location"]

    references = [
        Reference("customer_id", "customer", snapshot={"customer_name": "customer_name"}),
        Reference("enquiry_id", "enquiry", snapshot={"model_name": "model_name"}),
    ]

    statuses = ("pending", "confirmed")
    initial_status = "pending"

    def option_label(self, record: Mapping[str, Any]) -> str:
        return (
            f"{record.get('id', '')} - {record.get('customer_name', '')} "
            f"({record.get('model_name', '')})"
        )

    def normalize(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        values = dict(values)
        if values.get("enquiry_id") == NO_ENQUIRY:
            values["enquiry_id"] = ""
        return values

    def form_values(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        values = dict(record)
        values["enquiry_id"] = record.get("enquiry_id") or NO_ENQUIRY
        return values

    def calculate_kpis(self, df: pd.DataFrame, today: date) -> Dict[str, Any]:
        delayed = 0
        if not df.empty:
            delayed = int(df.apply(lambda row: delivery_delayed(row.to_dict()), axis=1).sum())
        return {
            "total": len(df),
            "pending": count_where(df, "status", "pending"),
            "confirmed": count_where(df, "status", "confirmed"),
            "delayed": delayed,
        }
