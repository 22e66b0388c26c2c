from datetime import date
from typing import Any, Dict, Mapping

import pandas as pd

from dealerdesk.core.references import Reference
from dealerdesk.core.validator import EntitySchema, StringField
from dealerdesk.reporting.utils import count_where
from .base import BaseEntity


class EnquiryEntity(BaseEntity):
    name = "enquiry"
    description = "Customer enquiries, convertible to orders"

    id_prefix = "ENQ"

    schema = EntitySchema(
        fields={
            "customer_id": StringField("Customer is required"),
            "model_id": StringField("Model is required"),
            "variant": StringField("Variant is required"),
            "color_id": StringField("Color preference is required"),
            "additional_notes": StringField(optional=True),
        }
    )

    search_fields = ["customer_name", "model_name", "id"]

    references = [
        Reference("customer_id", "customer", snapshot={"customer_name": "customer_name"}),
        Reference("model_id", "model", snapshot={"model_name": "model_name"}),
        Reference(
            "color_id",
            "color",
            snapshot={
                "color_name": "color_name",
                "approx_available_date": "approx_available_date",
            },
            parent_field="model_id",
            parent_key="model_id",
        ),
    ]

    statuses = ("pending", "converted")
    initial_status = "pending"

    def option_label(self, record: Mapping[str, Any]) -> str:
        return (
            f"{record.get('id', '')} - {record.get('customer_name', '')} "
            f"({record.get('model_name', '')})"
        )

    def calculate_kpis(self, df: pd.DataFrame, today: date) -> Dict[str, Any]:
        return {
            "total": len(df),
            "pending": count_where(df, "status", "pending"),
            "converted": count_where(df, "status", "converted"),
        }
