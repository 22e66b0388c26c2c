from datetime import date
from typing import Any, Dict, Mapping

import pandas as pd

from dealerdesk.core.validator import EntitySchema, StringField
from .base import BaseEntity


class CustomerEntity(BaseEntity):
    name = "customer"
    description = "Customer master with billing address"

    id_prefix = "CUST"

    schema = EntitySchema(
        fields={
            "customer_name": StringField("Customer name must be at least 2 characters", min_length=2),
            "mobile_number": StringField("Mobile number must be at least 10 digits", min_length=10),
            "email": StringField(optional=True, email=True, invalid_message="Invalid email address"),
            "billing_address": StringField("Address must be at least 5 characters", min_length=5),
            "city": StringField("City is required", min_length=2),
            "state": StringField("State is required", min_length=2),
            "district": StringField("District is required", min_length=2),
            "pincode": StringField("Pincode must be 6 digits", min_length=6),
            "pan_number": StringField(optional=True),
            "gst_number": StringField(optional=True),
            "occupation": StringField("Occupation is required", min_length=2),
            "profession": StringField("Profession is required", min_length=2),
        }
    )

    search_fields = ["customer_name", "mobile_number", "email"]

    def option_label(self, record: Mapping[str, Any]) -> str:
        return f"{record.get('customer_name', '')} - {record.get('mobile_number', '')}"

    def calculate_kpis(self, df: pd.DataFrame, today: date) -> Dict[str, Any]:
        return {"total": len(df)}
