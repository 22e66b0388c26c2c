from datetime import date
from decimal import Decimal
from typing import Any, Dict, Mapping

import pandas as pd

from dealerdesk.core.references import Reference
from dealerdesk.core.validator import (
    BooleanField,
    DateField,
    EntitySchema,
    NumberField,
    StringField,
)
from dealerdesk.reporting.utils import count_where
from dealerdesk.utils.dates import parse_date
from .base import BaseEntity


def is_upcoming(color: Mapping[str, Any], today: date) -> bool:
    """Colour not yet in stock: availability date still in the future."""
    available_on = parse_date(color.get("approx_available_date"))
    return available_on is not None and available_on > today


class ColorEntity(BaseEntity):
    name = "color"
    description = "Colour options per model with availability"

    id_prefix = "COLOR"

    schema = EntitySchema(
        fields={
            "color_name": StringField("Color name must be at least 2 characters", min_length=2),
            "model_id": StringField("Model is required"),
            "color_code": StringField("Color code is required"),
            "approx_available_date": DateField("Available date is required"),
            "is_available": BooleanField(default=True),
            "additional_cost": NumberField(
                "Additional cost must be positive", minimum=0, default=Decimal("0")
            ),
            "description": StringField(optional=True),
        }
    )

    search_fields = ["color_name", "model_name", "color_code"]

    references = [
        Reference("model_id", "model", snapshot={"model_name": "model_name"}),
    ]

    def option_label(self, record: Mapping[str, Any]) -> str:
        return str(record.get("color_name", ""))

    def calculate_kpis(self, df: pd.DataFrame, today: date) -> Dict[str, Any]:
        upcoming = 0
        if "approx_available_date" in df.columns:
            upcoming = int(
                df["approx_available_date"]
                .map(lambda d: is_upcoming({"approx_available_date": d}, today))
                .sum()
            )
        return {
            "total": len(df),
            "available": count_where(df, "is_available", True),
            "unavailable": count_where(df, "is_available", False),
            "upcoming": upcoming,
        }
