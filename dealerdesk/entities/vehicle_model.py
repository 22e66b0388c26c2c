from datetime import date
from typing import Any, Dict, Mapping

import pandas as pd

from dealerdesk.core.validator import EntitySchema, NumberField, StringField
from dealerdesk.reporting.utils import value_counts
from .base import BaseEntity

FUEL_TYPES = ("Petrol", "Diesel", "Electric", "Hybrid", "CNG")
TRANSMISSIONS = ("Manual", "Automatic", "CVT", "AMT")


class VehicleModelEntity(BaseEntity):
    name = "model"
    description = "Vehicle models and specifications"

    id_prefix = "MODEL"

    schema = EntitySchema(
        fields={
            "model_name": StringField("Model name must be at least 2 characters", min_length=2),
            "variant": StringField("Variant is required"),
            "fuel_type": StringField(
                "Fuel type is required", choices=FUEL_TYPES, invalid_message="Invalid fuel type"
            ),
            "mileage": NumberField("Mileage must be positive", minimum=0, kind="float"),
            "transmission": StringField(
                "Transmission type is required",
                choices=TRANSMISSIONS,
                invalid_message="Invalid transmission type",
            ),
            "engine_capacity": StringField("Engine capacity is required"),
            "power_output": StringField("Power output is required"),
            "torque": StringField("Torque is required"),
            "seating_capacity": NumberField(
                "Seating capacity must be at least 1", minimum=1, kind="int", default=5
            ),
            "boot_space": NumberField("Boot space must be positive", minimum=0, kind="int"),
            "ground_clearance": NumberField("Ground clearance must be positive", minimum=0, kind="int"),
            "features": StringField(optional=True),
        }
    )

    search_fields = ["model_name", "variant", "fuel_type"]

    def option_label(self, record: Mapping[str, Any]) -> str:
        return (
            f"{record.get('model_name', '')} - {record.get('variant', '')} "
            f"({record.get('fuel_type', '')})"
        )

    def calculate_kpis(self, df: pd.DataFrame, today: date) -> Dict[str, Any]:
        return {
            "total": len(df),
            "by_fuel_type": value_counts(df, "fuel_type"),
        }
