# core/pricing.py: on-road price rollup for the Price entity

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping

ZERO = Decimal("0")

# Added to the selling price
CHARGE_COMPONENTS = (
    "selling_price",
    "additional_charges",
    "gst_amount",
    "insurance_amount",
    "registration_amount",
)

# Taken off the total / already paid
DEDUCTIONS = ("discount_amount",)
PAYMENTS = ("booking_amount", "received_amount")


@dataclass(frozen=True)
class PriceBreakdown:
    total_amount: Decimal
    balance_amount: Decimal

    def as_dict(self) -> Dict[str, Decimal]:
        return {
            "total_amount": self.total_amount,
            "balance_amount": self.balance_amount,
        }


def to_amount(value: Any) -> Decimal:
    """
    Currency amount as Decimal. Blank or non-numeric input counts as zero so a
    half-filled form still previews a total.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        amount = Decimal(str(value).strip() or "0")
    except InvalidOperation:
        return ZERO
    return amount if amount.is_finite() else ZERO


def calculate_balance(values: Mapping[str, Any]) -> PriceBreakdown:
    """
    total   = selling + additional + gst + insurance + registration - discount
    balance = total - booking - received

    Decimal arithmetic end to end; no rounding is applied.
    """
    total = sum((to_amount(values.get(k)) for k in CHARGE_COMPONENTS), ZERO)
    total -= sum((to_amount(values.get(k)) for k in DEDUCTIONS), ZERO)

    balance = total - sum((to_amount(values.get(k)) for k in PAYMENTS), ZERO)

    return PriceBreakdown(total_amount=total, balance_amount=balance)
