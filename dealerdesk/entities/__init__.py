"""
dealerdesk – Entities Package

This module:
- Exposes the entity descriptor contract (BaseEntity)
- Registers the seven dealer entities, in dependency order
"""

from dealerdesk.entities.base import BaseEntity
from dealerdesk.entities.registry import registry

from dealerdesk.entities.customer import CustomerEntity
from dealerdesk.entities.vehicle_model import VehicleModelEntity
from dealerdesk.entities.color import ColorEntity
from dealerdesk.entities.enquiry import EnquiryEntity
from dealerdesk.entities.order import OrderEntity
from dealerdesk.entities.price import PriceEntity
from dealerdesk.entities.shipping import ShippingEntity

# =========================
# Register entities (ONCE)
# =========================

registry.register("customer", CustomerEntity)
registry.register("model", VehicleModelEntity)
registry.register("color", ColorEntity)
registry.register("enquiry", EnquiryEntity)
registry.register("order", OrderEntity)
registry.register("price", PriceEntity)
registry.register("shipping", ShippingEntity)


def get_entity(name: str) -> BaseEntity:
    """Returns a NEW descriptor instance."""
    return registry.get_entity(name)


__all__ = [
    "BaseEntity",
    "CustomerEntity",
    "VehicleModelEntity",
    "ColorEntity",
    "EnquiryEntity",
    "OrderEntity",
    "PriceEntity",
    "ShippingEntity",
    "registry",
    "get_entity",
]
