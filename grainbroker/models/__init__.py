"""Aggregate model imports for Alembic auto-detection."""

from grainbroker.models.customer import Customer
from grainbroker.models.supplier import Supplier
from grainbroker.models.order import Order

__all__ = ["Customer", "Supplier", "Order"]
