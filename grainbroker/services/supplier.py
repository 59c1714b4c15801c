"""Supplier service."""

from fastapi import Depends

from grainbroker.models.supplier import Supplier
from grainbroker.persistence import GrainBrokerContext, get_context
from grainbroker.services.base import EntityService
from grainbroker.services.customer import LOCATION_RULES


class SupplierService(EntityService[Supplier]):
    model = Supplier
    entity_name = "Supplier"
    rules = LOCATION_RULES


def get_supplier_service(
    context: GrainBrokerContext = Depends(get_context),
) -> SupplierService:
    return SupplierService(context)
