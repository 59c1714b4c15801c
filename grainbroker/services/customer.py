"""Customer service and the location rules shared with suppliers."""

from fastapi import Depends

from grainbroker.models.customer import Customer
from grainbroker.persistence import GrainBrokerContext, get_context
from grainbroker.services.base import EntityService, ValidationRule

LOCATION_MAX_LENGTH = 200

LOCATION_RULES = (
    ValidationRule(
        field="location",
        check=lambda e: e.location is not None and e.location.strip() != "",
        message="Location is required",
    ),
    ValidationRule(
        field="location",
        check=lambda e: len(e.location) <= LOCATION_MAX_LENGTH,
        message=f"Location cannot exceed {LOCATION_MAX_LENGTH} characters",
    ),
)


class CustomerService(EntityService[Customer]):
    model = Customer
    entity_name = "Customer"
    rules = LOCATION_RULES


def get_customer_service(
    context: GrainBrokerContext = Depends(get_context),
) -> CustomerService:
    return CustomerService(context)
