"""Order service.

Only the quantity and cost ranges are checked here. customer_id and
supplier_id are not looked up first: a dangling reference is rejected by the
database's foreign keys and the IntegrityError propagates to the caller.
"""

from fastapi import Depends

from grainbroker.models.order import Order
from grainbroker.persistence import GrainBrokerContext, get_context
from grainbroker.services.base import EntityService, ValidationRule


class OrderService(EntityService[Order]):
    model = Order
    entity_name = "Order"
    rules = (
        ValidationRule(
            field="order_req_amt_ton",
            check=lambda o: o.order_req_amt_ton is not None and o.order_req_amt_ton > 0,
            message="Order request amount must be greater than zero",
        ),
        ValidationRule(
            field="supplied_amt_ton",
            check=lambda o: o.supplied_amt_ton is None or o.supplied_amt_ton >= 0,
            message="Supplied amount cannot be negative",
        ),
        ValidationRule(
            field="cost_of_delivery",
            check=lambda o: o.cost_of_delivery is None or o.cost_of_delivery >= 0,
            message="Cost of delivery cannot be negative",
        ),
    )


def get_order_service(
    context: GrainBrokerContext = Depends(get_context),
) -> OrderService:
    return OrderService(context)
