"""Pydantic schemas for Order CRUD operations.

customerId and supplierId must reference existing rows; that is left to
the database's foreign keys rather than checked here.
"""

import uuid
from datetime import timedelta
from decimal import Decimal

from pydantic import ConfigDict

from grainbroker.schemas.common import ApiModel
from grainbroker.schemas.types import Int32, Money, TimeOfDay


class OrderIn(ApiModel):
    id: uuid.UUID | None = None
    order_date: TimeOfDay = timedelta(0)
    purchase_order: uuid.UUID
    customer_id: uuid.UUID
    supplier_id: uuid.UUID
    # Sign rules live in OrderService so they report the documented messages.
    order_req_amt_ton: Int32
    supplied_amt_ton: Int32 = 0
    cost_of_delivery: Money = Decimal("0.00")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "orderDate": "10:30:00",
                    "purchaseOrder": "b2c3d4e5-6789-4def-c4fd-234567890abc",
                    "customerId": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                    "supplierId": "c3d4e5f6-7890-4ef0-d5fe-34567890abcd",
                    "orderReqAmtTon": 100,
                    "suppliedAmtTon": 95,
                    "costOfDelivery": 5000.00,
                }
            ]
        },
    )


class OrderOut(ApiModel):
    id: uuid.UUID
    order_date: TimeOfDay
    purchase_order: uuid.UUID
    customer_id: uuid.UUID
    supplier_id: uuid.UUID
    order_req_amt_ton: int
    supplied_amt_ton: int
    cost_of_delivery: Money
