"""Order: a request for grain placed by a customer and fulfilled by a supplier.

order_date is a time-of-day duration, not a calendar date.
purchase_order is an opaque external reference, not a foreign key.
"""

from __future__ import annotations

import uuid
from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Interval, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grainbroker.database import Base

if TYPE_CHECKING:
    from grainbroker.models.customer import Customer
    from grainbroker.models.supplier import Supplier


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    order_date: Mapped[timedelta] = mapped_column(Interval, nullable=False, default=timedelta(0))
    purchase_order: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    supplier_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False, index=True
    )

    order_req_amt_ton: Mapped[int] = mapped_column(Integer, nullable=False)
    supplied_amt_ton: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cost_of_delivery: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)

    customer: Mapped[Customer] = relationship(back_populates="orders")
    supplier: Mapped[Supplier] = relationship(back_populates="orders")
