"""Customer: the buying side of a grain order.

Deleting a customer removes every order placed by it (ON DELETE CASCADE).
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grainbroker.database import Base

if TYPE_CHECKING:
    from grainbroker.models.order import Order


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    location: Mapped[str] = mapped_column(String(200), nullable=False)

    orders: Mapped[list[Order]] = relationship(
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
