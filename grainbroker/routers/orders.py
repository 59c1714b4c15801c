"""Order management router.

Endpoints:
    GET    /api/Orders           List all orders
    GET    /api/Orders/{id}      Get one order
    POST   /api/Orders           Create order
    PUT    /api/Orders/{id}      Replace order
    DELETE /api/Orders/{id}      Delete order

customerId and supplierId are not checked up front; a dangling reference
surfaces as a 422 FOREIGN_KEY_VIOLATION from the integrity handler.
"""

import uuid

from fastapi import APIRouter, Depends, Request, Response, status

from grainbroker.middleware.exceptions import IdMismatchError, ResourceNotFoundError
from grainbroker.models.order import Order
from grainbroker.schemas.order import OrderIn, OrderOut
from grainbroker.services.base import UpdateOutcome
from grainbroker.services.order import OrderService, get_order_service

router = APIRouter()


@router.get("", response_model=list[OrderOut])
async def list_orders(
    service: OrderService = Depends(get_order_service),
):
    """List all orders."""
    orders = await service.list()
    return [OrderOut.model_validate(o) for o in orders]


@router.get("/{order_id}", response_model=OrderOut)
async def get_order(
    order_id: uuid.UUID,
    service: OrderService = Depends(get_order_service),
):
    """Get a single order."""
    order = await service.get_by_id(order_id)
    if order is None:
        raise ResourceNotFoundError("Order", str(order_id))
    return OrderOut.model_validate(order)


@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
async def create_order(
    body: OrderIn,
    request: Request,
    response: Response,
    service: OrderService = Depends(get_order_service),
):
    """Create a new order. `id` is generated when omitted.

    orderDate is a time span ("HH:mm:ss" or "D.HH:mm:ss"), not a calendar date.
    """
    order = await service.create(Order(**body.model_dump(exclude_none=True)))
    response.headers["Location"] = str(request.url_for("get_order", order_id=order.id))
    return OrderOut.model_validate(order)


@router.put("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_order(
    order_id: uuid.UUID,
    body: OrderIn,
    service: OrderService = Depends(get_order_service),
):
    """Replace an order. The id in the URL must match the id in the body."""
    if body.id != order_id:
        raise IdMismatchError()

    outcome = await service.update(order_id, Order(**body.model_dump(exclude_none=True)))
    if outcome is UpdateOutcome.ID_MISMATCH:
        raise IdMismatchError()
    if outcome is UpdateOutcome.NOT_FOUND:
        raise ResourceNotFoundError("Order", str(order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: uuid.UUID,
    service: OrderService = Depends(get_order_service),
):
    """Delete an order."""
    if not await service.delete(order_id):
        raise ResourceNotFoundError("Order", str(order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
