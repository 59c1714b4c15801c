"""Customer management router.

Endpoints:
    GET    /api/Customers           List all customers
    GET    /api/Customers/{id}      Get one customer
    POST   /api/Customers           Create customer
    PUT    /api/Customers/{id}      Replace customer
    DELETE /api/Customers/{id}      Delete customer (and its orders)
"""

import uuid

from fastapi import APIRouter, Depends, Request, Response, status

from grainbroker.middleware.exceptions import IdMismatchError, ResourceNotFoundError
from grainbroker.models.customer import Customer
from grainbroker.schemas.customer import CustomerIn, CustomerOut
from grainbroker.services.base import UpdateOutcome
from grainbroker.services.customer import CustomerService, get_customer_service

router = APIRouter()


@router.get("", response_model=list[CustomerOut])
async def list_customers(
    service: CustomerService = Depends(get_customer_service),
):
    """List all customers."""
    customers = await service.list()
    return [CustomerOut.model_validate(c) for c in customers]


@router.get("/{customer_id}", response_model=CustomerOut)
async def get_customer(
    customer_id: uuid.UUID,
    service: CustomerService = Depends(get_customer_service),
):
    """Get a single customer."""
    customer = await service.get_by_id(customer_id)
    if customer is None:
        raise ResourceNotFoundError("Customer", str(customer_id))
    return CustomerOut.model_validate(customer)


@router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
async def create_customer(
    body: CustomerIn,
    request: Request,
    response: Response,
    service: CustomerService = Depends(get_customer_service),
):
    """Create a new customer. `id` is generated when omitted."""
    customer = await service.create(Customer(**body.model_dump(exclude_none=True)))
    response.headers["Location"] = str(request.url_for("get_customer", customer_id=customer.id))
    return CustomerOut.model_validate(customer)


@router.put("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_customer(
    customer_id: uuid.UUID,
    body: CustomerIn,
    service: CustomerService = Depends(get_customer_service),
):
    """Replace a customer. The id in the URL must match the id in the body."""
    if body.id != customer_id:
        raise IdMismatchError()

    outcome = await service.update(customer_id, Customer(**body.model_dump(exclude_none=True)))
    if outcome is UpdateOutcome.ID_MISMATCH:
        raise IdMismatchError()
    if outcome is UpdateOutcome.NOT_FOUND:
        raise ResourceNotFoundError("Customer", str(customer_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: uuid.UUID,
    service: CustomerService = Depends(get_customer_service),
):
    """Delete a customer; its orders go with it."""
    if not await service.delete(customer_id):
        raise ResourceNotFoundError("Customer", str(customer_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
