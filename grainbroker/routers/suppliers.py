"""Supplier management router.

Endpoints:
    GET    /api/Suppliers           List all suppliers
    GET    /api/Suppliers/{id}      Get one supplier
    POST   /api/Suppliers           Create supplier
    PUT    /api/Suppliers/{id}      Replace supplier
    DELETE /api/Suppliers/{id}      Delete supplier (and its orders)
"""

import uuid

from fastapi import APIRouter, Depends, Request, Response, status

from grainbroker.middleware.exceptions import IdMismatchError, ResourceNotFoundError
from grainbroker.models.supplier import Supplier
from grainbroker.schemas.supplier import SupplierIn, SupplierOut
from grainbroker.services.base import UpdateOutcome
from grainbroker.services.supplier import SupplierService, get_supplier_service

router = APIRouter()


@router.get("", response_model=list[SupplierOut])
async def list_suppliers(
    service: SupplierService = Depends(get_supplier_service),
):
    """List all suppliers."""
    suppliers = await service.list()
    return [SupplierOut.model_validate(s) for s in suppliers]


@router.get("/{supplier_id}", response_model=SupplierOut)
async def get_supplier(
    supplier_id: uuid.UUID,
    service: SupplierService = Depends(get_supplier_service),
):
    """Get a single supplier."""
    supplier = await service.get_by_id(supplier_id)
    if supplier is None:
        raise ResourceNotFoundError("Supplier", str(supplier_id))
    return SupplierOut.model_validate(supplier)


@router.post("", response_model=SupplierOut, status_code=status.HTTP_201_CREATED)
async def create_supplier(
    body: SupplierIn,
    request: Request,
    response: Response,
    service: SupplierService = Depends(get_supplier_service),
):
    """Create a new supplier. `id` is generated when omitted."""
    supplier = await service.create(Supplier(**body.model_dump(exclude_none=True)))
    response.headers["Location"] = str(request.url_for("get_supplier", supplier_id=supplier.id))
    return SupplierOut.model_validate(supplier)


@router.put("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_supplier(
    supplier_id: uuid.UUID,
    body: SupplierIn,
    service: SupplierService = Depends(get_supplier_service),
):
    """Replace a supplier. The id in the URL must match the id in the body."""
    if body.id != supplier_id:
        raise IdMismatchError()

    outcome = await service.update(supplier_id, Supplier(**body.model_dump(exclude_none=True)))
    if outcome is UpdateOutcome.ID_MISMATCH:
        raise IdMismatchError()
    if outcome is UpdateOutcome.NOT_FOUND:
        raise ResourceNotFoundError("Supplier", str(supplier_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_supplier(
    supplier_id: uuid.UUID,
    service: SupplierService = Depends(get_supplier_service),
):
    """Delete a supplier; the orders it fulfils go with it."""
    if not await service.delete(supplier_id):
        raise ResourceNotFoundError("Supplier", str(supplier_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
