"""Pydantic schemas for Supplier CRUD operations."""

import uuid

from pydantic import ConfigDict

from grainbroker.schemas.common import ApiModel


class SupplierIn(ApiModel):
    id: uuid.UUID | None = None
    location: str | None = None

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"location": "Des Moines, IA"}]},
    )


class SupplierOut(ApiModel):
    id: uuid.UUID
    location: str
