"""Pydantic schemas for Customer CRUD operations."""

import uuid

from pydantic import ConfigDict

from grainbroker.schemas.common import ApiModel


class CustomerIn(ApiModel):
    """Body for POST and PUT. `id` is optional on POST and must match the path on PUT."""

    id: uuid.UUID | None = None
    # Emptiness and length are enforced by CustomerService, not here.
    location: str | None = None

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"location": "Chicago, IL"}]},
    )


class CustomerOut(ApiModel):
    id: uuid.UUID
    location: str
