"""Common schemas used across the application."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for wire schemas: camelCase on the wire, snake_case in Python.

    Usage:
        class CustomerOut(ApiModel):
            id: uuid.UUID
            location: str

    Serializes as {"id": "...", "location": "..."}; input accepts either
    "orderReqAmtTon" or "order_req_amt_ton".
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
