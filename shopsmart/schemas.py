from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

# Price may arrive as a JSON number or as a numeric string ("9.99"); booleans are rejected.
PriceInput = Union[StrictFloat, StrictInt, str]


class ProductCreate(BaseModel):
    # Required-ness is checked by the service so that a missing field and a
    # falsy value (price 0) are told apart with the API's own error message.
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[PriceInput] = None


class ProductUpdate(BaseModel):
    """
    Partial update. Only the fields present in the request body are applied:
    ``model_dump(exclude_unset=True)`` is the patch, so an omitted field and a
    field sent as null stay distinguishable.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[PriceInput] = None


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    description: Optional[str] = None
    price: float
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class MessageRead(BaseModel):
    message: str


class ErrorRead(BaseModel):
    error: str


class HealthRead(BaseModel):
    status: str
    timestamp: datetime
    message: str
