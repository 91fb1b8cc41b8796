"""Product Schemas: create/update/filter contracts and the product transformer.

Invariants:
    - ProductCreate: name 3-100, description >= 10, price > 0, category required,
      stock >= 0 (default 0), isActive default true
    - ProductFilter.maxPrice >= minPrice, checked only when both are present and valid
"""

from datetime import datetime
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator

from helpdesk.schemas.common import PaginationQuery, RequestSchema, ResponseSchema


class ProductCreate(RequestSchema):
    name: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10)
    price: float = Field(gt=0)
    category: str = Field(min_length=1, max_length=50)
    stock: int = Field(0, ge=0)
    is_active: bool = True


class ProductUpdate(RequestSchema):
    name: str | None = Field(None, min_length=3, max_length=100)
    description: str | None = Field(None, min_length=10)
    price: float | None = Field(None, gt=0)
    category: str | None = Field(None, min_length=1, max_length=50)
    stock: int | None = Field(None, ge=0)
    is_active: bool | None = None


class ProductFilter(PaginationQuery):
    sort_by: Literal["createdAt", "updatedAt", "name", "price", "stock"] = "createdAt"
    category: str | None = None
    is_active: bool | None = None
    name: str | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)

    @field_validator("max_price")
    @classmethod
    def max_price_not_below_min_price(
        cls, v: float | None, info: ValidationInfo,
    ) -> float | None:
        min_price = info.data.get("min_price")
        if v is not None and min_price is not None and v < min_price:
            raise ValueError("maxPrice must be greater than or equal to minPrice")
        return v


class ProductResponse(ResponseSchema):
    id: int
    name: str
    description: str
    price: float
    category: str
    stock: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
