# app/api/schemas/product.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.api.schemas.category import CategoryOut
from app.api.schemas.supplier import SupplierOut


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    discount: float = Field(..., ge=0, le=50)
    categoryId: str
    supplierId: str
    stock: int = Field(0, ge=0)
    description: Optional[str] = None


class ProductUpdate(BaseModel):
    """Partial update: only the fields sent are applied, with the same rules as ProductCreate."""
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, gt=0)
    discount: Optional[float] = Field(None, ge=0, le=50)
    categoryId: Optional[str] = None
    supplierId: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("name", "price", "discount", "categoryId", "supplierId", "stock", mode="before")
    @classmethod
    def not_null(cls, v):
        # omitted is fine, explicit null is not
        if v is None:
            raise ValueError("may not be null")
        return v


class ProductOut(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    price: float
    discount: float
    stock: int
    categoryId: Optional[str] = None
    supplierId: Optional[str] = None
    description: Optional[str] = None
    category: Optional[CategoryOut] = None
    supplier: Optional[SupplierOut] = None

    model_config = ConfigDict(populate_by_name=True)


class ProductPage(BaseModel):
    payload: List[ProductOut]
    total: int


class ProductResult(BaseModel):
    ok: bool = True
    message: Optional[str] = None
    result: ProductOut


class LoginRequest(BaseModel):
    id: Optional[str] = Field(None, alias="_id")

    model_config = ConfigDict(populate_by_name=True)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    payload: ProductOut
