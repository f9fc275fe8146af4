from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SupplierCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phoneNumber: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None


class SupplierOut(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    address: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
