from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class CategoryOut(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
