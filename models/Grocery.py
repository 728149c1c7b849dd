from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

class GroceryCreate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    min_quantity: Optional[float] = Field(None, ge=0)

class GroceryUpdate(GroceryCreate):
    pass

class Grocery(BaseModel):
    id: int
    name: str
    category: str
    quantity: float
    unit: str
    min_quantity: float
    updated_by: Optional[int] = None
    last_updated: Optional[datetime] = None

    class Config:
        from_attributes = True
