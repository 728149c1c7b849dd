from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

class TableStatus(str, Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    OCCUPIED = "occupied"

class TableCreate(BaseModel):
    number: int = Field(..., ge=1)
    capacity: int = Field(4, ge=1)

class TableUpdate(BaseModel):
    number: Optional[int] = Field(None, ge=1)
    capacity: Optional[int] = Field(None, ge=1)
    status: Optional[TableStatus] = None

class Table(BaseModel):
    id: int
    number: int
    capacity: int
    is_occupied: bool
    status: TableStatus
    current_order_id: Optional[int] = None

    class Config:
        from_attributes = True
