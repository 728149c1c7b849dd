from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

class OrderStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class ItemStatus(str, Enum):
    ORDERED = "ordered"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    CANCELLED = "cancelled"

class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"

class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    ONLINE = "online"

class OrderItemIn(BaseModel):
    name: str
    quantity: int = Field(1, ge=1)
    price: float = Field(..., ge=0)
    status: ItemStatus = ItemStatus.ORDERED
    notes: str = ""

class ItemStatusUpdate(BaseModel):
    item_id: int
    status: ItemStatus

class OrderCreate(BaseModel):
    table_id: Optional[int] = None
    items: List[OrderItemIn] = []

class OrderUpdate(BaseModel):
    items: Optional[List[OrderItemIn]] = None
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[PaymentMethod] = None
    item_updates: Optional[List[ItemStatusUpdate]] = None

class OrderItem(BaseModel):
    id: int
    name: str
    quantity: int
    price: float
    status: ItemStatus
    notes: str = ""

    class Config:
        from_attributes = True

class Order(BaseModel):
    id: int
    table_id: Optional[int] = None
    waiter_id: int
    items: List[OrderItem]
    status: OrderStatus
    total_amount: float
    payment_status: PaymentStatus
    payment_method: Optional[PaymentMethod] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
