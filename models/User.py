from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr

class Role(str, Enum):
    ADMIN = "admin"
    RECEPTIONIST = "receptionist"
    WAITER = "waiter"
    CHEF = "chef"

class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: Role

class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[Role] = None

class User(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: Role

    class Config:
        from_attributes = True

class Token(BaseModel):
    access_token: str
    token_type: str
