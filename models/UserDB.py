from sqlalchemy import Column, DateTime, Integer, String
from models.Base import Base, utcnow

class UserDB(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default="waiter")
    created_at = Column(DateTime, default=utcnow)
