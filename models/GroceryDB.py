from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from models.Base import Base, utcnow

class GroceryDB(Base):
    __tablename__ = "groceries"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, unique=True, index=True, nullable=False)
    category = Column(String, nullable=False)
    quantity = Column(Float, nullable=False, default=0)
    unit = Column(String, nullable=False, default="kg")
    min_quantity = Column(Float, nullable=False, default=5)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    last_updated = Column(DateTime, default=utcnow)
