from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from models.Base import Base, utcnow

class TableDB(Base):
    __tablename__ = "tables"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    number = Column(Integer, unique=True, index=True, nullable=False)
    capacity = Column(Integer, nullable=False, default=4)
    is_occupied = Column(Boolean, nullable=False, default=False)
    status = Column(String, nullable=False, default="available")
    # Order currently seated here; resolved by lookup, no foreign key
    current_order_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    reservations = relationship("ReservationDB", back_populates="table", cascade="all, delete-orphan")
    # past orders keep their history with table_id cleared
    orders = relationship("OrderDB", back_populates="table")
