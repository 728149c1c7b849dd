from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from models.Base import Base, utcnow

class ReservationDB(Base):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    table_id = Column(Integer, ForeignKey("tables.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    customer_email = Column(String, default="")
    date = Column(Date, nullable=False, index=True)
    time = Column(String, nullable=False)
    party_size = Column(Integer, nullable=False, default=2)
    status = Column(String, nullable=False, default="confirmed")
    special_requests = Column(String, default="")
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    table = relationship("TableDB", back_populates="reservations")
