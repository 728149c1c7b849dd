from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from models.Base import Base, utcnow

class OrderDB(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    table_id = Column(Integer, ForeignKey("tables.id", ondelete="SET NULL"), nullable=True, index=True)
    waiter_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(String, nullable=False, default="active")
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    payment_status = Column(String, nullable=False, default="pending")
    payment_method = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    table = relationship("TableDB", back_populates="orders")
    items = relationship(
        "OrderItemDB",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemDB.position",
        collection_class=ordering_list("position"),
    )


class OrderItemDB(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(10, 2), nullable=False)
    status = Column(String, nullable=False, default="ordered")
    notes = Column(String, default="")

    order = relationship("OrderDB", back_populates="items")
