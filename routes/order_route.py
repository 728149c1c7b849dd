from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from auth import get_caller
from database import get_db
from errors import RestaurantError
from models import Order, OrderCreate, OrderDB, OrderUpdate
from services import CallerContext, EntityStore, Operation, OrderAggregator, ensure_allowed

order_router = APIRouter(
    tags=["Order"]
)


def _order_out(order: OrderDB) -> dict:
    data = Order.model_validate(order).model_dump()
    data["table_number"] = order.table.number if order.table else None
    return data


@order_router.post("/orders", status_code=201, tags=["Order"])
def create_order(order: OrderCreate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Creates a new order, calculates its total and marks the table occupied.

    Args:
        order (OrderCreate): Table and line items submitted by the waiter.

    Returns:
        dict: A success flag and the created order.
    """
    try:
        db_order = OrderAggregator(EntityStore(db)).create_order(caller, order)
        return {"success": True, "order": _order_out(db_order)}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@order_router.get("/orders", tags=["Order"])
def get_orders(caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Retrieves orders, newest first. Waiters only see their own.
    """
    orders = OrderAggregator(EntityStore(db)).list_orders(caller)
    return [_order_out(o) for o in orders]


@order_router.get("/orders/kitchen", tags=["Order"])
def get_kitchen_orders(caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Active orders for the kitchen display, oldest first. Clients poll this.
    """
    orders = OrderAggregator(EntityStore(db)).kitchen_orders(caller)
    return [_order_out(o) for o in orders]


@order_router.get("/orders/{id}", tags=["Order"])
def get_order(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    ensure_allowed(caller, Operation.READ)
    return _order_out(OrderAggregator(EntityStore(db)).get_order(id))


@order_router.put("/orders/{id}", tags=["Order"])
def update_order(id: int, updated_order: OrderUpdate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Updates an existing order.

    Replacing ``items`` recalculates the total. Completing or cancelling the
    order frees its table. ``item_updates`` is the chef's per-item status batch.

    Args:
        id (int): The ID of the order to update.
        updated_order (OrderUpdate): The fields to change.

    Returns:
        dict: A success flag and the updated order.
    """
    try:
        order = OrderAggregator(EntityStore(db)).update_order(caller, id, updated_order)
        return {"success": True, "order": _order_out(order)}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@order_router.delete("/orders/{id}", tags=["Order"])
def delete_order(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Deletes an order by its ID, releasing its table first.
    """
    try:
        OrderAggregator(EntityStore(db)).delete_order(caller, id)
        return {"success": True}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))
