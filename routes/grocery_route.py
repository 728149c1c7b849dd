from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from auth import get_caller
from database import get_db
from errors import RestaurantError
from models import Grocery, GroceryCreate, GroceryUpdate
from services import CallerContext, EntityStore, GroceryInventory, Operation, ensure_allowed

grocery_router = APIRouter(
    tags=["Grocery"]
)


@grocery_router.get("/groceries", tags=["Grocery"])
def get_groceries(caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    ensure_allowed(caller, Operation.READ)
    groceries = GroceryInventory(EntityStore(db)).list_groceries()
    return [Grocery.model_validate(g).model_dump() for g in groceries]


@grocery_router.get("/groceries/low-stock", tags=["Grocery"])
def get_low_stock(caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Items at or below their minimum quantity.
    """
    groceries = GroceryInventory(EntityStore(db)).low_stock(caller)
    return [Grocery.model_validate(g).model_dump() for g in groceries]


@grocery_router.get("/groceries/{id}", tags=["Grocery"])
def get_grocery(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    ensure_allowed(caller, Operation.READ)
    return Grocery.model_validate(GroceryInventory(EntityStore(db)).get_grocery(id)).model_dump()


@grocery_router.post("/groceries", status_code=201, tags=["Grocery"])
def create_grocery(grocery: GroceryCreate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):

    try:
        db_grocery = GroceryInventory(EntityStore(db)).create_grocery(caller, grocery)
        return {"success": True, "grocery": Grocery.model_validate(db_grocery).model_dump()}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@grocery_router.put("/groceries/{id}", tags=["Grocery"])
def update_grocery(id: int, grocery: GroceryUpdate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):

    try:
        db_grocery = GroceryInventory(EntityStore(db)).update_grocery(caller, id, grocery)
        return {"success": True, "grocery": Grocery.model_validate(db_grocery).model_dump()}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@grocery_router.delete("/groceries/{id}", tags=["Grocery"])
def delete_grocery(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):

    try:
        GroceryInventory(EntityStore(db)).delete_grocery(caller, id)
        return {"success": True}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))
