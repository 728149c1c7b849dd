from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from auth import get_caller
from database import get_db
from errors import RestaurantError
from models import Table, TableCreate, TableDB, TableUpdate
from services import CallerContext, EntityStore, Operation, TableService, ensure_allowed

table_router = APIRouter(
    tags=["Table"]
)


def _table_out(table: TableDB) -> dict:
    return Table.model_validate(table).model_dump()


@table_router.get("/tables", tags=["Table"])
def get_tables(caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Retrieves all tables ordered by table number.

    Returns:
        list: A list of tables with their live occupancy.
    """
    ensure_allowed(caller, Operation.READ)
    tables = TableService(EntityStore(db)).list_tables()
    return [_table_out(t) for t in tables]


@table_router.get("/tables/{id}", tags=["Table"])
def get_table(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    ensure_allowed(caller, Operation.READ)
    return _table_out(TableService(EntityStore(db)).get_table(id))


@table_router.post("/tables", status_code=201, tags=["Table"])
def create_table(table: TableCreate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):

    try:
        db_table = TableService(EntityStore(db)).create_table(caller, table)
        return {"success": True, "table": _table_out(db_table)}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@table_router.put("/tables/{id}", tags=["Table"])
def update_table(id: int, updated_table: TableUpdate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Updates number, capacity or the manual ``available``/``reserved`` status.

    Occupancy itself follows the orders and cannot be set here.
    """
    try:
        db_table = TableService(EntityStore(db)).update_table(caller, id, updated_table)
        return {"success": True, "table": _table_out(db_table)}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@table_router.delete("/tables/{id}", tags=["Table"])
def delete_table(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):

    try:
        TableService(EntityStore(db)).delete_table(caller, id)
        return {"success": True}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))
