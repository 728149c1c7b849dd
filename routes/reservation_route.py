from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from auth import get_caller
from database import get_db
from errors import RestaurantError
from models import Reservation, ReservationCreate, ReservationDB, ReservationStatus, ReservationUpdate, Table
from services import CallerContext, EntityStore, Operation, ReservationScheduler, ensure_allowed

reservation_router = APIRouter(
    tags=["Reservation"]
)


def _reservation_out(reservation: ReservationDB) -> dict:
    data = Reservation.model_validate(reservation).model_dump()
    table = reservation.table
    data["table"] = {"id": table.id, "number": table.number, "capacity": table.capacity} if table else None
    return data


@reservation_router.get("/reservations", tags=["Reservation"])
def get_reservations(
    date: Optional[str] = Query(None),
    status: Optional[ReservationStatus] = Query(None),
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    Lists reservations ordered by date and time.

    Args:
        date (str, optional): Only this day, any time of day is dropped.
            Without it, every reservation from today on.
        status (str, optional): Filter by reservation status.
    """
    ensure_allowed(caller, Operation.MANAGE_RESERVATIONS)
    reservations = ReservationScheduler(EntityStore(db)).list_reservations(date, status)
    return [_reservation_out(r) for r in reservations]


@reservation_router.get("/reservations/available-tables", tags=["Reservation"])
def get_available_tables(
    date: Optional[str] = Query(None),
    time: Optional[str] = Query(None),
    party_size: Optional[int] = Query(None, ge=1),
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    Tables without a confirmed reservation for the slot, by ascending number.

    Args:
        date (str): Day of the slot, as a date or ISO datetime.
        time (str): Wall-clock time of the slot, e.g. "19:00".
        party_size (int, optional): Only tables seating at least this many guests.
    """
    ensure_allowed(caller, Operation.MANAGE_RESERVATIONS)
    tables = ReservationScheduler(EntityStore(db)).list_available_tables(date, time, party_size)
    return [Table.model_validate(t).model_dump() for t in tables]


@reservation_router.get("/reservations/{id}", tags=["Reservation"])
def get_reservation(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    ensure_allowed(caller, Operation.MANAGE_RESERVATIONS)
    return _reservation_out(ReservationScheduler(EntityStore(db)).get_reservation(id))


@reservation_router.post("/reservations", status_code=201, tags=["Reservation"])
def create_reservation(reservation: ReservationCreate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Books a table for a date and time.

    Returns:
        dict: A success flag and the confirmed reservation. 409 if the slot is taken.
    """
    try:
        db_res = ReservationScheduler(EntityStore(db)).book_slot(caller, reservation)
        return {"success": True, "reservation": _reservation_out(db_res)}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@reservation_router.put("/reservations/{id}", tags=["Reservation"])
def update_reservation(id: int, updated_reservation: ReservationUpdate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Partially updates a reservation; omitted fields keep their values.
    """
    try:
        res = ReservationScheduler(EntityStore(db)).reschedule_slot(caller, id, updated_reservation)
        return {"success": True, "reservation": _reservation_out(res)}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@reservation_router.delete("/reservations/{id}", tags=["Reservation"])
def delete_reservation(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):

    try:
        ReservationScheduler(EntityStore(db)).cancel(caller, id)
        return {"success": True}
    except RestaurantError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))
