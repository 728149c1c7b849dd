import logging
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from errors import NotFoundError, SlotConflictError, ValidationError
from models import (
    ReservationCreate, ReservationDB, ReservationStatus, ReservationUpdate, TableDB,
    truncate_to_day,
)
from services.access_policy import CallerContext, Operation, ensure_allowed

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("customer_name", "customer_phone", "date", "time", "table_id")

# May be cleared by an update, every other field keeps its value when null or empty
BLANKABLE_FIELDS = {"special_requests"}


def _to_day(value) -> date:
    try:
        return truncate_to_day(value)
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")


def day_bounds(value) -> tuple[date, date]:
    """Half-open interval ``[day_start, day_start + 1 day)`` around ``value``."""
    start = _to_day(value)
    return start, start + timedelta(days=1)


class ReservationScheduler:
    """
    Books tables for a date and time slot.

    A slot is the ``(table, day, time)`` triple; at most one ``confirmed``
    reservation may hold it. Availability is computed from reservations only,
    live table occupancy is not consulted.

    Args:
        store (EntityStore): Persistence for tables and reservations.
    """

    def __init__(self, store):
        self.store = store

    def find_conflict(self, table_id: int, day, time: str, exclude_id: Optional[int] = None) -> Optional[ReservationDB]:
        start, end = day_bounds(day)
        criteria = [
            ReservationDB.table_id == table_id,
            ReservationDB.date >= start,
            ReservationDB.date < end,
            ReservationDB.time == time,
            ReservationDB.status == ReservationStatus.CONFIRMED.value,
        ]
        if exclude_id is not None:
            criteria.append(ReservationDB.id != exclude_id)
        return self.store.find_one(ReservationDB, *criteria)

    def book_slot(self, caller: CallerContext, data: ReservationCreate) -> ReservationDB:
        ensure_allowed(caller, Operation.MANAGE_RESERVATIONS)

        missing = [field for field in REQUIRED_FIELDS if not getattr(data, field)]
        if missing:
            raise ValidationError(f"Please add all required fields: {', '.join(missing)}")

        if self.store.find_by_id(TableDB, data.table_id) is None:
            raise NotFoundError("Table not found")

        day = _to_day(data.date)
        self._ensure_slot_free(data.table_id, day, data.time)

        reservation = self.store.create(
            ReservationDB,
            customer_name=data.customer_name,
            customer_phone=data.customer_phone,
            customer_email=data.customer_email or "",
            date=day,
            time=data.time,
            party_size=data.party_size,
            table_id=data.table_id,
            status=ReservationStatus.CONFIRMED.value,
            special_requests=data.special_requests or "",
            created_by=caller.user_id,
        )
        self.store.commit()
        logger.info("Reservation %s booked: table %s on %s at %s", reservation.id, data.table_id, day, data.time)
        return reservation

    def reschedule_slot(self, caller: CallerContext, reservation_id: int, patch: ReservationUpdate) -> ReservationDB:
        ensure_allowed(caller, Operation.MANAGE_RESERVATIONS)
        reservation = self.get_reservation(reservation_id)

        changes = {
            field: value.value if isinstance(value, Enum) else value
            for field, value in patch.model_dump(exclude_unset=True).items()
        }

        table_id = changes.get("table_id") or reservation.table_id
        day = _to_day(changes["date"]) if changes.get("date") else reservation.date
        time = changes.get("time") or reservation.time

        slot_changed = (table_id, day, time) != (reservation.table_id, reservation.date, reservation.time)
        reconfirmed = (
            changes.get("status") == ReservationStatus.CONFIRMED.value
            and reservation.status != ReservationStatus.CONFIRMED.value
        )

        if table_id != reservation.table_id and self.store.find_by_id(TableDB, table_id) is None:
            raise NotFoundError("Table not found")

        if slot_changed or reconfirmed:
            self._ensure_slot_free(table_id, day, time, exclude_id=reservation.id)

        for field, value in changes.items():
            if field in BLANKABLE_FIELDS:
                setattr(reservation, field, value or "")
            elif value is not None and value != "":
                setattr(reservation, field, value)
        reservation.date = day

        self.store.save(reservation)
        self.store.commit()
        logger.info("Reservation %s updated", reservation.id)
        return reservation

    def cancel(self, caller: CallerContext, reservation_id: int) -> None:
        ensure_allowed(caller, Operation.MANAGE_RESERVATIONS)
        reservation = self.get_reservation(reservation_id)
        self.store.delete(reservation)
        self.store.commit()
        logger.info("Reservation %s removed", reservation_id)

    def list_available_tables(self, day, time: Optional[str], party_size: Optional[int] = None) -> list[TableDB]:
        if not day or not time:
            raise ValidationError("Please provide date and time")

        start, end = day_bounds(day)
        reserved = self.store.find(
            ReservationDB,
            ReservationDB.date >= start,
            ReservationDB.date < end,
            ReservationDB.time == time,
            ReservationDB.status == ReservationStatus.CONFIRMED.value,
        )
        reserved_ids = {r.table_id for r in reserved}

        tables = self.store.find(TableDB, order_by=TableDB.number.asc())
        available = [t for t in tables if t.id not in reserved_ids]
        if party_size:
            available = [t for t in available if t.capacity >= party_size]
        return available

    def list_reservations(self, day=None, status=None) -> list[ReservationDB]:
        if day:
            start, end = day_bounds(day)
            criteria = [ReservationDB.date >= start, ReservationDB.date < end]
        else:
            criteria = [ReservationDB.date >= date.today()]
        if status:
            criteria.append(ReservationDB.status == ReservationStatus(status).value)

        return self.store.find(
            ReservationDB,
            *criteria,
            order_by=(ReservationDB.date.asc(), ReservationDB.time.asc(), ReservationDB.id.asc()),
        )

    def get_reservation(self, reservation_id: int) -> ReservationDB:
        reservation = self.store.find_by_id(ReservationDB, reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation not found")
        return reservation

    def _ensure_slot_free(self, table_id: int, day, time: str, exclude_id: Optional[int] = None) -> None:
        if self.find_conflict(table_id, day, time, exclude_id=exclude_id):
            logger.warning("Slot conflict: table %s on %s at %s", table_id, day, time)
            raise SlotConflictError("Table is already reserved for this time")
