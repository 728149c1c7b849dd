"""
Keeps ``TableDB.status``, ``is_occupied`` and ``current_order_id`` in step
with the order lifecycle.

    available --order created--> occupied
    occupied --order completed/cancelled/deleted--> available

``reserved`` is never derived from reservations; staff set it by hand.
The hooks only flush through the store; the calling operation commits.
"""
import logging

from errors import NotFoundError, ValidationError
from models import OrderStatus, TableDB, TableStatus

logger = logging.getLogger(__name__)

RELEASING_STATUSES = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}


class TableOccupancyCoordinator:

    def __init__(self, store):
        self.store = store

    def on_order_created(self, order) -> TableDB:
        table = self.store.find_by_id(TableDB, order.table_id)
        if table is None:
            raise NotFoundError("Table not found")

        table.status = TableStatus.OCCUPIED.value
        table.is_occupied = True
        table.current_order_id = order.id
        self.store.save(table)
        logger.info("Table %s occupied by order %s", table.number, order.id)
        return table

    def on_order_status_changed(self, order, new_status) -> bool:
        if OrderStatus(new_status) not in RELEASING_STATUSES:
            return False
        return self._release(order)

    def on_order_deleted(self, order) -> bool:
        return self._release(order)

    def set_staff_status(self, table: TableDB, status) -> TableDB:
        """
        Manual status change from the table editor.

        Only ``available`` and ``reserved`` can be set by hand, and not while
        an order holds the table.
        """
        status = TableStatus(status)
        if status is TableStatus.OCCUPIED:
            raise ValidationError("Tables only become occupied through orders")
        if table.status == TableStatus.OCCUPIED.value:
            raise ValidationError("Table is occupied by an active order")

        table.status = status.value
        table.is_occupied = False
        table.current_order_id = None
        return self.store.save(table)

    def _release(self, order) -> bool:
        table = self.store.find_by_id(TableDB, order.table_id)
        # stale reference: the table has moved on to another order
        if table is None or table.current_order_id != order.id:
            logger.info("Order %s does not hold its table, nothing to release", order.id)
            return False

        table.status = TableStatus.AVAILABLE.value
        table.is_occupied = False
        table.current_order_id = None
        self.store.save(table)
        logger.info("Table %s released by order %s", table.number, order.id)
        return True
