import logging

from errors import NotFoundError, ValidationError
from models import OrderDB, OrderStatus, TableCreate, TableDB, TableStatus, TableUpdate
from services.access_policy import CallerContext, Operation, ensure_allowed
from services.table_occupancy import TableOccupancyCoordinator

logger = logging.getLogger(__name__)


class TableService:
    """Staff administration of the dining tables."""

    def __init__(self, store, coordinator: TableOccupancyCoordinator = None):
        self.store = store
        self.coordinator = coordinator or TableOccupancyCoordinator(store)

    def list_tables(self) -> list[TableDB]:
        return self.store.find(TableDB, order_by=TableDB.number.asc())

    def get_table(self, table_id: int) -> TableDB:
        table = self.store.find_by_id(TableDB, table_id)
        if table is None:
            raise NotFoundError("Table not found")
        return table

    def create_table(self, caller: CallerContext, data: TableCreate) -> TableDB:
        ensure_allowed(caller, Operation.WRITE_TABLES)
        self._ensure_number_free(data.number)

        table = self.store.create(
            TableDB,
            number=data.number,
            capacity=data.capacity,
            status=TableStatus.AVAILABLE.value,
            is_occupied=False,
        )
        self.store.commit()
        logger.info("Table %s created (capacity %s)", table.number, table.capacity)
        return table

    def update_table(self, caller: CallerContext, table_id: int, patch: TableUpdate) -> TableDB:
        ensure_allowed(caller, Operation.WRITE_TABLES)
        table = self.get_table(table_id)

        if patch.number is not None and patch.number != table.number:
            self._ensure_number_free(patch.number)
            table.number = patch.number
        if patch.capacity is not None:
            table.capacity = patch.capacity
        if patch.status is not None and patch.status.value != table.status:
            self.coordinator.set_staff_status(table, patch.status)

        self.store.save(table)
        self.store.commit()
        return table

    def delete_table(self, caller: CallerContext, table_id: int) -> None:
        ensure_allowed(caller, Operation.WRITE_TABLES)
        table = self.get_table(table_id)

        active = self.store.find_one(
            OrderDB,
            OrderDB.table_id == table.id,
            OrderDB.status == OrderStatus.ACTIVE.value,
        )
        if active is not None:
            raise ValidationError("Table has an active order and cannot be removed")

        number = table.number
        self.store.delete(table)
        self.store.commit()
        logger.info("Table %s removed", number)

    def _ensure_number_free(self, number: int) -> None:
        if self.store.find_one(TableDB, TableDB.number == number) is not None:
            raise ValidationError("Table with that number already exists")
