import logging
from decimal import Decimal
from typing import Iterable

from errors import NotFoundError, ValidationError
from models import (
    OrderCreate, OrderDB, OrderItemDB, OrderItemIn, OrderStatus, OrderUpdate,
    PaymentStatus, Role, TableDB,
)
from services.access_policy import AccessContext, CallerContext, Operation, ensure_allowed
from services.table_occupancy import TableOccupancyCoordinator

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
TERMINAL_STATUSES = {OrderStatus.COMPLETED.value, OrderStatus.CANCELLED.value}


def _money(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compute_total(items: Iterable) -> Decimal:
    """Sum of ``price * quantity`` over the line items, rounded to cents."""
    total = sum((_money(item.price) * item.quantity for item in items), Decimal("0"))
    return total.quantize(CENT)


class OrderAggregator:
    """
    Order lifecycle: creation, item and status updates, deletion.

    ``total_amount`` is recomputed from the line items on every item change,
    and every status change that ends an order is forwarded to the
    ``TableOccupancyCoordinator`` inside the same commit.
    """

    def __init__(self, store, coordinator: TableOccupancyCoordinator = None):
        self.store = store
        self.coordinator = coordinator or TableOccupancyCoordinator(store)

    def create_order(self, caller: CallerContext, data: OrderCreate) -> OrderDB:
        ensure_allowed(caller, Operation.CREATE_ORDER)

        if not data.table_id or not data.items:
            raise ValidationError("Please add a table and items to the order")

        if self.store.find_by_id(TableDB, data.table_id) is None:
            raise NotFoundError("Table not found")

        items = [self._item_row(item) for item in data.items]
        order = self.store.create(
            OrderDB,
            table_id=data.table_id,
            waiter_id=caller.user_id,
            status=OrderStatus.ACTIVE.value,
            payment_status=PaymentStatus.PENDING.value,
            items=items,
            total_amount=compute_total(items),
        )
        self.coordinator.on_order_created(order)
        self.store.commit()
        logger.info("Order %s created on table %s, total %s", order.id, data.table_id, order.total_amount)
        return order

    def update_order(self, caller: CallerContext, order_id: int, patch: OrderUpdate) -> OrderDB:
        order = self.get_order(order_id)

        # explicit nulls count as absent
        present = {field for field in patch.model_fields_set if getattr(patch, field) is not None}
        ensure_allowed(
            caller,
            Operation.UPDATE_ORDER,
            AccessContext(
                caller_id=caller.user_id,
                owner_id=order.waiter_id,
                item_status_only=present <= {"item_updates"},
            ),
        )

        new_status = patch.status.value if "status" in present else None
        if new_status and order.status in TERMINAL_STATUSES and new_status != order.status:
            raise ValidationError(f"Order is already {order.status}")

        if "items" in present:
            order.items = [self._item_row(item) for item in patch.items]
            order.total_amount = compute_total(order.items)

        if new_status:
            order.status = new_status
            self.coordinator.on_order_status_changed(order, new_status)

        if "payment_status" in present:
            order.payment_status = patch.payment_status.value

        if "payment_method" in present:
            order.payment_method = patch.payment_method.value

        if "item_updates" in present and Role(caller.role) is Role.CHEF:
            items_by_id = {item.id: item for item in order.items}
            for update in patch.item_updates:
                item = items_by_id.get(update.item_id)
                if item is not None:
                    item.status = update.status.value

        self.store.save(order)
        self.store.commit()
        logger.info("Order %s updated (%s)", order.id, ", ".join(sorted(present)) or "no changes")
        return order

    def delete_order(self, caller: CallerContext, order_id: int) -> None:
        ensure_allowed(caller, Operation.DELETE_ORDER)
        order = self.get_order(order_id)

        self.coordinator.on_order_deleted(order)
        self.store.delete(order)
        self.store.commit()
        logger.info("Order %s removed", order_id)

    def list_orders(self, caller: CallerContext) -> list[OrderDB]:
        ensure_allowed(caller, Operation.READ)
        criteria = []
        if Role(caller.role) is Role.WAITER:
            criteria.append(OrderDB.waiter_id == caller.user_id)
        return self.store.find(OrderDB, *criteria, order_by=(OrderDB.created_at.desc(), OrderDB.id.desc()))

    def kitchen_orders(self, caller: CallerContext) -> list[OrderDB]:
        ensure_allowed(caller, Operation.VIEW_KITCHEN)
        return self.store.find(
            OrderDB,
            OrderDB.status == OrderStatus.ACTIVE.value,
            order_by=(OrderDB.created_at.asc(), OrderDB.id.asc()),
        )

    def get_order(self, order_id: int) -> OrderDB:
        order = self.store.find_by_id(OrderDB, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def _item_row(item: OrderItemIn) -> OrderItemDB:
        return OrderItemDB(
            name=item.name,
            quantity=item.quantity,
            price=_money(item.price),
            status=item.status.value,
            notes=item.notes or "",
        )
