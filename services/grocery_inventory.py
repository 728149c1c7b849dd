import logging

from errors import NotFoundError, ValidationError
from models import GroceryCreate, GroceryDB, GroceryUpdate
from models.Base import utcnow
from services.access_policy import CallerContext, Operation, ensure_allowed

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "kg"
DEFAULT_MIN_QUANTITY = 5


class GroceryInventory:

    def __init__(self, store):
        self.store = store

    def list_groceries(self) -> list[GroceryDB]:
        return self.store.find(GroceryDB, order_by=(GroceryDB.category.asc(), GroceryDB.name.asc()))

    def get_grocery(self, grocery_id: int) -> GroceryDB:
        grocery = self.store.find_by_id(GroceryDB, grocery_id)
        if grocery is None:
            raise NotFoundError("Item not found")
        return grocery

    def create_grocery(self, caller: CallerContext, data: GroceryCreate) -> GroceryDB:
        ensure_allowed(caller, Operation.WRITE_GROCERIES)
        if not data.name or not data.category:
            raise ValidationError("Please add a name and category")
        if self.store.find_one(GroceryDB, GroceryDB.name == data.name) is not None:
            raise ValidationError("Item already exists")

        grocery = self.store.create(
            GroceryDB,
            name=data.name,
            category=data.category,
            quantity=data.quantity or 0,
            unit=data.unit or DEFAULT_UNIT,
            min_quantity=data.min_quantity if data.min_quantity is not None else DEFAULT_MIN_QUANTITY,
            updated_by=caller.user_id,
            last_updated=utcnow(),
        )
        self.store.commit()
        logger.info("Grocery %s added", grocery.name)
        return grocery

    def update_grocery(self, caller: CallerContext, grocery_id: int, patch: GroceryUpdate) -> GroceryDB:
        ensure_allowed(caller, Operation.WRITE_GROCERIES)
        grocery = self.get_grocery(grocery_id)

        changes = patch.model_dump(exclude_unset=True)
        new_name = changes.get("name")
        if new_name and new_name != grocery.name:
            if self.store.find_one(GroceryDB, GroceryDB.name == new_name) is not None:
                raise ValidationError("Item already exists")

        for field, value in changes.items():
            if value is not None and value != "":
                setattr(grocery, field, value)
        grocery.updated_by = caller.user_id
        grocery.last_updated = utcnow()

        self.store.save(grocery)
        self.store.commit()
        return grocery

    def delete_grocery(self, caller: CallerContext, grocery_id: int) -> None:
        ensure_allowed(caller, Operation.DELETE_GROCERIES)
        grocery = self.get_grocery(grocery_id)
        name = grocery.name
        self.store.delete(grocery)
        self.store.commit()
        logger.info("Grocery %s removed", name)

    def low_stock(self, caller: CallerContext) -> list[GroceryDB]:
        ensure_allowed(caller, Operation.WRITE_GROCERIES)
        return self.store.find(
            GroceryDB,
            GroceryDB.quantity <= GroceryDB.min_quantity,
            order_by=(GroceryDB.category.asc(), GroceryDB.name.asc()),
        )
