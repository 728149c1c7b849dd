from .access_policy import AccessContext, CallerContext, Operation, ensure_allowed, is_allowed
from .entity_store import EntityStore
from .grocery_inventory import GroceryInventory
from .order_aggregator import OrderAggregator, compute_total
from .reservation_scheduler import ReservationScheduler
from .table_occupancy import TableOccupancyCoordinator
from .table_service import TableService
