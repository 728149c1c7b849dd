from .Base import Base
from .Grocery import Grocery, GroceryCreate, GroceryUpdate
from .GroceryDB import GroceryDB
from .Order import (
    ItemStatus, ItemStatusUpdate, Order, OrderCreate, OrderItem, OrderItemIn,
    OrderStatus, OrderUpdate, PaymentMethod, PaymentStatus,
)
from .OrderDB import OrderDB, OrderItemDB
from .Reservation import Reservation, ReservationCreate, ReservationStatus, ReservationUpdate, truncate_to_day
from .ReservationDB import ReservationDB
from .Table import Table, TableCreate, TableStatus, TableUpdate
from .TableDB import TableDB
from .User import Role, Token, User, UserCreate, UserUpdate
from .UserDB import UserDB
