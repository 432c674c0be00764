from .base import Base
from .vendor import Vendor
from .user import User
from .menu.menu_item import MenuItem, MenuCategory
from .order.order import Order, OrderItem, OrderStatus, PaymentMethod
