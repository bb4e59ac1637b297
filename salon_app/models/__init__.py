from .user import User
from .product import Product
from .worker import Worker
from .service import Service
from .inventory import InventoryItem, InventoryTransaction
from .alert import Alert
from .notification import Notification
