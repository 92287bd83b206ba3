# agilstore/__init__.py
from .models import Product
from .database import ProductStore
from .core import InventoryManager, InventoryError, InvalidFieldError, ProductNotFoundError

__all__ = [
    "Product", "ProductStore", "InventoryManager",
    "InventoryError", "InvalidFieldError", "ProductNotFoundError",
]
