# agilstore/errors.py
from typing import Optional


class InventoryError(Exception):
    """Base class for every error the inventory reports back to the menu."""


class InvalidFieldError(InventoryError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class ProductNotFoundError(InventoryError):
    def __init__(self, product_id: int):
        super().__init__(f"Produto {product_id} não encontrado.")
        self.product_id = product_id


class StoreError(InventoryError):
    def __init__(self, path, cause: Optional[BaseException] = None):
        super().__init__(f"{path}: {cause}" if cause else str(path))
        self.path = path
        self.cause = cause


class StoreLoadError(StoreError):
    pass


class StoreSaveError(StoreError):
    pass
