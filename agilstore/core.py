# agilstore/core.py
import logging
from typing import List, Optional, Union
from pathlib import Path

from .database import ProductStore
from .errors import (
    InventoryError, InvalidFieldError, ProductNotFoundError,
    StoreLoadError, StoreSaveError,
)
from .models import Product, FIELD_PARSERS

logger = logging.getLogger(__name__)

__all__ = [
    "InventoryManager", "InventoryError", "InvalidFieldError", "ProductNotFoundError",
]

LOAD_WARNING = "Aviso: Não foi possível carregar os produtos anteriores."


class InventoryManager:
    """Owns the product list and mirrors it to the store after each mutation.

    Store failures never propagate out of the manager: a failed load leaves
    the collection empty and sets ``load_warning``, a failed save leaves
    ``dirty`` set so the caller can report it and ``close`` can retry.
    """

    def __init__(self, store: Union[ProductStore, str, Path]):
        if not isinstance(store, ProductStore):
            store = ProductStore(store)
        self.store = store
        self.products: List[Product] = []
        self.next_id = 1
        self.dirty = False
        self.load_warning: Optional[str] = None

    # ---------------------------
    # Lifecycle
    # ---------------------------
    def load(self) -> None:
        try:
            self.products = self.store.load()
        except StoreLoadError as e:
            logger.warning(f"Could not load products: {e}")
            self.products = []
            self.load_warning = LOAD_WARNING
        self.next_id = max((p.id for p in self.products), default=0) + 1
        self.dirty = False

    def save(self) -> bool:
        try:
            self.store.save(self.products)
        except StoreSaveError as e:
            logger.warning(f"Could not save products: {e}")
            self.dirty = True
            return False
        self.dirty = False
        return True

    def close(self) -> None:
        if self.dirty:
            self.save()

    # ---------------------------
    # Queries
    # ---------------------------
    def list_products(self) -> List[Product]:
        return list(self.products)

    def get_product(self, product_id: int) -> Product:
        for p in self.products:
            if p.id == product_id:
                return p
        raise ProductNotFoundError(product_id)

    def search_by_id(self, product_id: Optional[int]) -> List[Product]:
        if product_id is None:
            return []
        return [p for p in self.products if p.id == product_id]

    def search_by_name(self, query: Optional[str]) -> List[Product]:
        term = (query or "").strip().lower()
        if not term:
            return []
        return [p for p in self.products if term in p.name.lower()]

    # ---------------------------
    # Mutations
    # ---------------------------
    def add_product(self, name: str, category: str, quantity, price) -> Product:
        values = {
            field: FIELD_PARSERS[field](str(raw))
            for field, raw in (
                ("name", name), ("category", category),
                ("quantity", quantity), ("price", price),
            )
        }
        product = Product(id=self.next_id, **values)
        self.next_id += 1
        self.products.append(product)
        logger.info(f"Added product {product.id} ({product.name})")
        self.save()
        return product

    def update_product(self, product_id: int, field: str, raw_value) -> Product:
        if field not in FIELD_PARSERS:
            raise InvalidFieldError(field, f"Campo desconhecido: {field}")
        product = self.get_product(product_id)
        value = FIELD_PARSERS[field](str(raw_value))
        setattr(product, field, value)
        logger.info(f"Updated product {product.id}: {field}={value!r}")
        self.save()
        return product

    def delete_product(self, product_id: int) -> Product:
        product = self.get_product(product_id)
        self.products.remove(product)
        logger.info(f"Deleted product {product.id} ({product.name})")
        self.save()
        return product
