# agilstore/database.py
import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from .errors import StoreLoadError, StoreSaveError
from .models import Product

logger = logging.getLogger(__name__)

_PRODUCT_LIST = TypeAdapter(List[Product])


class ProductStore:
    """Whole-file JSON persistence for the product list.

    The file holds a single JSON array of product objects. There is no
    incremental write: every save rewrites the file.
    """

    def __init__(self, path: Union[str, Path] = "products.json"):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> List[Product]:
        if not self.exists():
            logger.info(f"No store at {self.path}, starting empty")
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
            products = _PRODUCT_LIST.validate_json(raw, strict=True)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise StoreLoadError(self.path, e) from e

        seen = set()
        for p in products:
            if p.id in seen:
                raise StoreLoadError(self.path, ValueError(f"duplicate id {p.id}"))
            seen.add(p.id)

        logger.info(f"Loaded {len(products)} products from {self.path}")
        return products

    def save(self, products: List[Product]) -> None:
        payload = [p.model_dump() for p in products]
        try:
            self.path.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            raise StoreSaveError(self.path, e) from e
        logger.info(f"Saved {len(products)} products to {self.path}")
