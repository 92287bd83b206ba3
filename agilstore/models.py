# agilstore/models.py
import math
from typing import Dict, Callable, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidFieldError


class Product(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(gt=0)
    name: str
    category: str
    quantity: int = Field(ge=0)
    price: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("name", "category")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


# ---------------------------
# Field parsers (raw input line -> typed value)
# ---------------------------
def parse_name(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise InvalidFieldError("name", "Nome não pode estar vazio.")
    return value


def parse_category(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise InvalidFieldError("category", "Categoria não pode estar vazia.")
    return value


def parse_quantity(raw: str) -> int:
    try:
        value = int((raw or "").strip(), 10)
    except ValueError:
        raise InvalidFieldError("quantity", "Quantidade deve ser um número inteiro.")
    if value < 0:
        raise InvalidFieldError("quantity", "Quantidade não pode ser negativa.")
    return value


def parse_price(raw: str) -> float:
    try:
        value = float((raw or "").strip())
    except ValueError:
        raise InvalidFieldError("price", "Preço deve ser um número.")
    if not math.isfinite(value):
        raise InvalidFieldError("price", "Preço deve ser um número.")
    if value < 0:
        raise InvalidFieldError("price", "Preço não pode ser negativo.")
    return value


def parse_id(raw: str) -> int:
    try:
        return int((raw or "").strip(), 10)
    except ValueError:
        raise InvalidFieldError("id", "ID inválido.")


FIELD_PARSERS: Dict[str, Callable[[str], Any]] = {
    "name": parse_name,
    "category": parse_category,
    "quantity": parse_quantity,
    "price": parse_price,
}


def format_price(price: float) -> str:
    return f"R$ {price:.2f}"
