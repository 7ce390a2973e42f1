"""Валидация документов каталога и политики скидок на границе конфигурации."""

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from base.exceptions import InvalidInputError, PolicyValidationError
from pricing.domain.models import DiscountPolicy, Product

RawDocument = Union[str, bytes, bytearray, Mapping, list]

REQUIRED_PRODUCT_FIELDS = ("id", "sku", "name", "price")


def _format_errors(exc: PydanticValidationError) -> str:
    """Человекочитаемый список ошибок pydantic."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def _is_blank(value: Any) -> bool:
    # Пустая строка и нулевое значение считаются незаполненными
    if value is None or value == "":
        return True
    return isinstance(value, (int, float, Decimal)) and value == 0


def _load_json(raw: RawDocument) -> Any:
    # Числа с точкой читаем сразу в Decimal, без потерь float
    if isinstance(raw, (str, bytes, bytearray)):
        return json.loads(raw, parse_float=Decimal)
    return raw


def parse_policy(raw: RawDocument) -> DiscountPolicy:
    """Разбор и проверка документа политики скидок.

    Принимает JSON-строку или уже разобранный словарь. Сообщения об ошибках
    совпадают с теми, что показывает редактор в админке.
    """
    if isinstance(raw, DiscountPolicy):
        return raw

    try:
        data = _load_json(raw)
    except ValueError:
        raise PolicyValidationError("Invalid JSON format")

    if not isinstance(data, Mapping):
        raise PolicyValidationError("Discounts must be an object")

    if not isinstance(data.get("eligibleSkus"), list):
        raise PolicyValidationError("eligibleSkus must be an array")

    if data.get("global") is not None and not isinstance(data["global"], Mapping):
        raise PolicyValidationError("global must be an object")

    for field in ("overrides", "coupons"):
        if data.get(field) is not None and not isinstance(data[field], list):
            raise PolicyValidationError(f"{field} must be an array")

    # null в необязательных полях равнозначен их отсутствию
    cleaned = {key: value for key, value in data.items() if value is not None}
    try:
        return DiscountPolicy.model_validate(cleaned)
    except PydanticValidationError as e:
        raise PolicyValidationError(_format_errors(e))


def parse_product(raw: Union[Mapping, Product]) -> Product:
    """Проверка записи товара: нужны sku и неотрицательная числовая цена."""
    if isinstance(raw, Product):
        return raw

    if not isinstance(raw, Mapping):
        raise InvalidInputError("Product must be an object")

    if raw.get("sku") is None or raw.get("price") is None:
        raise InvalidInputError("Product must have sku and price")

    try:
        return Product.model_validate(raw)
    except PydanticValidationError as e:
        raise InvalidInputError(f"Invalid product {raw.get('sku')!r}: {_format_errors(e)}")


def parse_catalog(raw: RawDocument) -> list[Product]:
    """Разбор документа каталога товаров."""
    try:
        data = _load_json(raw)
    except ValueError:
        raise InvalidInputError("Invalid JSON format")

    if not isinstance(data, list):
        raise InvalidInputError("Products must be an array")

    products: list[Product] = []
    seen: set[str] = set()
    for item in data:
        if not isinstance(item, Mapping) or any(
            _is_blank(item.get(field)) for field in REQUIRED_PRODUCT_FIELDS
        ):
            raise InvalidInputError("Each product must have id, sku, name, and price")

        price = item["price"]
        if isinstance(price, bool) or not isinstance(price, (int, float, Decimal)) or price < 0:
            raise InvalidInputError("Product price must be a positive number")

        product = parse_product(item)
        if product.sku in seen:
            raise InvalidInputError(f"Duplicate sku in catalog: {product.sku}")
        seen.add(product.sku)
        products.append(product)

    return products
