"""Реализации репозиториев каталога и политики скидок."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from base.exceptions import ConfigurationError, ValidationError
from pricing.domain.models import DiscountPolicy, Product
from pricing.services.validation import parse_catalog, parse_policy

from .repositories import ICatalogRepository, IPolicyRepository

logger = logging.getLogger(__name__)


def _read_document(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Failed to read {path}: {e}")


class InMemoryCatalogRepository(ICatalogRepository):
    """In-memory каталог для тестов."""

    def __init__(self, products: Iterable[Product] = ()) -> None:
        """Инициализация репозитория."""
        self.products: dict[str, Product] = {p.sku: p for p in products}

    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Получение товара по SKU."""
        return self.products.get(sku)

    def list_products(self) -> list[Product]:
        """Получение всех товаров."""
        return list(self.products.values())


class InMemoryPolicyRepository(IPolicyRepository):
    """In-memory политика скидок для тестов."""

    def __init__(self, policy: Optional[DiscountPolicy] = None) -> None:
        """Инициализация репозитория."""
        self.policy = policy or DiscountPolicy()

    def get_policy(self) -> DiscountPolicy:
        """Получение текущей политики скидок."""
        return self.policy


class JsonFileCatalogRepository(ICatalogRepository):
    """Каталог товаров из JSON-файла (products.json)."""

    def __init__(self, path: str) -> None:
        """Инициализация репозитория."""
        self.path = Path(path)
        self._products: Optional[dict[str, Product]] = None

    def _load(self) -> dict[str, Product]:
        if self._products is None:
            try:
                products = parse_catalog(_read_document(self.path))
            except ValidationError as e:
                raise ConfigurationError(f"Invalid catalog in {self.path}: {e}")
            self._products = {p.sku: p for p in products}
            logger.info(f"Loaded {len(products)} products from {self.path}")
        return self._products

    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Получение товара по SKU."""
        return self._load().get(sku)

    def list_products(self) -> list[Product]:
        """Получение всех товаров."""
        return list(self._load().values())


class JsonFilePolicyRepository(IPolicyRepository):
    """Политика скидок из JSON-файла (discounts.json)."""

    def __init__(self, path: str) -> None:
        """Инициализация репозитория."""
        self.path = Path(path)
        self._policy: Optional[DiscountPolicy] = None

    def get_policy(self) -> DiscountPolicy:
        """Получение текущей политики скидок."""
        if self._policy is None:
            try:
                self._policy = parse_policy(_read_document(self.path))
            except ValidationError as e:
                raise ConfigurationError(f"Invalid discount policy in {self.path}: {e}")
            logger.info(
                f"Loaded discount policy from {self.path}: "
                f"{len(self._policy.eligible_skus)} eligible SKUs, "
                f"{len(self._policy.overrides)} overrides, "
                f"{len(self._policy.coupons)} coupons"
            )
        return self._policy
