"""Интерфейсы репозиториев каталога и политики скидок."""

from abc import ABC, abstractmethod
from typing import Optional

from pricing.domain.models import DiscountPolicy, Product


class ICatalogRepository(ABC):
    """Интерфейс каталога товаров (только чтение)."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Получение товара по SKU."""
        raise NotImplementedError

    @abstractmethod
    def list_products(self) -> list[Product]:
        """Получение всех товаров."""
        raise NotImplementedError


class IPolicyRepository(ABC):
    """Интерфейс хранилища политики скидок."""

    @abstractmethod
    def get_policy(self) -> DiscountPolicy:
        """Получение текущей политики скидок."""
        raise NotImplementedError
