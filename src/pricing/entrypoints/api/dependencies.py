"""Зависимости для API расчета цен."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from base.config import get_catalog_path, get_discount_policy_path
from pricing.adapters.repository_impl import (
    JsonFileCatalogRepository,
    JsonFilePolicyRepository,
)
from pricing.services.services import PricingService


@lru_cache
def get_catalog_repository() -> JsonFileCatalogRepository:
    """Получение репозитория каталога (один на процесс)."""
    return JsonFileCatalogRepository(get_catalog_path())


@lru_cache
def get_policy_repository() -> JsonFilePolicyRepository:
    """Получение репозитория политики скидок (один на процесс)."""
    return JsonFilePolicyRepository(get_discount_policy_path())


async def get_pricing_service() -> PricingService:
    """Получение сервиса расчета цен."""
    return PricingService(get_catalog_repository(), get_policy_repository())


PricingServiceDependency = Annotated[PricingService, Depends(get_pricing_service)]
