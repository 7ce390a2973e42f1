"""Конфигурация для тестов."""

import os
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

DATA_DIR = Path(__file__).resolve().parents[2] / "data"

# Устанавливаем тестовые переменные окружения
os.environ.setdefault("CATALOG_PATH", str(DATA_DIR / "products.json"))
os.environ.setdefault("DISCOUNT_POLICY_PATH", str(DATA_DIR / "discounts.json"))
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from pricing.adapters.repository_impl import (  # noqa: E402
    InMemoryCatalogRepository,
    InMemoryPolicyRepository,
)
from pricing.domain.models import (  # noqa: E402
    Coupon,
    DiscountPolicy,
    GlobalDiscount,
    PriceOverride,
    Product,
)
from pricing.services.services import PricingService  # noqa: E402


@pytest.fixture
def headphones():
    """Товар из примера: ULT44 за 1650."""
    return Product(sku="ULT44", price=Decimal("1650"), name="Ultra 44 Headphones")


@pytest.fixture
def keyboard():
    """Товар с переопределенной ценой."""
    return Product(sku="KBD-MX", price=Decimal("5400"), name="MX Keyboard")


@pytest.fixture
def cable():
    """Недорогой товар без скидок."""
    return Product(sku="CBL-USBC", price=Decimal("350"), name="USB-C Cable")


@pytest.fixture
def empty_policy():
    """Политика без скидок."""
    return DiscountPolicy(eligible_skus=[])


@pytest.fixture
def policy():
    """Политика с глобальной скидкой 10%, переопределением и купонами."""
    return DiscountPolicy(
        eligible_skus=["ULT44", "KBD-MX"],
        global_discount=GlobalDiscount(percent=Decimal("10")),
        overrides=[
            PriceOverride(sku="KBD-MX", target_price=Decimal("4999"), note="Launch week price")
        ],
        coupons=[
            Coupon(code="SAVE5", percent=Decimal("5")),
            Coupon(code="HALF", percent=Decimal("50")),
            Coupon(code="ZERO", percent=Decimal("0")),
        ],
    )


@pytest.fixture
def pricing_service(policy, headphones, keyboard, cable):
    """Сервис расчета цен на in-memory репозиториях."""
    catalog = InMemoryCatalogRepository([headphones, keyboard, cable])
    return PricingService(catalog, InMemoryPolicyRepository(policy))


@pytest.fixture
def client(pricing_service):
    """Тестовый клиент с подмененным сервисом расчета цен."""
    from main import app
    from pricing.entrypoints.api.dependencies import get_pricing_service

    app.dependency_overrides[get_pricing_service] = lambda: pricing_service
    yield TestClient(app)
    app.dependency_overrides.clear()
