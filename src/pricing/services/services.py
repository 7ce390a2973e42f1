"""Сервисы расчета цен для страниц товара, корзины и оформления заказа."""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from base.exceptions import ProductNotFoundError
from pricing.adapters.repositories import ICatalogRepository, IPolicyRepository
from pricing.domain.models import (
    CartLine,
    CartLineResult,
    CartTotals,
    CouponValidation,
    DiscountPolicy,
    PricingResult,
    Product,
)
from pricing.domain.money import money_context
from pricing.services.engine import compute_price, validate_coupon

logger = logging.getLogger(__name__)


class PricingService:
    """Сервис расчета цен поверх каталога и политики скидок."""

    def __init__(
        self,
        catalog: ICatalogRepository,
        policies: IPolicyRepository,
    ) -> None:
        """Инициализация сервиса."""
        self._catalog = catalog
        self._policies = policies

    def get_policy(self) -> DiscountPolicy:
        """Получение текущей политики скидок."""
        return self._policies.get_policy()

    def get_product(self, sku: str) -> Product:
        """Получение товара из каталога."""
        product = self._catalog.get_by_sku(sku)
        if product is None:
            raise ProductNotFoundError(f"Product with SKU {sku} not found")
        return product

    def price_product(
        self,
        product: Product,
        quantity: int = 1,
        coupon_code: Optional[str] = None,
    ) -> PricingResult:
        """Расчет цены переданного товара по текущей политике."""
        return compute_price(product, quantity, self.get_policy(), coupon_code)

    def quote(
        self,
        sku: str,
        quantity: int = 1,
        coupon_code: Optional[str] = None,
    ) -> PricingResult:
        """Расчет цены товара из каталога."""
        return self.price_product(self.get_product(sku), quantity, coupon_code)

    def validate_coupon(self, code: Optional[str]) -> CouponValidation:
        """Проверка купона по текущей политике."""
        return validate_coupon(code, self.get_policy())

    def apply_coupon(self, code: Optional[str]) -> CouponValidation:
        """Проверка купона перед сохранением его как активного в корзине."""
        code = (code or "").strip()
        if not code:
            return CouponValidation(valid=False, message="Please enter a coupon code")

        result = self.validate_coupon(code)
        if not result.valid:
            logger.info(f"Coupon {code!r} rejected: {result.message}")
        return result

    def price_cart(
        self,
        lines: Iterable[CartLine],
        coupon_code: Optional[str] = None,
    ) -> CartTotals:
        """Расчет итогов корзины.

        Каждая позиция считается отдельно, итоги складываются из уже
        округленных построчных сумм. Позиции, которых нет в каталоге,
        пропускаются.
        """
        policy = self.get_policy()
        applied_code = coupon_code if validate_coupon(coupon_code, policy).valid else None

        results: list[CartLineResult] = []
        missing: list[str] = []
        subtotal = Decimal("0.00")
        original_subtotal = Decimal("0")
        total_discount = Decimal("0.00")
        item_count = 0

        for line in lines:
            product = self._catalog.get_by_sku(line.sku)
            if product is None:
                logger.warning(f"Cart line {line.sku} skipped: not in catalog")
                missing.append(line.sku)
                continue

            pricing = compute_price(product, line.quantity, policy, coupon_code)
            results.append(
                CartLineResult(sku=line.sku, name=product.name, pricing=pricing)
            )
            with money_context():
                subtotal += pricing.line_subtotal
                original_subtotal += pricing.original_subtotal
                total_discount += pricing.total_savings
            item_count += line.quantity

        return CartTotals(
            lines=results,
            subtotal=subtotal,
            original_subtotal=original_subtotal,
            total_discount=total_discount,
            total=subtotal,
            item_count=item_count,
            coupon_code=applied_code,
            missing_skus=missing,
        )
