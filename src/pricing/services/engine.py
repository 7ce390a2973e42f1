"""Движок скидок: расчет цены позиции и проверка купонов.

Уровни применяются строго по порядку, каждый к цене предыдущего:

1. переопределение цены для SKU (исключает уровень 2);
2. глобальная скидка для eligible SKU: процент, иначе фиксированная сумма;
3. купон - процент от уже сниженной цены.

Функции чистые: без I/O и без обращения к настройкам.
"""

import logging
from decimal import Decimal
from typing import Optional

from base.exceptions import InvalidInputError, InvalidQuantityError
from pricing.domain.models import (
    AppliedDiscount,
    CouponValidation,
    DiscountPolicy,
    DiscountType,
    PricingResult,
    Product,
)
from pricing.domain.money import CURRENCY_SYMBOL, format_number, money_context, round_money

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def _check_inputs(product: object, quantity: object, policy: object) -> None:
    if not isinstance(product, Product):
        raise InvalidInputError(
            f"product must be a Product, got {type(product).__name__}"
        )
    if not isinstance(policy, DiscountPolicy):
        raise InvalidInputError(
            f"policy must be a DiscountPolicy, got {type(policy).__name__}"
        )
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantityError(quantity)


def _apply_override(
    product: Product, policy: DiscountPolicy
) -> Optional[tuple[Decimal, AppliedDiscount]]:
    override = policy.find_override(product.sku)
    if override is None:
        return None

    note = override.note or "Override applied"
    return override.target_price, AppliedDiscount(
        type=DiscountType.OVERRIDE,
        amount=product.price - override.target_price,
        description=f"Special price: {note}",
    )


def _apply_global(
    product: Product, policy: DiscountPolicy
) -> Optional[tuple[Decimal, AppliedDiscount]]:
    if product.sku not in policy.eligible_skus:
        return None

    rule = policy.global_discount
    if rule is None:
        return None

    price = product.price
    if rule.percent is not None and rule.percent > 0:
        amount = price * rule.percent / HUNDRED
        return price - amount, AppliedDiscount(
            type=DiscountType.GLOBAL_PERCENT,
            amount=amount,
            description=f"{format_number(rule.percent)}% discount",
        )

    if rule.fixed is not None and rule.fixed > 0:
        # Цена не уходит ниже нуля, в скидку пишется фактически списанное
        return max(Decimal("0"), price - rule.fixed), AppliedDiscount(
            type=DiscountType.GLOBAL_FIXED,
            amount=min(rule.fixed, price),
            description=f"{CURRENCY_SYMBOL}{format_number(rule.fixed)} off",
        )

    return None


def _apply_coupon(
    unit_price: Decimal, policy: DiscountPolicy, coupon_code: Optional[str]
) -> Optional[tuple[Decimal, AppliedDiscount]]:
    if not coupon_code:
        return None

    coupon = policy.find_coupon(coupon_code)
    if coupon is None or coupon.percent <= 0:
        return None

    amount = unit_price * coupon.percent / HUNDRED
    return unit_price - amount, AppliedDiscount(
        type=DiscountType.COUPON,
        amount=amount,
        description=f"Coupon {coupon_code}: {format_number(coupon.percent)}% off",
    )


def compute_price(
    product: Product,
    quantity: int,
    policy: DiscountPolicy,
    coupon_code: Optional[str] = None,
) -> PricingResult:
    """Расчет цены позиции с учетом политики скидок и купона.

    Без подходящих скидок возвращает базовую цену и пустой список скидок.
    Несуществующий купон молча игнорируется, для сообщения пользователю
    нужно отдельно вызвать validate_coupon.
    """
    _check_inputs(product, quantity, policy)

    original_price = product.price
    unit_price = original_price
    applied: list[AppliedDiscount] = []

    with money_context():
        base_tier = _apply_override(product, policy) or _apply_global(product, policy)
        if base_tier is not None:
            unit_price, discount = base_tier
            applied.append(discount)

        coupon_tier = _apply_coupon(unit_price, policy, coupon_code)
        if coupon_tier is not None:
            unit_price, discount = coupon_tier
            applied.append(discount)

        line_subtotal = round_money(unit_price * quantity)
        original_subtotal = original_price * quantity
        total_savings = round_money(original_subtotal - line_subtotal)

    logger.debug(
        f"Priced {product.sku} x{quantity}: {original_price} -> {unit_price} "
        f"({', '.join(d.type.value for d in applied) or 'no discounts'})"
    )

    return PricingResult(
        unit_price=round_money(unit_price),
        line_subtotal=line_subtotal,
        original_subtotal=original_subtotal,
        total_savings=total_savings,
        applied_discounts=applied,
        original_price=original_price,
        quantity=quantity,
    )


def validate_coupon(code: Optional[str], policy: DiscountPolicy) -> CouponValidation:
    """Проверка кода купона по политике скидок (только поиск).

    Политика без ключа coupons отклоняет любой код как некорректный,
    пустой список купонов дает "не найден".
    """
    if not code or "coupons" not in policy.model_fields_set:
        return CouponValidation(valid=False, message="Invalid coupon code")

    coupon = policy.find_coupon(code)
    if coupon is None:
        return CouponValidation(valid=False, message="Coupon code not found")

    return CouponValidation(
        valid=True,
        coupon=coupon,
        message=f"Coupon applied: {format_number(coupon.percent)}% off",
    )
