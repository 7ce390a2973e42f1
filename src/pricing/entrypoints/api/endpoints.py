"""API эндпоинты расчета цен, купонов и итогов корзины."""

import logging

from fastapi import APIRouter, HTTPException, Request

from base.exceptions import ConfigurationError, InvalidInputError, ProductNotFoundError
from pricing.domain.models import (
    CartRequest,
    CartTotals,
    ComputeRequest,
    CouponRequest,
    CouponValidation,
    DiscountPolicy,
    PricingResult,
    QuoteRequest,
)
from pricing.entrypoints.api.dependencies import PricingServiceDependency
from pricing.services.validation import parse_policy

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/policy", response_model=DiscountPolicy)
async def get_policy(service: PricingServiceDependency) -> DiscountPolicy:
    """Текущая политика скидок."""
    return service.get_policy()


@router.post("/policy/validate", response_model=DiscountPolicy)
async def validate_policy(request: Request) -> DiscountPolicy:
    """Проверка документа политики скидок перед сохранением в админке."""
    return parse_policy(await request.body())


@router.post("/quote", response_model=PricingResult)
async def quote(
    payload: QuoteRequest,
    service: PricingServiceDependency,
) -> PricingResult:
    """Расчет цены товара из каталога."""
    try:
        return service.quote(payload.sku, payload.quantity, payload.coupon_code)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConfigurationError as e:
        logger.error(f"Error quoting {payload.sku}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/compute", response_model=PricingResult)
async def compute(
    payload: ComputeRequest,
    service: PricingServiceDependency,
) -> PricingResult:
    """Расчет цены для товара, переданного в запросе."""
    try:
        return service.price_product(
            payload.product, payload.quantity, payload.coupon_code
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/coupons/validate", response_model=CouponValidation)
async def validate_coupon(
    payload: CouponRequest,
    service: PricingServiceDependency,
) -> CouponValidation:
    """Проверка купона. Неизвестный код - это valid=false, а не ошибка."""
    return service.apply_coupon(payload.code)


@router.post("/cart", response_model=CartTotals)
async def price_cart(
    payload: CartRequest,
    service: PricingServiceDependency,
) -> CartTotals:
    """Итоги корзины с построчным расчетом."""
    return service.price_cart(payload.items, payload.coupon_code)
