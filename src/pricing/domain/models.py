"""Доменные модели каталога, политики скидок и результатов расчета цен."""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from pricing.domain.money import to_decimal


def _coerce_number(value: object) -> Decimal:
    # JSON-числа допустимы, строки и bool - нет
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError("must be a number")
    number = to_decimal(value)
    if not number.is_finite():
        raise ValueError("must be a finite number")
    return number


# В JSON суммы уходят числами, как в документах витрины
JsonNumber = PlainSerializer(float, return_type=float, when_used="json")

Money = Annotated[Decimal, JsonNumber]
NonNegativeAmount = Annotated[Decimal, Field(ge=0), BeforeValidator(_coerce_number), JsonNumber]
Percent = Annotated[Decimal, Field(ge=0, le=100), BeforeValidator(_coerce_number), JsonNumber]


class CamelModel(BaseModel):
    """Базовая модель с camelCase-алиасами, как в JSON-документах витрины."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Product(CamelModel):
    """Товар каталога. Для расчета цены нужны только sku и price."""

    sku: str = Field(min_length=1)
    price: NonNegativeAmount
    id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = None
    images: list[str] = Field(default_factory=list)


class GlobalDiscount(CamelModel):
    """Глобальная скидка для eligible SKU: процент имеет приоритет над суммой."""

    percent: Optional[Percent] = None
    fixed: Optional[NonNegativeAmount] = None


class PriceOverride(CamelModel):
    """Фиксированная специальная цена для конкретного SKU."""

    sku: str
    target_price: NonNegativeAmount
    note: Optional[str] = None


class Coupon(CamelModel):
    """Купон: процентная скидка по коду (с учетом регистра)."""

    code: str = Field(min_length=1)
    percent: Percent


class DiscountPolicy(CamelModel):
    """Политика скидок. Создается через parse_policy на границе конфигурации."""

    eligible_skus: list[str] = Field(default_factory=list)
    global_discount: Optional[GlobalDiscount] = Field(default=None, alias="global")
    overrides: list[PriceOverride] = Field(default_factory=list)
    coupons: list[Coupon] = Field(default_factory=list)

    def find_override(self, sku: str) -> Optional[PriceOverride]:
        """Первое переопределение цены для SKU."""
        return next((o for o in self.overrides if o.sku == sku), None)

    def find_coupon(self, code: str) -> Optional[Coupon]:
        """Купон с точным совпадением кода."""
        return next((c for c in self.coupons if c.code == code), None)


class DiscountType(str, Enum):
    """Типы примененных скидок в порядке уровней."""

    OVERRIDE = "override"
    GLOBAL_PERCENT = "global_percent"
    GLOBAL_FIXED = "global_fixed"
    COUPON = "coupon"


class AppliedDiscount(CamelModel):
    """Одна сработавшая скидка. description - только для отображения."""

    type: DiscountType
    amount: Money
    description: str

    @property
    def is_markup(self) -> bool:
        """Специальная цена выше исходной."""
        return self.amount < 0


class PricingResult(CamelModel):
    """Результат расчета цены одной позиции."""

    unit_price: Money
    line_subtotal: Money
    original_subtotal: Money
    total_savings: Money
    applied_discounts: list[AppliedDiscount] = Field(default_factory=list)
    original_price: Money
    quantity: int

    @property
    def has_discount(self) -> bool:
        """Есть ли что показать зачеркнутой ценой."""
        return self.unit_price < self.original_price


class CouponValidation(CamelModel):
    """Результат проверки купона."""

    valid: bool
    coupon: Optional[Coupon] = None
    message: str


class CartLine(CamelModel):
    """Позиция корзины из хранилища сессии."""

    sku: str
    quantity: int


class CartLineResult(CamelModel):
    """Рассчитанная позиция корзины."""

    sku: str
    name: Optional[str] = None
    pricing: PricingResult


class CartTotals(CamelModel):
    """Итоги корзины: суммы уже округленных построчных значений."""

    lines: list[CartLineResult] = Field(default_factory=list)
    subtotal: Money
    original_subtotal: Money
    total_discount: Money
    total: Money
    item_count: int
    coupon_code: Optional[str] = None
    missing_skus: list[str] = Field(default_factory=list)


class QuoteRequest(CamelModel):
    """Запрос на расчет цены товара из каталога."""

    sku: str
    quantity: int = 1
    coupon_code: Optional[str] = None


class ComputeRequest(CamelModel):
    """Запрос на расчет цены для переданного товара."""

    product: Product
    quantity: int = 1
    coupon_code: Optional[str] = None


class CouponRequest(CamelModel):
    """Запрос на проверку купона."""

    code: str = ""


class CartRequest(CamelModel):
    """Запрос на расчет итогов корзины."""

    items: list[CartLine] = Field(default_factory=list)
    coupon_code: Optional[str] = None
