"""Денежные утилиты: округление до копеек и форматирование в BDT."""

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, getcontext, localcontext
from typing import Union

CURRENCY_SYMBOL = "৳"
CENT = Decimal("0.01")
MONEY_PRECISION = 60

Number = Union[int, float, Decimal]


def money_context():
    """Контекст Decimal с запасом точности для денежной арифметики."""
    context = getcontext().copy()
    context.prec = max(context.prec, MONEY_PRECISION)
    return localcontext(context)


def to_decimal(value: Number) -> Decimal:
    """Приведение числа к Decimal без артефактов двоичного float."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Number) -> Decimal:
    """Округление до 2 знаков: половина копейки округляется вверх.

    Совпадает с round(x * 100) / 100 для отрицательных значений тоже
    (-0.005 -> 0.00, а не -0.01).
    """
    value = to_decimal(value)
    with money_context() as context:
        # quantize требует точности не меньше числа цифр результата
        context.prec = max(context.prec, value.adjusted() + 4)
        scaled = value * 100 + Decimal("0.5")
        cents = scaled.to_integral_value(rounding=ROUND_FLOOR)
        return (cents / 100).quantize(CENT)


def format_number(value: Decimal) -> str:
    """Число без хвостовых нулей: 10.50 -> "10.5", 15.00 -> "15"."""
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_bdt(amount: object) -> str:
    """Форматирование суммы в таках для витрины: "৳ 1,234,567.891"."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        return f"{CURRENCY_SYMBOL} 0"

    value = to_decimal(amount)
    if not value.is_finite():
        return f"{CURRENCY_SYMBOL} 0"

    with money_context() as context:
        context.prec = max(context.prec, value.adjusted() + 4)
        value = value.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)

    integer, _, fraction = f"{value:,f}".partition(".")
    fraction = fraction.rstrip("0")

    text = f"{CURRENCY_SYMBOL} {integer}"
    if fraction:
        text += f".{fraction}"
    return text


def calculate_discount(original_price: Number, discounted_price: Number) -> Decimal:
    """Размер скидки в деньгах."""
    return to_decimal(original_price) - to_decimal(discounted_price)


def calculate_discount_percent(original_price: Number, discounted_price: Number) -> int:
    """Процент скидки для бейджа "N% OFF"."""
    original = to_decimal(original_price)
    if original == 0:
        return 0
    percent = calculate_discount(original, discounted_price) / original * 100
    return int((percent + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))
