"""Unit тесты сервиса расчета цен и репозиториев."""

import json
import logging
from decimal import Decimal

import pytest

from base.exceptions import ConfigurationError, InvalidQuantityError, ProductNotFoundError
from pricing.adapters.repository_impl import (
    InMemoryCatalogRepository,
    InMemoryPolicyRepository,
    JsonFileCatalogRepository,
    JsonFilePolicyRepository,
)
from pricing.domain.models import CartLine, Coupon, DiscountPolicy, DiscountType, Product
from pricing.services.services import PricingService


class TestPricingService:
    """Расчет цен товаров каталога."""

    def test_quote_uses_catalog_and_policy(self, pricing_service):
        """Тест расчета цены по SKU."""
        result = pricing_service.quote("ULT44", 2, "SAVE5")

        assert result.unit_price == Decimal("1410.75")
        assert result.line_subtotal == Decimal("2821.50")

    def test_quote_unknown_sku(self, pricing_service):
        """Тест расчета для отсутствующего товара."""
        with pytest.raises(ProductNotFoundError) as excinfo:
            pricing_service.quote("NOPE", 1)
        assert "NOPE" in str(excinfo.value)

    def test_quote_invalid_quantity(self, pricing_service):
        """Тест отказа при нулевом количестве."""
        with pytest.raises(InvalidQuantityError):
            pricing_service.quote("ULT44", 0)

    def test_price_product(self, pricing_service, keyboard):
        """Тест расчета переданного товара."""
        result = pricing_service.price_product(keyboard)

        assert result.applied_discounts[0].type == DiscountType.OVERRIDE

    def test_get_policy(self, pricing_service, policy):
        """Тест получения текущей политики."""
        assert pricing_service.get_policy() is policy


class TestCouponFlow:
    """Проверка купона перед сохранением в корзине."""

    def test_apply_valid_coupon(self, pricing_service):
        """Тест применения существующего купона."""
        result = pricing_service.apply_coupon("  SAVE5 ")

        assert result.valid is True
        assert result.coupon.code == "SAVE5"
        assert result.message == "Coupon applied: 5% off"

    @pytest.mark.parametrize("code", ["", "   ", None])
    def test_apply_blank_coupon(self, pricing_service, code):
        """Тест пустого ввода."""
        result = pricing_service.apply_coupon(code)

        assert result.valid is False
        assert result.message == "Please enter a coupon code"

    def test_apply_unknown_coupon(self, pricing_service):
        """Тест неизвестного купона."""
        result = pricing_service.apply_coupon("BADCODE")

        assert result.valid is False
        assert result.message == "Coupon code not found"

    def test_validate_coupon_does_not_touch_catalog(self, policy):
        """Тест проверки купона без обращения к каталогу."""
        catalog = InMemoryCatalogRepository()
        service = PricingService(catalog, InMemoryPolicyRepository(policy))

        assert service.validate_coupon("BADCODE").valid is False
        assert catalog.list_products() == []


class TestPriceCart:
    """Итоги корзины."""

    def test_cart_totals_sum_rounded_lines(self, pricing_service):
        """Тест суммирования построчных значений."""
        lines = [
            CartLine(sku="ULT44", quantity=2),
            CartLine(sku="KBD-MX", quantity=1),
            CartLine(sku="CBL-USBC", quantity=3),
        ]

        totals = pricing_service.price_cart(lines, "SAVE5")

        # 2821.50 + 4749.05 + 997.50
        assert totals.subtotal == Decimal("8568.05")
        assert totals.total == totals.subtotal
        assert totals.original_subtotal == Decimal("9750")
        assert totals.total_discount == Decimal("1181.95")
        assert totals.item_count == 6
        assert totals.coupon_code == "SAVE5"
        assert [line.sku for line in totals.lines] == ["ULT44", "KBD-MX", "CBL-USBC"]
        assert totals.lines[0].name == "Ultra 44 Headphones"

    def test_cart_rounds_per_line(self):
        """Тест округления по строкам, а не итоговой суммы."""
        products = [
            Product(sku="A", price=Decimal("0.01")),
            Product(sku="B", price=Decimal("0.01")),
        ]
        policy = DiscountPolicy(coupons=[Coupon(code="HALF", percent=Decimal("50"))])
        service = PricingService(
            InMemoryCatalogRepository(products), InMemoryPolicyRepository(policy)
        )

        totals = service.price_cart(
            [CartLine(sku="A", quantity=1), CartLine(sku="B", quantity=1)], "HALF"
        )

        # 0.005 -> 0.01 на строку, сумма 0.02 (а не round(0.01) = 0.01)
        assert totals.subtotal == Decimal("0.02")

    def test_cart_order_does_not_change_totals(self, pricing_service):
        """Тест независимости итогов от порядка позиций."""
        lines = [CartLine(sku="ULT44", quantity=2), CartLine(sku="CBL-USBC", quantity=1)]

        forward = pricing_service.price_cart(lines, "SAVE5")
        backward = pricing_service.price_cart(list(reversed(lines)), "SAVE5")

        assert forward.subtotal == backward.subtotal
        assert forward.total_discount == backward.total_discount

    def test_cart_drops_unknown_coupon_code(self, pricing_service):
        """Тест неизвестного купона: в итогах кода нет, цены без купона."""
        totals = pricing_service.price_cart([CartLine(sku="ULT44", quantity=2)], "BADCODE")

        assert totals.coupon_code is None
        assert totals.subtotal == Decimal("2970.00")

    def test_cart_very_large_totals(self):
        """Тест сумм корзины за пределами 28 значащих цифр."""
        products = [
            Product(sku="A", price=Decimal("1e24")),
            Product(sku="B", price=Decimal("0.01")),
        ]
        service = PricingService(
            InMemoryCatalogRepository(products), InMemoryPolicyRepository(DiscountPolicy())
        )

        totals = service.price_cart(
            [CartLine(sku="A", quantity=10000), CartLine(sku="B", quantity=1)]
        )

        assert totals.subtotal == Decimal("10000000000000000000000000000.01")

    def test_cart_skips_unknown_sku(self, pricing_service, caplog):
        """Тест пропуска позиции, которой нет в каталоге."""
        lines = [CartLine(sku="GONE", quantity=1), CartLine(sku="CBL-USBC", quantity=1)]

        with caplog.at_level(logging.WARNING, logger="pricing.services.services"):
            totals = pricing_service.price_cart(lines)

        assert totals.missing_skus == ["GONE"]
        assert totals.subtotal == Decimal("350.00")
        assert totals.item_count == 1
        assert "GONE" in caplog.text

    def test_empty_cart(self, pricing_service):
        """Тест пустой корзины."""
        totals = pricing_service.price_cart([])

        assert totals.lines == []
        assert totals.subtotal == Decimal("0")
        assert totals.item_count == 0
        assert totals.coupon_code is None


class TestJsonFileRepositories:
    """Репозитории на JSON-файлах."""

    def test_load_catalog_and_policy(self, tmp_path):
        """Тест загрузки каталога и политики из файлов."""
        catalog_file = tmp_path / "products.json"
        catalog_file.write_text(
            json.dumps([{"id": 1, "sku": "A", "name": "Alpha", "price": 100}]),
            encoding="utf-8",
        )
        policy_file = tmp_path / "discounts.json"
        policy_file.write_text(
            json.dumps({"eligibleSkus": ["A"], "global": {"fixed": 30}}),
            encoding="utf-8",
        )

        service = PricingService(
            JsonFileCatalogRepository(str(catalog_file)),
            JsonFilePolicyRepository(str(policy_file)),
        )
        result = service.quote("A", 1)

        assert result.unit_price == Decimal("70.00")
        assert len(service._catalog.list_products()) == 1

    def test_policy_is_cached(self, tmp_path):
        """Тест однократного чтения файла политики."""
        policy_file = tmp_path / "discounts.json"
        policy_file.write_text('{"eligibleSkus": []}', encoding="utf-8")
        repository = JsonFilePolicyRepository(str(policy_file))

        first = repository.get_policy()
        policy_file.write_text("broken", encoding="utf-8")

        assert repository.get_policy() is first

    def test_missing_file(self, tmp_path):
        """Тест отсутствующего файла."""
        repository = JsonFileCatalogRepository(str(tmp_path / "missing.json"))

        with pytest.raises(ConfigurationError):
            repository.get_by_sku("A")

    def test_invalid_policy_file(self, tmp_path):
        """Тест некорректного документа политики в файле."""
        policy_file = tmp_path / "discounts.json"
        policy_file.write_text('{"eligibleSkus": "A"}', encoding="utf-8")

        with pytest.raises(ConfigurationError) as excinfo:
            JsonFilePolicyRepository(str(policy_file)).get_policy()
        assert "eligibleSkus must be an array" in str(excinfo.value)

    def test_invalid_catalog_file(self, tmp_path):
        """Тест некорректного каталога в файле."""
        catalog_file = tmp_path / "products.json"
        catalog_file.write_text('{"sku": "A"}', encoding="utf-8")

        with pytest.raises(ConfigurationError) as excinfo:
            JsonFileCatalogRepository(str(catalog_file)).list_products()
        assert "Products must be an array" in str(excinfo.value)

    def test_bundled_data_files_are_valid(self):
        """Тест поставляемых файлов data/."""
        from base.config import get_catalog_path, get_discount_policy_path

        catalog = JsonFileCatalogRepository(get_catalog_path())
        policy = JsonFilePolicyRepository(get_discount_policy_path()).get_policy()

        assert catalog.get_by_sku("ULT44") is not None
        assert "ULT44" in policy.eligible_skus
