"""
Tests for low-stock alert classification and inventory stats.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.utils import timezone

from stockkeeper.models import AlertType, MovementType, Product
from stockkeeper.service import Inventory
from stockkeeper.services.alerts import classify


def account(current_stock, reorder_point=0, minimum_stock=0):
    return SimpleNamespace(
        current_stock=current_stock,
        reorder_point=reorder_point,
        minimum_stock=minimum_stock,
    )


class TestClassify:
    """Tests for classify() — pure, no database."""

    @pytest.mark.parametrize('stock, reorder, minimum, expected', [
        (0, 0, 0, AlertType.OUT_OF_STOCK),
        (0, 10, 20, AlertType.OUT_OF_STOCK),
        (5, 5, 10, AlertType.REORDER_POINT),
        (8, 10, 5, AlertType.REORDER_POINT),
        (8, 5, 10, AlertType.LOW_STOCK),
        (10, 5, 10, AlertType.LOW_STOCK),
        (11, 5, 10, None),
        (1, 0, 0, None),
    ])
    def test_precedence(self, stock, reorder, minimum, expected):
        """First matching rule wins."""
        assert classify(account(stock, reorder, minimum)) == expected

    def test_never_low_stock_at_reorder_point(self):
        """At or below the reorder point the label is never LOW_STOCK."""
        for stock in range(1, 30):
            for reorder in range(0, 30, 3):
                for minimum in range(0, 30, 4):
                    alert = classify(account(stock, reorder, minimum))
                    if stock <= reorder:
                        assert alert == AlertType.REORDER_POINT

    def test_never_reorder_when_empty(self):
        """Empty stock is always OUT_OF_STOCK."""
        for reorder in range(0, 20):
            assert classify(account(0, reorder, reorder * 2)) == AlertType.OUT_OF_STOCK

    def test_model_property(self):
        """StockAccount.alert_type delegates to classify()."""
        from stockkeeper.models import StockAccount

        assert StockAccount(current_stock=3, reorder_point=5).alert_type == AlertType.REORDER_POINT
        assert StockAccount(current_stock=30, reorder_point=5).alert_type is None


@pytest.mark.django_db
class TestLowStock:
    """Tests for Inventory.low_stock()."""

    def test_lists_alerting_products_sorted_by_stock(self, product, other_product, category):
        """Alerting products come back ascending by stock."""
        healthy = Product.objects.create(code='BEV-003', name='Iced Tea', category=category)

        Inventory.adjust(product, 8, MovementType.IN)
        Inventory.update_thresholds(product, minimum_stock=10, reorder_point=5)

        Inventory.adjust(other_product, 3, MovementType.IN)
        Inventory.update_thresholds(other_product, minimum_stock=10, reorder_point=5)

        Inventory.adjust(healthy, 50, MovementType.IN)
        Inventory.update_thresholds(healthy, minimum_stock=10, reorder_point=5)

        items = Inventory.low_stock()

        assert [item.product.code for item in items] == ['BEV-002', 'BEV-001']
        assert items[0].alert_type == AlertType.REORDER_POINT
        assert items[1].alert_type == AlertType.LOW_STOCK

    def test_includes_out_of_stock(self, product):
        """An emptied product is listed as OUT_OF_STOCK."""
        Inventory.adjust(product, 2, MovementType.IN)
        Inventory.adjust(product, 2, MovementType.OUT)

        items = Inventory.low_stock()

        assert len(items) == 1
        assert items[0].alert_type == AlertType.OUT_OF_STOCK

    def test_excludes_inactive_and_deleted(self, product, other_product):
        """Only stockable products are listed."""
        Inventory.open_account(product)
        Inventory.open_account(other_product)

        Product.objects.filter(pk=product.pk).update(is_active=False)
        Product.objects.filter(pk=other_product.pk).update(deleted_at=timezone.now())

        assert Inventory.low_stock() == []

    def test_restrict_to_products(self, product, other_product):
        """The products argument narrows the listing."""
        Inventory.open_account(product)
        Inventory.open_account(other_product)

        items = Inventory.low_stock(products=[other_product])

        assert [item.product for item in items] == [other_product]


@pytest.mark.django_db
class TestStats:
    """Tests for Inventory.stats()."""

    def test_empty_catalog(self):
        """No products means all zeros."""
        stats = Inventory.stats()

        assert stats.total_products == 0
        assert stats.alerts_count == 0
        assert stats.total_inventory_value == Decimal('0')

    def test_counts_and_value(self, product, other_product, inactive_product, category):
        """Counts alerts by family and values stock at cost."""
        no_account = Product.objects.create(code='BEV-004', name='Lemonade', category=category)

        Inventory.adjust(product, 10, MovementType.IN)
        Inventory.update_thresholds(product, minimum_stock=20)

        Inventory.open_account(other_product)

        stats = Inventory.stats()

        assert no_account.is_stockable
        assert stats.total_products == 3
        assert stats.low_stock_count == 1
        assert stats.out_of_stock_count == 1
        assert stats.normal_stock_count == 1
        # 10 * 1.20
        assert stats.total_inventory_value == Decimal('12.00')
