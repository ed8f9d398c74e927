"""
Stock alerts — classify accounts against their thresholds.

Usage:
    from stockkeeper.services.alerts import classify

    classify(account)             # AlertType.REORDER_POINT, or None
    StockAlerts.low_stock()       # [LowStockItem(product, account, alert_type), ...]

Alert states are never stored: stock and thresholds change independently,
so the label is recomputed on every read.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from stockkeeper.models.account import StockAccount
from stockkeeper.models.catalog import Product
from stockkeeper.models.enums import AlertType

logger = logging.getLogger('stockkeeper')


def classify(account) -> AlertType | None:
    """
    Alert state of a stock snapshot.

    First match wins:
        1. current_stock <= 0              → OUT_OF_STOCK
        2. current_stock <= reorder_point  → REORDER_POINT
        3. current_stock <= minimum_stock  → LOW_STOCK
        4. otherwise                       → None

    Args:
        account: Anything with current_stock, reorder_point, minimum_stock
    """
    stock = account.current_stock
    if stock <= 0:
        return AlertType.OUT_OF_STOCK
    if stock <= account.reorder_point:
        return AlertType.REORDER_POINT
    if stock <= account.minimum_stock:
        return AlertType.LOW_STOCK
    return None


@dataclass(frozen=True)
class LowStockItem:
    """One row of the low-stock listing."""

    product: Product
    account: StockAccount
    alert_type: AlertType


@dataclass(frozen=True)
class InventoryStats:
    """Catalog-wide stock health summary."""

    total_products: int
    low_stock_count: int
    out_of_stock_count: int
    total_inventory_value: Decimal

    @property
    def normal_stock_count(self) -> int:
        return self.total_products - self.low_stock_count - self.out_of_stock_count

    @property
    def alerts_count(self) -> int:
        return self.low_stock_count + self.out_of_stock_count


class StockAlerts:
    """Read-only alert queries."""

    @classmethod
    def classify(cls, account) -> AlertType | None:
        return classify(account)

    @classmethod
    def low_stock(cls, products=None) -> list[LowStockItem]:
        """
        Stockable products currently in an alert state.

        Sorted ascending by current stock (ties by product code).
        Products without an account are not listed.

        Args:
            products: Optional iterable/queryset restricting the products
        """
        qs = (
            StockAccount.objects.stockable()
            .alerting()
            .select_related('product', 'product__category')
            .order_by('current_stock', 'product__code')
        )
        if products is not None:
            qs = qs.filter(product__in=products)

        items = []
        for account in qs:
            alert = classify(account)
            if alert is not None:
                items.append(LowStockItem(product=account.product, account=account, alert_type=alert))

        logger.debug("stock.alerts.listed", extra={"count": len(items)})
        return items

    @classmethod
    def stats(cls) -> InventoryStats:
        """
        Stock health over stockable products.

        Products without an account count as normal stock. Inventory value
        is the sum of cost_price * current_stock where cost_price is set.
        """
        total_products = Product.objects.stockable().count()

        low = 0
        out = 0
        value = Decimal('0')
        rows = StockAccount.objects.stockable().values_list(
            'current_stock', 'reorder_point', 'minimum_stock', 'product__cost_price',
        )
        for current_stock, reorder_point, minimum_stock, cost_price in rows:
            alert = classify(_Snapshot(current_stock, reorder_point, minimum_stock))
            if alert == AlertType.OUT_OF_STOCK:
                out += 1
            elif alert is not None:
                low += 1
            if cost_price is not None:
                value += cost_price * current_stock

        return InventoryStats(
            total_products=total_products,
            low_stock_count=low,
            out_of_stock_count=out,
            total_inventory_value=value,
        )


@dataclass(frozen=True)
class _Snapshot:
    current_stock: int
    reorder_point: int
    minimum_stock: int
