"""
Stock queries — read-only operations.

All methods are classmethods and use no locking.
"""

import math
from dataclasses import dataclass, field

from stockkeeper.conf import stockkeeper_settings
from stockkeeper.exceptions import StockError
from stockkeeper.models.account import StockAccount
from stockkeeper.models.catalog import Product
from stockkeeper.models.movement import StockMovement


@dataclass(frozen=True)
class Page:
    """One page of a newest-first listing."""

    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def _paginate(qs, page: int, page_size: int | None) -> Page:
    if page_size is None:
        page_size = stockkeeper_settings.DEFAULT_PAGE_SIZE
    if page < 1 or page_size < 1:
        raise StockError('INVALID_ARGUMENT', page=page, page_size=page_size)
    page_size = min(page_size, stockkeeper_settings.MAX_PAGE_SIZE)

    total = qs.count()
    offset = (page - 1) * page_size
    items = list(qs[offset:offset + page_size])
    return Page(items=items, total=total, page=page, page_size=page_size)


class StockQueries:
    """Read-only stock query methods."""

    @classmethod
    def account(cls, product) -> StockAccount | None:
        """The product's stock account, or None when it has none yet."""
        return StockAccount.objects.filter(product=product).select_related('product').first()

    @classmethod
    def movements(cls, product, page: int = 1, page_size: int | None = None) -> Page:
        """
        Movement history of one product, newest first.

        Raises:
            StockError('PRODUCT_NOT_FOUND'): Product does not exist
        """
        pk = product.pk if isinstance(product, Product) else product
        if not Product.objects.filter(pk=pk).exists():
            raise StockError('PRODUCT_NOT_FOUND', product_id=pk)

        qs = StockMovement.objects.filter(product_id=pk).select_related('actor').newest_first()
        return _paginate(qs, page, page_size)

    @classmethod
    def all_movements(cls, product=None, page: int = 1,
                      page_size: int | None = None) -> Page:
        """Movement history across non-deleted products, newest first."""
        qs = (
            StockMovement.objects.filter(product__deleted_at__isnull=True)
            .select_related('actor', 'product', 'product__category')
            .newest_first()
        )
        if product is not None:
            qs = qs.filter(product=product)
        return _paginate(qs, page, page_size)
