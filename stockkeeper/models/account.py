"""
StockAccount model — per-product stock counter and thresholds.
"""

import logging

from django.db import models
from django.db.models import F, Q, Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger('stockkeeper')


class StockAccountQuerySet(models.QuerySet):
    """QuerySet helpers for StockAccount."""

    def for_product(self, product):
        return self.filter(product=product)

    def stockable(self):
        """Accounts of active, not soft-deleted products."""
        return self.filter(product__is_active=True, product__deleted_at__isnull=True)

    def alerting(self):
        """
        Accounts at or below any threshold.

        Queryset pre-filter only; classify() decides the label.
        """
        return self.filter(
            Q(current_stock__lte=0)
            | Q(current_stock__lte=F('reorder_point'))
            | Q(current_stock__lte=F('minimum_stock'))
        )


class StockAccount(models.Model):
    """
    Stock levels of one product.

    Rules:
    - current_stock is never negative (also a DB check constraint)
    - current_stock only changes through StockLedger.adjust(), which
      appends a StockMovement in the same transaction
    - thresholds only change through StockLedger.update_thresholds()

    recalculate() replays the movement deltas for audit/correction.
    """

    product = models.OneToOneField(
        'stockkeeper.Product',
        on_delete=models.CASCADE,
        related_name='stock_account',
        verbose_name=_('Product'),
    )

    current_stock = models.IntegerField(default=0, verbose_name=_('Current stock'))
    reserved_stock = models.PositiveIntegerField(default=0, verbose_name=_('Reserved stock'))

    # Thresholds (caller supplied, no ordering enforced unless STRICT_THRESHOLDS)
    minimum_stock = models.PositiveIntegerField(default=0, verbose_name=_('Minimum stock'))
    maximum_stock = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name=_('Maximum stock'),
    )
    reorder_point = models.PositiveIntegerField(default=0, verbose_name=_('Reorder point'))

    warehouse_location = models.CharField(
        max_length=50,
        default='MAIN',
        verbose_name=_('Warehouse location'),
    )
    last_stock_check_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Last stock change'),
        help_text=_('Set whenever an adjustment changes current stock.'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockAccountQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stock account')
        verbose_name_plural = _('Stock accounts')
        constraints = [
            models.CheckConstraint(
                condition=Q(current_stock__gte=0),
                name='stock_account_current_stock_non_negative',
            ),
        ]

    @property
    def available_stock(self) -> int:
        """On hand minus reserved."""
        return self.current_stock - self.reserved_stock

    @property
    def alert_type(self):
        """Current alert state (recomputed on every access)."""
        from stockkeeper.services.alerts import classify
        return classify(self)

    def replayed_stock(self) -> int:
        """Stock obtained by summing every movement delta of the product."""
        from stockkeeper.models.movement import StockMovement

        return StockMovement.objects.filter(product_id=self.product_id).aggregate(
            t=Coalesce(Sum('delta'), 0)
        )['t']

    def recalculate(self) -> int:
        """
        Rewrite current_stock from the movement ledger.

        Use for:
        - Integrity audit
        - Correction after detected inconsistency

        Returns:
            New calculated stock
        """
        total = self.replayed_stock()

        if total != self.current_stock:
            old = self.current_stock
            self.current_stock = total
            self.save(update_fields=['current_stock', 'updated_at'])

            logger.warning(
                "stock.recalculated",
                extra={
                    "account_id": self.pk,
                    "product_id": self.product_id,
                    "old": old,
                    "new": total,
                    "diff": total - old,
                },
            )

        return total

    def __str__(self) -> str:
        return f"{self.product}: {self.current_stock}"
