"""
StockMovement model — Immutable ledger of stock changes.
"""

from django.conf import settings
from django.db import models, transaction
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockkeeper.models.enums import MovementType, ReferenceType


IMMUTABLE_MESSAGE = (
    "Stock movements are immutable. "
    "To correct one, record a new ADJUST movement."
)


class StockMovementQuerySet(models.QuerySet):
    """QuerySet that refuses bulk edits of the ledger."""

    def update(self, **kwargs):
        raise ValueError(IMMUTABLE_MESSAGE)

    def delete(self):
        raise ValueError(IMMUTABLE_MESSAGE)

    def for_product(self, product):
        return self.filter(product=product)

    def newest_first(self):
        return self.order_by('-created_at', '-id')


class StockMovement(models.Model):
    """
    Immutable record of a stock change.

    Rules:
    - NEVER update() or delete()
    - quantity is the magnitude, delta the signed effect on current_stock
    - Updates StockAccount.current_stock atomically on save()

    This is the ONLY model that changes current_stock.
    """

    product = models.ForeignKey(
        'stockkeeper.Product',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('Product'),
    )
    movement_type = models.CharField(
        max_length=10,
        choices=MovementType.choices,
        verbose_name=_('Movement type'),
    )
    quantity = models.PositiveIntegerField(
        verbose_name=_('Quantity'),
        help_text=_('Magnitude; the direction comes from the movement type.'),
    )
    delta = models.IntegerField(
        verbose_name=_('Delta'),
        help_text=_('Positive = entry, negative = exit'),
    )
    unit_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Unit cost'),
    )

    # External reference (order, purchase, etc)
    reference_type = models.CharField(
        max_length=20,
        choices=ReferenceType.choices,
        default=ReferenceType.ADJUSTMENT,
        verbose_name=_('Reference type'),
    )
    reference_id = models.CharField(max_length=64, blank=True, default='', verbose_name=_('Reference ID'))
    notes = models.TextField(blank=True, default='', verbose_name=_('Notes'))

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Actor'),
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Created at'))

    objects = StockMovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stock movement')
        verbose_name_plural = _('Stock movements')
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['product', 'created_at'], name='stock_movement_product_created'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name='stock_movement_quantity_positive',
            ),
        ]

    def save(self, *args, **kwargs):
        """Save movement and update the account counter atomically."""
        if self.pk:
            raise ValueError(IMMUTABLE_MESSAGE)

        if not self.delta or abs(self.delta) != self.quantity:
            raise ValueError("Movement quantity must equal |delta| and be non-zero")

        with transaction.atomic():
            super().save(*args, **kwargs)

            # Import here to avoid circular import
            from stockkeeper.models.account import StockAccount

            # Update counter using F() for atomicity
            updated = StockAccount.objects.filter(product_id=self.product_id).update(
                current_stock=F('current_stock') + self.delta,
                last_stock_check_at=self.created_at,
                updated_at=timezone.now(),
            )
            if not updated:
                raise ValueError(f"No stock account for product {self.product_id}")

    def delete(self, *args, **kwargs):
        """Prevent deletion — movements are immutable."""
        raise ValueError(IMMUTABLE_MESSAGE)

    def __str__(self) -> str:
        sign = '+' if self.delta > 0 else ''
        return f"{sign}{self.delta} {self.movement_type} | {self.reference_type}"
