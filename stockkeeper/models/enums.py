"""
Enums for Stockkeeper models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementType(models.TextChoices):
    """
    Kind of stock movement.

    IN:       Stock entry, quantity is a positive magnitude.
    OUT:      Stock exit, quantity is a positive magnitude.
    ADJUST:   Correction, quantity is a signed delta (+ raises, - lowers).
    TRANSFER: Outbound leg of a transfer, positive magnitude.
              The receiving side is not modeled here.
    """
    IN = 'IN', _('In')
    OUT = 'OUT', _('Out')
    ADJUST = 'ADJUST', _('Adjustment')
    TRANSFER = 'TRANSFER', _('Transfer')


class ReferenceType(models.TextChoices):
    """What caused a movement."""
    ORDER = 'ORDER', _('Order')
    PURCHASE = 'PURCHASE', _('Purchase')
    ADJUSTMENT = 'ADJUSTMENT', _('Adjustment')
    RETURN = 'RETURN', _('Return')
    INITIAL = 'INITIAL', _('Initial stock')
    MANUAL = 'MANUAL', _('Manual')


class AlertType(models.TextChoices):
    """Low-stock alert states, most severe first."""
    OUT_OF_STOCK = 'OUT_OF_STOCK', _('Out of stock')
    REORDER_POINT = 'REORDER_POINT', _('At reorder point')
    LOW_STOCK = 'LOW_STOCK', _('Low stock')
