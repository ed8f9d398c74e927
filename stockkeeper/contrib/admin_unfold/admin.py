"""
Stockkeeper Admin with Unfold theme.

This module provides Unfold-styled admin classes for Stockkeeper models.
To use, add 'stockkeeper.contrib.admin_unfold' to INSTALLED_APPS after 'stockkeeper'.

The admins will automatically register the Unfold versions.
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _
from unfold.decorators import display

from stockkeeper.admin import CategoryAdminForm
from stockkeeper.contrib.admin_unfold.base import BaseModelAdmin, format_signed
from stockkeeper.models import (
    AlertType,
    Category,
    MovementType,
    Product,
    SequenceCounter,
    StockAccount,
    StockMovement,
)


ALERT_COLORS = {
    AlertType.OUT_OF_STOCK: 'danger',
    AlertType.REORDER_POINT: 'warning',
    AlertType.LOW_STOCK: 'info',
}


def _format_datetime(dt):
    """Format datetime as DD/MM/YY · HH:MM."""
    if dt:
        return dt.strftime('%d/%m/%y · %H:%M')
    return '-'


# =============================================================================
# CATALOG ADMIN
# =============================================================================


@admin.register(Category)
class CategoryAdmin(BaseModelAdmin):
    """Admin for Category model. Parent choices are cycle-checked."""

    form = CategoryAdminForm
    list_display = ['name', 'parent', 'display_order', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']

    warn_unsaved_form = True


@admin.register(Product)
class ProductAdmin(BaseModelAdmin):
    """Admin for Product model."""

    list_display = ['code', 'name', 'category', 'is_active', 'stock_display']
    list_filter = ['is_active', 'category']
    search_fields = ['code', 'name']
    readonly_fields = ['created_at', 'updated_at']

    warn_unsaved_form = True

    @display(description=_('Stock'))
    def stock_display(self, obj):
        account = getattr(obj, 'stock_account', None)
        return account.current_stock if account else '-'


# =============================================================================
# STOCK ACCOUNT ADMIN
# =============================================================================


@admin.register(StockAccount)
class StockAccountAdmin(BaseModelAdmin):
    """Admin for StockAccount model.

    current_stock only changes through the ledger, so it is read-only here.
    """

    list_display = ['product', 'current_stock', 'available_display',
                    'minimum_stock', 'reorder_point', 'alert_display', 'last_check_display']
    search_fields = ['product__code', 'product__name']
    readonly_fields = ['product', 'current_stock', 'last_stock_check_at', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @display(description=_('Available'))
    def available_display(self, obj):
        return obj.available_stock

    @display(description=_('Alert'), label=ALERT_COLORS)
    def alert_display(self, obj):
        alert = obj.alert_type
        return alert or '-'

    @display(description=_('Last change'))
    def last_check_display(self, obj):
        return _format_datetime(obj.last_stock_check_at)


# =============================================================================
# STOCK MOVEMENT ADMIN
# =============================================================================


@admin.register(StockMovement)
class StockMovementAdmin(BaseModelAdmin):
    """Admin for StockMovement model (read-only)."""

    list_display = ['created_at_display', 'product', 'type_display', 'delta_display',
                    'reference_type', 'reference_id', 'actor']
    list_filter = ['movement_type', 'reference_type', 'created_at']
    search_fields = ['product__code', 'reference_id', 'notes']
    readonly_fields = ['product', 'movement_type', 'quantity', 'delta', 'unit_cost',
                       'reference_type', 'reference_id', 'notes', 'actor', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @display(description=_('Date and time'))
    def created_at_display(self, obj):
        return _format_datetime(obj.created_at)

    @display(description=_('Type'), label={
        MovementType.IN: 'success',
        MovementType.OUT: 'danger',
        MovementType.ADJUST: 'warning',
        MovementType.TRANSFER: 'info',
    })
    def type_display(self, obj):
        return obj.movement_type

    @display(description=_('Delta'))
    def delta_display(self, obj):
        return format_signed(obj.delta)


# =============================================================================
# SEQUENCE COUNTER ADMIN
# =============================================================================


@admin.register(SequenceCounter)
class SequenceCounterAdmin(BaseModelAdmin):
    """Admin for SequenceCounter model (read-only)."""

    list_display = ['prefix', 'date_key', 'last_value', 'updated_at']
    list_filter = ['prefix']
    readonly_fields = ['prefix', 'date_key', 'last_value', 'updated_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
