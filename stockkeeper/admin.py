"""
Stockkeeper Admin — basic fallback (works without Unfold).

For the Unfold-styled version, add 'stockkeeper.contrib.admin_unfold' to INSTALLED_APPS.
When the Unfold contrib is loaded the classes below are defined but not
registered (avoids double registration).

Provides views for back-office debugging:
- Category / Product: list + edit
- StockAccount: thresholds editable, stock read-only (changes via the ledger)
- StockMovement: read-only audit trail
- SequenceCounter: read-only
"""

from django import forms
from django.apps import apps
from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from stockkeeper.exceptions import CategoryError
from stockkeeper.hierarchy import check_no_cycle
from stockkeeper.models import Category, Product, SequenceCounter, StockAccount, StockMovement
from stockkeeper.services.categories import parent_of


class CategoryAdminForm(forms.ModelForm):
    """Rejects parent choices that would close a loop in the tree."""

    class Meta:
        model = Category
        fields = ['name', 'parent', 'display_order', 'is_active']

    def clean_parent(self):
        parent = self.cleaned_data.get('parent')
        if parent is not None and self.instance.pk:
            try:
                check_no_cycle(self.instance.pk, parent.pk, parent_of)
            except CategoryError as exc:
                raise forms.ValidationError(exc.message, code=exc.code) from exc
        return parent


# =========================================================================
# CATALOG ADMIN
# =========================================================================


class CategoryAdmin(admin.ModelAdmin):
    """Category admin — parent changes are validated against cycles."""

    form = CategoryAdminForm
    list_display = ['name', 'parent', 'display_order', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']


class ProductAdmin(admin.ModelAdmin):
    """Product admin — editable."""

    list_display = ['code', 'name', 'category', 'is_active', 'stock_display', 'alert_display']
    list_filter = ['is_active', 'category']
    search_fields = ['code', 'name']
    readonly_fields = ['created_at', 'updated_at']

    @admin.display(description=_('Stock'))
    def stock_display(self, obj):
        account = getattr(obj, 'stock_account', None)
        return account.current_stock if account else '-'

    @admin.display(description=_('Alert'))
    def alert_display(self, obj):
        account = getattr(obj, 'stock_account', None)
        alert = account.alert_type if account else None
        return alert.label if alert else ''


# =========================================================================
# STOCK ACCOUNT ADMIN (stock read-only)
# =========================================================================


class StockAccountAdmin(admin.ModelAdmin):
    """StockAccount admin — only thresholds are editable."""

    list_display = ['product', 'current_stock', 'reserved_stock', 'available_display',
                    'minimum_stock', 'reorder_point', 'maximum_stock', 'alert_display']
    search_fields = ['product__code', 'product__name']
    readonly_fields = ['product', 'current_stock', 'last_stock_check_at', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Available'))
    def available_display(self, obj):
        return obj.available_stock

    @admin.display(description=_('Alert'))
    def alert_display(self, obj):
        alert = obj.alert_type
        return alert.label if alert else ''


# =========================================================================
# STOCK MOVEMENT ADMIN (read-only audit trail)
# =========================================================================


class StockMovementAdmin(admin.ModelAdmin):
    """StockMovement admin — read-only. Immutable audit trail."""

    list_display = ['created_at', 'product', 'movement_type', 'quantity', 'delta',
                    'reference_type', 'reference_id', 'actor']
    list_filter = ['movement_type', 'reference_type', 'created_at']
    search_fields = ['product__code', 'reference_id', 'notes']
    readonly_fields = ['product', 'movement_type', 'quantity', 'delta', 'unit_cost',
                       'reference_type', 'reference_id', 'notes', 'actor', 'created_at']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# SEQUENCE COUNTER ADMIN (read-only)
# =========================================================================


class SequenceCounterAdmin(admin.ModelAdmin):
    """SequenceCounter admin — read-only."""

    list_display = ['prefix', 'date_key', 'last_value', 'updated_at']
    list_filter = ['prefix']
    readonly_fields = ['prefix', 'date_key', 'last_value', 'updated_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# Skip registration if the Unfold contrib is installed (it will register its own admins)
if not apps.is_installed('stockkeeper.contrib.admin_unfold'):
    admin.site.register(Category, CategoryAdmin)
    admin.site.register(Product, ProductAdmin)
    admin.site.register(StockAccount, StockAccountAdmin)
    admin.site.register(StockMovement, StockMovementAdmin)
    admin.site.register(SequenceCounter, SequenceCounterAdmin)
