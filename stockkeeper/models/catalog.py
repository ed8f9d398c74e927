"""
Catalog models — the product and category entities the ledger hangs off.

Their CRUD lives outside this app. Stockkeeper only needs to know
whether a product is stockable and how categories link to parents.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Category(models.Model):
    """
    Product category, arranged as a tree via ``parent``.

    Parent changes must go through CategoryTree.set_parent() so the
    tree never acquires a cycle.
    """

    name = models.CharField(max_length=100, verbose_name=_('Name'))
    parent = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='children',
        verbose_name=_('Parent category'),
    )
    display_order = models.PositiveIntegerField(default=0, verbose_name=_('Display order'))
    is_active = models.BooleanField(default=True, verbose_name=_('Active'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Category')
        verbose_name_plural = _('Categories')
        ordering = ['display_order', 'name']

    def __str__(self) -> str:
        return self.name


class ProductQuerySet(models.QuerySet):
    """Custom QuerySet for Product."""

    def stockable(self):
        """Active, not soft-deleted products."""
        return self.filter(is_active=True, deleted_at__isnull=True)


class Product(models.Model):
    """Sellable item whose stock is tracked by the ledger."""

    code = models.CharField(max_length=50, unique=True, verbose_name=_('Code'))
    name = models.CharField(max_length=200, verbose_name=_('Name'))
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Category'),
    )
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Unit price'),
    )
    cost_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Cost price'),
    )
    is_active = models.BooleanField(default=True, verbose_name=_('Active'))
    deleted_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Deleted at'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering = ['code']

    @property
    def is_stockable(self) -> bool:
        return self.is_active and self.deleted_at is None

    def __str__(self) -> str:
        return f"{self.code} {self.name}"
