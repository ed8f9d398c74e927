"""
Category tree — parent-link changes guarded against cycles.
"""

import logging

from django.db import transaction

from stockkeeper.exceptions import CategoryError
from stockkeeper.hierarchy import check_no_cycle, walk_ancestors
from stockkeeper.models.catalog import Category

logger = logging.getLogger('stockkeeper')


def parent_of(category_id):
    """ParentLookup backed by the Category table."""
    return Category.objects.filter(pk=category_id).values_list('parent_id', flat=True).first()


class CategoryTree:
    """Category hierarchy operations."""

    @classmethod
    def set_parent(cls, category, parent) -> Category:
        """
        Move ``category`` under ``parent`` (None = make it a root).

        Raises:
            CategoryError('CATEGORY_NOT_FOUND'): category or parent missing
            CategoryError('SELF_PARENT'): parent is the category itself
            CategoryError('CYCLE_DETECTED'): parent is one of its descendants

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on the moved category
        """
        category_id = category.pk if isinstance(category, Category) else category
        parent_id = parent.pk if isinstance(parent, Category) else parent

        with transaction.atomic():
            try:
                locked = Category.objects.select_for_update().get(pk=category_id)
            except Category.DoesNotExist:
                raise CategoryError('CATEGORY_NOT_FOUND', category_id=category_id) from None

            if parent_id is not None and not Category.objects.filter(pk=parent_id).exists():
                raise CategoryError('CATEGORY_NOT_FOUND', category_id=parent_id)

            try:
                check_no_cycle(locked.pk, parent_id, parent_of)
            except CategoryError as exc:
                logger.warning(
                    "category.cycle_rejected",
                    extra={"category_id": locked.pk, "parent_id": parent_id, "code": exc.code},
                )
                raise

            old_parent_id = locked.parent_id
            locked.parent_id = parent_id
            locked.save(update_fields=['parent', 'updated_at'])

            logger.info(
                "category.reparent",
                extra={"category_id": locked.pk, "old_parent_id": old_parent_id, "parent_id": parent_id},
            )
            return locked

    @classmethod
    def ancestors(cls, category) -> list[Category]:
        """Ancestors of ``category``, root first."""
        category_id = category.pk if isinstance(category, Category) else category
        ids = list(walk_ancestors(category_id, parent_of))
        by_id = Category.objects.in_bulk(ids)
        return [by_id[pk] for pk in reversed(ids)]
