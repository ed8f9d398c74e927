"""
Pytest fixtures for Stockkeeper tests.
"""

from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from stockkeeper.models import Category, Product


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        password='testpass123'
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(name='Beverages')


@pytest.fixture
def product(db, category):
    """Create a stockable product with a cost price."""
    return Product.objects.create(
        code='BEV-001',
        name='Sparkling Water 500ml',
        category=category,
        unit_price=Decimal('3.50'),
        cost_price=Decimal('1.20'),
    )


@pytest.fixture
def other_product(db, category):
    """Create a second stockable product."""
    return Product.objects.create(
        code='BEV-002',
        name='Orange Juice 1L',
        category=category,
        unit_price=Decimal('6.00'),
        cost_price=Decimal('2.50'),
    )


@pytest.fixture
def inactive_product(db, category):
    """Create a product that is switched off."""
    return Product.objects.create(
        code='BEV-900',
        name='Discontinued Soda',
        category=category,
        is_active=False,
    )


@pytest.fixture
def new_year():
    """2024-01-01."""
    return date(2024, 1, 1)
