"""
Pytest fixtures for StockPro tests.
"""

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from django.contrib.auth import get_user_model

from stockpro import inventory
from stockpro.models import Category, Customer, Product, Supplier
from stockpro.session import Session


User = get_user_model()

SAO_PAULO = ZoneInfo('America/Sao_Paulo')


@pytest.fixture
def user(db):
    """Create a test user (the tenant)."""
    return User.objects.create_user(
        username='loja',
        password='testpass123'
    )


@pytest.fixture
def other_user(db):
    """A second tenant."""
    return User.objects.create_user(
        username='concorrente',
        password='testpass123'
    )


@pytest.fixture
def session(user):
    """Session for the test user, in the business timezone."""
    return Session(owner=user, tz=SAO_PAULO)


@pytest.fixture
def other_session(other_user):
    return Session(owner=other_user, tz=SAO_PAULO)


@pytest.fixture
def category(user):
    """Create a test category."""
    return Category.objects.create(owner=user, name='Periféricos')


@pytest.fixture
def supplier(user):
    """Create a test supplier."""
    return Supplier.objects.create(
        owner=user,
        name='TechParts Ltda',
        cnpj_cpf='12.345.678/0001-90',
        city='São Paulo',
        state='SP',
    )


@pytest.fixture
def customer(user):
    """Create a test customer."""
    return Customer.objects.create(owner=user, name='Cliente ABC Ltda')


@pytest.fixture
def product(user, category):
    """Create a test product with no stock."""
    return Product.objects.create(
        owner=user,
        code='MSE001',
        name='Mouse Gamer RGB',
        category=category,
        cost_price=Decimal('45.90'),
        sale_price=Decimal('89.90'),
        min_stock=10,
        max_stock=100,
    )


@pytest.fixture
def stocked_product(session, product, supplier):
    """Product with 25 units received at 45.90."""
    inventory.record_entry(session, product, 25, unit_price=Decimal('45.90'), supplier=supplier)
    product.refresh_from_db()
    return product


@pytest.fixture
def now():
    """Fixed reference instant: 15/03/2026 10:00 in São Paulo."""
    return datetime(2026, 3, 15, 10, 0, tzinfo=SAO_PAULO)
