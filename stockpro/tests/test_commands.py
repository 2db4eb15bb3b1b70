"""
Tests for the reconcile_stock management command and the admin action.
"""

from io import StringIO

import pytest
from django.contrib import admin
from django.contrib.messages.storage.fallback import FallbackStorage
from django.core.management import call_command
from django.test import RequestFactory

from stockpro.management.commands import reconcile_stock
from stockpro.models import Product
from stockpro.services import movements


pytestmark = pytest.mark.django_db


def run(*args):
    out = StringIO()
    call_command('reconcile_stock', *args, stdout=out)
    return out.getvalue()


@pytest.fixture
def reconcile_calls(monkeypatch):
    """Record the products handed to the locked reconcile loop."""
    calls = []

    def spy(products):
        products = list(products)
        calls.append([p.pk for p in products])
        return movements.reconcile_products(products)

    monkeypatch.setattr(reconcile_stock, 'reconcile_products', spy)
    monkeypatch.setattr('stockpro.admin.reconcile_products', spy)
    return calls


class TestReconcileStockCommand:

    def test_dry_run_reports_without_writing(self, stocked_product, reconcile_calls):
        Product.objects.filter(pk=stocked_product.pk).update(current_stock=7)

        output = run('--dry-run')

        assert 'MSE001: 7 → 25' in output
        assert '1 produto(s) seria(m) corrigido(s)' in output
        assert reconcile_calls == []
        stocked_product.refresh_from_db()
        assert stocked_product.current_stock == 7

    def test_fixes_drift(self, stocked_product):
        Product.objects.filter(pk=stocked_product.pk).update(current_stock=7)

        output = run()

        assert f'#{stocked_product.pk}: 7 → 25' in output
        assert '1 produto(s) corrigido(s)' in output
        stocked_product.refresh_from_db()
        assert stocked_product.current_stock == 25

    def test_goes_through_locked_reconcile(self, stocked_product, reconcile_calls):
        Product.objects.filter(pk=stocked_product.pk).update(current_stock=7)

        run()

        assert reconcile_calls == [[stocked_product.pk]]

    def test_owner_filter(self, stocked_product, other_user, reconcile_calls):
        Product.objects.filter(pk=stocked_product.pk).update(current_stock=7)

        output = run('--owner', str(other_user.pk))

        assert '0 produto(s) corrigido(s)' in output
        assert reconcile_calls == [[]]
        stocked_product.refresh_from_db()
        assert stocked_product.current_stock == 7


class TestReconcileAdminAction:

    def test_action_goes_through_locked_reconcile(self, user, stocked_product, reconcile_calls):
        Product.objects.filter(pk=stocked_product.pk).update(current_stock=7)

        request = RequestFactory().post('/')
        request.user = user
        request.session = {}
        request._messages = FallbackStorage(request)

        model_admin = admin.site._registry[Product]
        model_admin.reconcile_stock(request, Product.objects.filter(pk=stocked_product.pk))

        assert reconcile_calls == [[stocked_product.pk]]
        stocked_product.refresh_from_db()
        assert stocked_product.current_stock == 25
        assert [str(m) for m in request._messages] == ['1 produto(s) corrigido(s).']
