"""
Management command to reconcile Product.current_stock with the ledger.

Usage:
    python manage.py reconcile_stock
    python manage.py reconcile_stock --dry-run
    python manage.py reconcile_stock --owner 42
"""

from django.core.management.base import BaseCommand
from django.db.models import F

from stockpro.models import Product
from stockpro.services.movements import reconcile_products


class Command(BaseCommand):
    """Reconcile stock command."""

    help = 'Recalcula o estoque atual dos produtos a partir das movimentações'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Mostra o que seria corrigido sem executar'
        )
        parser.add_argument(
            '--owner',
            type=int,
            help='Limita a um proprietário (id do usuário)'
        )

    def handle(self, *args, **options):
        products = Product.objects.all()
        if options['owner'] is not None:
            products = products.filter(owner_id=options['owner'])

        if options['dry_run']:
            drifted = products.with_ledger_balance().exclude(
                current_stock=F('_ledger_in') - F('_ledger_out')
            )
            for product in drifted:
                self.stdout.write(
                    f'{product.code}: {product.current_stock} → '
                    f'{product._ledger_in - product._ledger_out}'
                )
            self.stdout.write(f'{drifted.count()} produto(s) seria(m) corrigido(s)')
        else:
            drifted = reconcile_products(products.order_by('pk'))
            for pk, (old, new) in drifted.items():
                self.stdout.write(f'#{pk}: {old} → {new}')
            self.stdout.write(
                self.style.SUCCESS(f'{len(drifted)} produto(s) corrigido(s)')
            )
