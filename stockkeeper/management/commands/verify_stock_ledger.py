"""
Management command to audit stock counters against the movement ledger.

Usage:
    python manage.py verify_stock_ledger
    python manage.py verify_stock_ledger --fix
    python manage.py verify_stock_ledger --product SKU-001
"""

from django.core.management.base import BaseCommand, CommandError

from stockkeeper.models import Product, StockAccount
from stockkeeper.service import Inventory


class Command(BaseCommand):
    """Verify stock ledger command."""

    help = 'Compares each current_stock with the sum of its movements'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Rewrite drifted counters from the ledger'
        )
        parser.add_argument(
            '--product',
            metavar='CODE',
            help='Only check the product with this code'
        )

    def handle(self, *args, **options):
        accounts = StockAccount.objects.select_related('product').order_by('product__code')
        if options['product']:
            if not Product.objects.filter(code=options['product']).exists():
                raise CommandError(f"Unknown product code: {options['product']}")
            accounts = accounts.filter(product__code=options['product'])

        drifted = 0
        for account in accounts:
            check = Inventory.verify(account.product)
            if check.is_consistent:
                continue

            drifted += 1
            self.stdout.write(
                f'{account.product.code}: recorded={check.recorded} '
                f'replayed={check.replayed} diff={check.difference:+d}'
            )
            if options['fix']:
                Inventory.recalculate(account.product)

        if not drifted:
            self.stdout.write(self.style.SUCCESS('All stock counters match the ledger'))
        elif options['fix']:
            self.stdout.write(self.style.SUCCESS(f'{drifted} counter(s) recalculated'))
        else:
            self.stdout.write(self.style.WARNING(f'{drifted} counter(s) drifted'))
