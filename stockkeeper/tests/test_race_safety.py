"""
Race tests with real threads against a shared test database.

Each worker uses its own connection. They need row locks (PostgreSQL,
MySQL) or a file-backed SQLite database in IMMEDIATE transaction mode,
which is what the test settings configure.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date
from threading import Barrier

import pytest
from django.db import connection

from stockkeeper import StockError
from stockkeeper.exceptions import SequenceError
from stockkeeper.models import MovementType, StockMovement
from stockkeeper.references import DocumentType, parse_reference
from stockkeeper.services.ledger import AdjustmentResult, StockLedger
from stockkeeper.services.sequences import ReferenceNumbers


pytestmark = pytest.mark.django_db(transaction=True)

NUM_THREADS = 15


@pytest.fixture(autouse=True)
def serialized_writers():
    """Skip when concurrent writers would not be serialized by the database."""
    if connection.features.has_select_for_update:
        return
    if (connection.vendor == 'sqlite'
            and not connection.is_in_memory_db()
            and connection.settings_dict['OPTIONS'].get('transaction_mode') == 'IMMEDIATE'):
        return
    pytest.skip('needs row locks or file-backed SQLite in IMMEDIATE mode')


def run_in_threads(func, count=NUM_THREADS):
    """Start `count` calls of func at once; return their results in order."""
    barrier = Barrier(count, timeout=30)

    def worker(_):
        barrier.wait()
        try:
            return func()
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=count) as executor:
        futures = [executor.submit(worker, i) for i in range(count)]
        # future.result() re-raises anything a worker did not expect
        return [f.result() for f in futures]


class TestConcurrentAdjust:
    """No lost updates when many threads adjust the same product."""

    def test_concurrent_exits_never_oversell(self, product):
        """15 exits of 1 against 10 in stock: at most 10 succeed, none lost."""
        StockLedger.adjust(product, 10, MovementType.IN)

        def take_one():
            try:
                return StockLedger.adjust(product, 1, MovementType.OUT)
            except StockError as exc:
                return exc

        results = run_in_threads(take_one)

        succeeded = [r for r in results if isinstance(r, AdjustmentResult)]
        failed = [r for r in results if isinstance(r, StockError)]
        assert len(succeeded) + len(failed) == NUM_THREADS
        assert {e.code for e in failed} <= {'INSUFFICIENT_STOCK', 'CONCURRENT_MODIFICATION'}

        # Every success saw a different starting stock
        assert sorted((r.previous_stock for r in succeeded), reverse=True) == \
            list(range(10, 10 - len(succeeded), -1))

        check = StockLedger.verify(product)
        assert check.recorded == 10 - len(succeeded)
        assert check.recorded >= 0
        assert check.is_consistent
        assert StockMovement.objects.filter(product=product).count() == 1 + len(succeeded)

    def test_concurrent_entries_all_count(self, product):
        results = run_in_threads(lambda: StockLedger.adjust(product, 1, MovementType.IN))

        assert len(results) == NUM_THREADS
        check = StockLedger.verify(product)
        assert check.recorded == NUM_THREADS
        assert check.is_consistent


class TestConcurrentIssue:
    """Reference numbers stay unique under concurrent issuance."""

    def test_numbers_are_unique(self, db):
        day = date(2024, 1, 1)

        def issue_one():
            try:
                return ReferenceNumbers.issue(DocumentType.PURCHASE, day)
            except SequenceError as exc:
                return exc

        results = run_in_threads(issue_one)

        numbers = [r for r in results if isinstance(r, str)]
        failed = [r for r in results if isinstance(r, SequenceError)]
        assert {e.code for e in failed} <= {'CONCURRENT_MODIFICATION'}
        assert len(set(numbers)) == len(numbers)
        assert sorted(parse_reference(n).sequence for n in numbers) == \
            list(range(1, len(numbers) + 1))
        assert ReferenceNumbers.peek(DocumentType.PURCHASE, day) == len(numbers)
