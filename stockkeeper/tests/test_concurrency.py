"""
Tests for conflict translation and opt-in retries.
"""

import pytest
from django.db import OperationalError

from stockkeeper import StockError
from stockkeeper.concurrency import conflict_guard, retry_on_conflict
from stockkeeper.exceptions import SequenceError


class TestConflictGuard:
    """Tests for conflict_guard()."""

    def test_translates_operational_error(self):
        @conflict_guard(StockError)
        def locked():
            raise OperationalError('database is locked')

        with pytest.raises(StockError) as exc:
            locked()

        assert exc.value.code == 'CONCURRENT_MODIFICATION'
        assert exc.value.kind == 'conflict'
        assert isinstance(exc.value.__cause__, OperationalError)

    def test_other_errors_pass_through(self):
        @conflict_guard(SequenceError)
        def broken():
            raise SequenceError('SEQUENCE_EXHAUSTED')

        with pytest.raises(SequenceError) as exc:
            broken()

        assert exc.value.code == 'SEQUENCE_EXHAUSTED'


class TestRetryOnConflict:
    """Tests for retry_on_conflict()."""

    def test_retries_until_success(self):
        calls = []

        def flaky(value):
            calls.append(value)
            if len(calls) < 3:
                raise StockError('CONCURRENT_MODIFICATION')
            return value * 2

        assert retry_on_conflict(flaky, 21, attempts=3) == 42
        assert len(calls) == 3

    def test_gives_up_after_attempts(self):
        calls = []

        def always_locked():
            calls.append(1)
            raise SequenceError('CONCURRENT_MODIFICATION')

        with pytest.raises(SequenceError):
            retry_on_conflict(always_locked, attempts=2)

        assert len(calls) == 2

    def test_does_not_retry_other_errors(self):
        calls = []

        def rejected():
            calls.append(1)
            raise StockError('INSUFFICIENT_STOCK', current=0, requested=1)

        with pytest.raises(StockError) as exc:
            retry_on_conflict(rejected, attempts=5)

        assert exc.value.code == 'INSUFFICIENT_STOCK'
        assert calls == [1]

    def test_default_attempts_from_settings(self, settings):
        settings.STOCKKEEPER = {'CONFLICT_RETRIES': 4}
        calls = []

        def always_locked():
            calls.append(1)
            raise StockError('CONCURRENT_MODIFICATION')

        with pytest.raises(StockError):
            retry_on_conflict(always_locked)

        assert len(calls) == 4


class TestErrorShape:
    """Structured error payloads."""

    def test_as_dict(self):
        error = StockError('INSUFFICIENT_STOCK', product_id=7, current=3, requested=5)

        assert error.as_dict() == {
            'code': 'INSUFFICIENT_STOCK',
            'kind': 'invariant_violation',
            'message': 'Insufficient stock for this movement',
            'data': {'product_id': 7, 'current': 3, 'requested': 5},
        }
