"""
Conflict handling for locked read-modify-write operations.

Ledger and sequence operations hold a row lock for their whole atomic
block. If the database still reports a lock or serialization failure,
the operation is surfaced as a CONCURRENT_MODIFICATION error, never
resolved silently. Callers that want retries opt in explicitly:

    result = retry_on_conflict(inventory.adjust, product, 5, MovementType.OUT)
"""

import functools
import logging

from django.db import OperationalError

from stockkeeper.conf import stockkeeper_settings
from stockkeeper.exceptions import CONFLICT, BaseError

logger = logging.getLogger('stockkeeper')


def conflict_guard(error_class):
    """Translate OperationalError raised by ``func`` into error_class('CONCURRENT_MODIFICATION')."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except OperationalError as exc:
                logger.warning(
                    "stock.conflict",
                    extra={"operation": func.__qualname__, "error": str(exc)},
                )
                raise error_class(
                    'CONCURRENT_MODIFICATION',
                    operation=func.__name__,
                ) from exc
        return wrapper

    return decorator


def retry_on_conflict(func, *args, attempts: int | None = None, **kwargs):
    """
    Call ``func`` again when it fails with a conflict.

    Any other error propagates immediately. After ``attempts`` conflicts
    the last one is re-raised.
    """
    attempts = attempts or stockkeeper_settings.CONFLICT_RETRIES
    for attempt in range(1, attempts + 1):
        try:
            return func(*args, **kwargs)
        except BaseError as exc:
            if exc.kind != CONFLICT or attempt == attempts:
                raise
            logger.info(
                "stock.conflict.retry",
                extra={"operation": getattr(func, '__qualname__', repr(func)), "attempt": attempt},
            )
