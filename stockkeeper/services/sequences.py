"""
Reference number issuance — serialized allocation per (prefix, day).

The last issued sequence for each (prefix, date) lives in a
SequenceCounter row. issue() locks that row for the rest of the
caller's transaction, so concurrent callers are serialized and never
mint the same number. If the caller's transaction rolls back, the
number is not consumed.

Usage:
    with transaction.atomic():
        number = ReferenceNumbers.issue(DocumentType.PURCHASE)
        Purchase.objects.create(number=number, ...)
"""

import logging
from datetime import date

from django.db import transaction
from django.utils import timezone

from stockkeeper.concurrency import conflict_guard
from stockkeeper.exceptions import SequenceError
from stockkeeper.models.sequence import SequenceCounter
from stockkeeper.references import date_key, next_reference, prefix_for

logger = logging.getLogger('stockkeeper')


class ReferenceNumbers:
    """Locked counter allocator for reference numbers."""

    @classmethod
    @conflict_guard(SequenceError)
    def issue(cls, doc_type, on_date: date | None = None) -> str:
        """
        Allocate the next reference number.

        Args:
            doc_type: DocumentType (or its value)
            on_date: Document date (None = today, local time)

        Returns:
            Formatted number, e.g. "PUR-20240101-008"

        Raises:
            SequenceError('INVALID_DOCUMENT_TYPE'): Unknown document type
            SequenceError('SEQUENCE_EXHAUSTED'): 999 already issued that day

        Concurrency:
            - Runs under transaction.atomic()
            - get_or_create, then select_for_update() on the counter row
            - Lock held until the outermost transaction ends
        """
        on_date = on_date or timezone.localdate()
        prefix = prefix_for(doc_type)
        key = date_key(on_date)

        with transaction.atomic():
            counter, _ = SequenceCounter.objects.get_or_create(prefix=prefix, date_key=key)
            counter = SequenceCounter.objects.select_for_update().get(pk=counter.pk)

            number = next_reference(doc_type, on_date, lambda p, d: counter.last_value)

            counter.last_value += 1
            counter.save(update_fields=['last_value', 'updated_at'])

            logger.info(
                "reference.issued",
                extra={"prefix": prefix, "date": key, "sequence": counter.last_value, "number": number},
            )
            return number

    @classmethod
    def peek(cls, doc_type, on_date: date | None = None) -> int:
        """Last issued sequence for (doc_type, date), 0 when none. No allocation."""
        on_date = on_date or timezone.localdate()
        return cls.last_issued(prefix_for(doc_type), date_key(on_date))

    @classmethod
    def last_issued(cls, prefix: str, date_string: str) -> int:
        """SequenceLookup over the counter table (unlocked)."""
        counter = SequenceCounter.objects.filter(prefix=prefix, date_key=date_string).first()
        return counter.last_value if counter else 0
