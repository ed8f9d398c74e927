"""
Reference numbers — isolated, testable, reusable.

Business documents are identified as ``PREFIX-YYYYMMDD-SEQ``:

    PUR-20240101-001   first purchase of 2024-01-01
    SAL-20240101-012   twelfth sale of the same day

The sequence is scoped to (prefix, date) and zero-padded to 3 digits.
Formatting past 999 widens the number instead of truncating it, but the
parser only accepts exactly 3 digits, so ``next_reference()`` refuses to
issue anything past 999 (SEQUENCE_EXHAUSTED) and every issued number
stays parseable.

Nothing here touches the database. Serialized allocation lives in
``stockkeeper.services.sequences``.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from django.db import models
from django.utils.translation import gettext_lazy as _

from stockkeeper.exceptions import SequenceError
from stockkeeper.protocols.lookups import SequenceLookup


class DocumentType(models.TextChoices):
    """Document types that carry a reference number."""
    PURCHASE = 'PURCHASE', _('Purchase')
    SALE = 'SALE', _('Sale')


PREFIXES = {
    DocumentType.PURCHASE: 'PUR',
    DocumentType.SALE: 'SAL',
}
TYPES_BY_PREFIX = {prefix: doc_type for doc_type, prefix in PREFIXES.items()}

SEQUENCE_WIDTH = 3
MAX_SEQUENCE = 999

REFERENCE_PATTERN = re.compile(r'^(PUR|SAL)-([0-9]{8})-([0-9]{3})$')


@dataclass(frozen=True)
class ParsedReference:
    """Components of a valid reference number."""

    doc_type: DocumentType
    date: date
    sequence: int

    @property
    def prefix(self) -> str:
        return PREFIXES[self.doc_type]

    @property
    def date_key(self) -> str:
        return date_key(self.date)


def document_type(value) -> DocumentType:
    """Coerce a DocumentType or its string value."""
    try:
        return DocumentType(value)
    except ValueError:
        raise SequenceError('INVALID_DOCUMENT_TYPE', doc_type=value) from None


def prefix_for(doc_type) -> str:
    """3-letter prefix for a document type."""
    return PREFIXES[document_type(doc_type)]


def date_key(on_date: date) -> str:
    """Date as YYYYMMDD."""
    if isinstance(on_date, datetime):
        on_date = on_date.date()
    return f"{on_date.year:04d}{on_date.month:02d}{on_date.day:02d}"


def format_reference(doc_type, on_date: date, sequence: int) -> str:
    """
    Build a reference number.

    Args:
        doc_type: DocumentType (or its value)
        on_date: Document date
        sequence: Positive counter for (prefix, date); 1000+ widens the field

    Raises:
        SequenceError('INVALID_DOCUMENT_TYPE'): Unknown document type
        SequenceError('INVALID_SEQUENCE'): sequence is not a positive int
    """
    if isinstance(sequence, bool) or not isinstance(sequence, int) or sequence < 1:
        raise SequenceError('INVALID_SEQUENCE', sequence=sequence)

    prefix = prefix_for(doc_type)
    return f"{prefix}-{date_key(on_date)}-{sequence:0{SEQUENCE_WIDTH}d}"


def parse_reference(value) -> ParsedReference | None:
    """
    Parse a reference number.

    Accepts exactly what format_reference() emits for sequences 1..999.
    Returns None for anything else, including impossible dates
    (PUR-20240230-001) and a zero sequence.
    """
    if not isinstance(value, str):
        return None

    match = REFERENCE_PATTERN.fullmatch(value)
    if not match:
        return None

    prefix, key, seq = match.groups()
    try:
        parsed_date = datetime.strptime(key, '%Y%m%d').date()
    except ValueError:
        return None

    sequence = int(seq)
    if sequence < 1:
        return None

    return ParsedReference(
        doc_type=TYPES_BY_PREFIX[prefix],
        date=parsed_date,
        sequence=sequence,
    )


def parse_reference_or_raise(value) -> ParsedReference:
    """Like parse_reference(), raising INVALID_REFERENCE_NUMBER instead of None."""
    parsed = parse_reference(value)
    if parsed is None:
        raise SequenceError('INVALID_REFERENCE_NUMBER', value=value)
    return parsed


def is_valid_reference(value) -> bool:
    return parse_reference(value) is not None


def extract_sequence(value) -> int:
    """Sequence part of a reference number (0 when unparseable)."""
    parsed = parse_reference(value)
    return parsed.sequence if parsed else 0


def next_reference(doc_type, on_date: date,
                   last_issued: SequenceLookup) -> str:
    """
    Next reference number for (doc_type, on_date).

    ``last_issued(prefix, date_key)`` must return the highest sequence
    already issued for that pair (0 when none). This function does not
    serialize concurrent callers; use ReferenceNumbers.issue() for that.

    Raises:
        SequenceError('SEQUENCE_EXHAUSTED'): 999 already issued that day
    """
    prefix = prefix_for(doc_type)
    key = date_key(on_date)

    last = last_issued(prefix, key) or 0
    if isinstance(last, bool) or not isinstance(last, int) or last < 0:
        raise SequenceError('INVALID_SEQUENCE', sequence=last, prefix=prefix, date=key)

    sequence = last + 1
    if sequence > MAX_SEQUENCE:
        raise SequenceError('SEQUENCE_EXHAUSTED', prefix=prefix, date=key, last=last)

    return format_reference(doc_type, on_date, sequence)


def next_sequential(value) -> str | None:
    """Reference following ``value`` on the same day, or None."""
    parsed = parse_reference(value)
    if parsed is None or parsed.sequence >= MAX_SEQUENCE:
        return None
    return format_reference(parsed.doc_type, parsed.date, parsed.sequence + 1)


def date_range_patterns(doc_type, start: date, end: date) -> list[str]:
    """
    One LIKE pattern per calendar day in [start, end].

    start == end yields one pattern; start > end yields none.
    """
    prefix = prefix_for(doc_type)
    if isinstance(start, datetime):
        start = start.date()
    if isinstance(end, datetime):
        end = end.date()

    patterns = []
    current = start
    while current <= end:
        patterns.append(f"{prefix}-{date_key(current)}-%")
        current += timedelta(days=1)
    return patterns


def monthly_prefix(doc_type, year: int, month: int) -> str:
    """Prefix shared by every reference of a month (PUR-202401)."""
    if not 1 <= month <= 12:
        raise SequenceError('INVALID_ARGUMENT', month=month)
    return f"{prefix_for(doc_type)}-{year:04d}{month:02d}"
