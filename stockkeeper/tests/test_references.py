"""
Tests for reference number formatting and parsing (no database).
"""

from datetime import date, datetime

import pytest

from stockkeeper import SequenceError
from stockkeeper.references import (
    DocumentType,
    ParsedReference,
    date_range_patterns,
    extract_sequence,
    format_reference,
    is_valid_reference,
    monthly_prefix,
    next_reference,
    next_sequential,
    parse_reference,
    parse_reference_or_raise,
)


class TestFormat:
    """Tests for format_reference()."""

    def test_zero_pads_to_three(self, new_year):
        assert format_reference(DocumentType.PURCHASE, new_year, 1) == 'PUR-20240101-001'
        assert format_reference(DocumentType.SALE, new_year, 42) == 'SAL-20240101-042'

    def test_accepts_string_type_and_datetime(self):
        stamp = datetime(2024, 3, 9, 17, 45)
        assert format_reference('SALE', stamp, 999) == 'SAL-20240309-999'

    def test_widens_past_999(self, new_year):
        """Large sequences widen rather than truncate."""
        assert format_reference(DocumentType.PURCHASE, new_year, 1000) == 'PUR-20240101-1000'

    @pytest.mark.parametrize('sequence', [0, -1, 1.0, '7', True, None])
    def test_rejects_bad_sequence(self, new_year, sequence):
        with pytest.raises(SequenceError) as exc:
            format_reference(DocumentType.PURCHASE, new_year, sequence)

        assert exc.value.code == 'INVALID_SEQUENCE'

    def test_rejects_unknown_type(self, new_year):
        with pytest.raises(SequenceError) as exc:
            format_reference('INVOICE', new_year, 1)

        assert exc.value.code == 'INVALID_DOCUMENT_TYPE'


class TestParse:
    """Tests for parse_reference()."""

    def test_round_trip(self):
        """parse(format(x)) == x for both types across the range."""
        days = [date(2024, 1, 1), date(2024, 2, 29), date(1999, 12, 31)]
        for doc_type in DocumentType:
            for day in days:
                for sequence in (1, 2, 9, 10, 99, 100, 500, 998, 999):
                    value = format_reference(doc_type, day, sequence)
                    assert parse_reference(value) == ParsedReference(doc_type, day, sequence)

    def test_parsed_components(self):
        parsed = parse_reference('SAL-20241231-015')

        assert parsed.doc_type == DocumentType.SALE
        assert parsed.prefix == 'SAL'
        assert parsed.date == date(2024, 12, 31)
        assert parsed.date_key == '20241231'
        assert parsed.sequence == 15

    @pytest.mark.parametrize('value', [
        '',
        'PUR-20240101-1000',   # widened output is not parseable
        'PUR-20240101-01',
        'PUR-2024011-001',
        'INV-20240101-001',
        'pur-20240101-001',
        'PUR-20240230-001',    # no such day
        'PUR-20241301-001',
        'PUR-20240101-000',
        'PUR_20240101_001',
        ' PUR-20240101-001',
        'PUR-20240101-001\n',
        'PUR-20240101-\u0660\u0660\u0661',  # Arabic-Indic digits
        'PUR-20240101-\uff10\uff10\uff11',  # fullwidth digits
        None,
        20240101,
    ])
    def test_rejects(self, value):
        assert parse_reference(value) is None
        assert not is_valid_reference(value)

    def test_or_raise(self):
        with pytest.raises(SequenceError) as exc:
            parse_reference_or_raise('nope')

        assert exc.value.code == 'INVALID_REFERENCE_NUMBER'
        assert exc.value.kind == 'invalid_argument'
        assert parse_reference_or_raise('PUR-20240101-003').sequence == 3


class TestNext:
    """Tests for next_reference()."""

    def test_increments_last_issued(self, new_year):
        """Last issued 7 yields 008."""
        calls = []

        def last_issued(prefix, date_string):
            calls.append((prefix, date_string))
            return 7

        assert next_reference(DocumentType.PURCHASE, new_year, last_issued) == 'PUR-20240101-008'
        assert calls == [('PUR', '20240101')]

    def test_first_of_the_day(self, new_year):
        assert next_reference(DocumentType.SALE, new_year, lambda p, d: 0) == 'SAL-20240101-001'

    def test_exhausted_after_999(self, new_year):
        with pytest.raises(SequenceError) as exc:
            next_reference(DocumentType.PURCHASE, new_year, lambda p, d: 999)

        assert exc.value.code == 'SEQUENCE_EXHAUSTED'
        assert exc.value.kind == 'invariant_violation'

    def test_rejects_negative_lookup(self, new_year):
        with pytest.raises(SequenceError) as exc:
            next_reference(DocumentType.PURCHASE, new_year, lambda p, d: -2)

        assert exc.value.code == 'INVALID_SEQUENCE'


class TestHelpers:
    """Tests for the smaller helpers."""

    def test_extract_sequence(self):
        assert extract_sequence('PUR-20240101-042') == 42
        assert extract_sequence('garbage') == 0

    def test_next_sequential(self):
        assert next_sequential('SAL-20240101-009') == 'SAL-20240101-010'
        assert next_sequential('SAL-20240101-999') is None
        assert next_sequential('garbage') is None

    def test_monthly_prefix(self):
        assert monthly_prefix(DocumentType.PURCHASE, 2024, 1) == 'PUR-202401'

        with pytest.raises(SequenceError):
            monthly_prefix(DocumentType.PURCHASE, 2024, 13)


class TestDateRangePatterns:
    """Tests for date_range_patterns()."""

    def test_inclusive_range(self):
        patterns = date_range_patterns(DocumentType.PURCHASE, date(2024, 2, 28), date(2024, 3, 1))

        assert patterns == ['PUR-20240228-%', 'PUR-20240229-%', 'PUR-20240301-%']

    def test_single_day(self, new_year):
        assert date_range_patterns(DocumentType.SALE, new_year, new_year) == ['SAL-20240101-%']

    def test_reversed_range_is_empty(self, new_year):
        assert date_range_patterns(DocumentType.SALE, date(2024, 1, 2), new_year) == []

    def test_accepts_datetimes(self):
        patterns = date_range_patterns(
            DocumentType.SALE, datetime(2024, 1, 1, 23, 0), datetime(2024, 1, 2, 1, 0),
        )

        assert patterns == ['SAL-20240101-%', 'SAL-20240102-%']
