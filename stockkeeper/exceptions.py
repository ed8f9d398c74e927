"""
Exceptions for Stockkeeper.

All errors carry a structured code for programmatic handling, plus a
``kind`` that groups codes the way an HTTP layer maps them to statuses.
"""

from typing import Any


# Error families exposed to callers
NOT_FOUND = 'not_found'
INVALID_ARGUMENT = 'invalid_argument'
INVARIANT_VIOLATION = 'invariant_violation'
CONFLICT = 'conflict'

ERROR_KINDS = {
    'PRODUCT_NOT_FOUND': NOT_FOUND,
    'ACCOUNT_NOT_FOUND': NOT_FOUND,
    'CATEGORY_NOT_FOUND': NOT_FOUND,
    'INVALID_QUANTITY': INVALID_ARGUMENT,
    'INVALID_MOVEMENT_TYPE': INVALID_ARGUMENT,
    'INVALID_REFERENCE_TYPE': INVALID_ARGUMENT,
    'INVALID_THRESHOLDS': INVALID_ARGUMENT,
    'INVALID_ARGUMENT': INVALID_ARGUMENT,
    'INVALID_REFERENCE_NUMBER': INVALID_ARGUMENT,
    'INVALID_DOCUMENT_TYPE': INVALID_ARGUMENT,
    'INVALID_SEQUENCE': INVALID_ARGUMENT,
    'INSUFFICIENT_STOCK': INVARIANT_VIOLATION,
    'CYCLE_DETECTED': INVARIANT_VIOLATION,
    'SELF_PARENT': INVARIANT_VIOLATION,
    'SEQUENCE_EXHAUSTED': INVARIANT_VIOLATION,
    'CONCURRENT_MODIFICATION': CONFLICT,
}


class BaseError(Exception):
    """
    Base for all Stockkeeper errors.

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        """Error family (not_found, invalid_argument, ...)."""
        return ERROR_KINDS.get(self.code, INVALID_ARGUMENT)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'kind': self.kind,
            'message': self.message,
            'data': {k: _jsonable(v) for k, v in self.data.items()},
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"


def _jsonable(value):
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return str(value)


class StockError(BaseError):
    """
    Structured exception for stock ledger operations.

    Usage:
        try:
            inventory.adjust(product, 10, MovementType.OUT)
        except StockError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Only {e.current} on hand")
    """

    _default_messages = {
        'PRODUCT_NOT_FOUND': 'Product not found or inactive',
        'ACCOUNT_NOT_FOUND': 'No stock account for this product',
        'INSUFFICIENT_STOCK': 'Insufficient stock for this movement',
        'INVALID_QUANTITY': 'Invalid quantity',
        'INVALID_MOVEMENT_TYPE': 'Invalid movement type',
        'INVALID_REFERENCE_TYPE': 'Invalid reference type',
        'INVALID_THRESHOLDS': 'Invalid stock thresholds',
        'INVALID_ARGUMENT': 'Invalid argument',
        'CONCURRENT_MODIFICATION': 'Concurrent modification detected',
    }

    @property
    def current(self) -> int:
        """Shortcut for data['current']."""
        return self.data.get('current', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)


class SequenceError(BaseError):
    """Errors while formatting, parsing or issuing reference numbers."""

    _default_messages = {
        'INVALID_REFERENCE_NUMBER': 'Malformed reference number',
        'INVALID_DOCUMENT_TYPE': 'Unknown document type',
        'INVALID_SEQUENCE': 'Sequence must be a positive integer',
        'INVALID_ARGUMENT': 'Invalid argument',
        'SEQUENCE_EXHAUSTED': 'Daily sequence exhausted',
        'CONCURRENT_MODIFICATION': 'Concurrent modification detected',
    }


class CategoryError(BaseError):
    """Errors guarding the category hierarchy."""

    _default_messages = {
        'CATEGORY_NOT_FOUND': 'Category not found',
        'SELF_PARENT': 'A category cannot be its own parent',
        'CYCLE_DETECTED': 'Parent change would create a cycle',
    }
