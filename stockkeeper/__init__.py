"""
Django Stockkeeper — stock ledger for a small-business back office.

Usage:
    from stockkeeper import inventory, StockError

    inventory.adjust(product, 100, 'IN', reference_type='INITIAL')
    inventory.adjust(product, 30, 'OUT')
    inventory.low_stock()
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'inventory':
        from stockkeeper.service import Inventory
        return Inventory
    elif name == 'StockError':
        from stockkeeper.exceptions import StockError
        return StockError
    elif name == 'SequenceError':
        from stockkeeper.exceptions import SequenceError
        return SequenceError
    elif name == 'CategoryError':
        from stockkeeper.exceptions import CategoryError
        return CategoryError
    elif name == 'StockAccount':
        from stockkeeper.models.account import StockAccount
        return StockAccount
    elif name == 'StockMovement':
        from stockkeeper.models.movement import StockMovement
        return StockMovement
    elif name == 'MovementType':
        from stockkeeper.models.enums import MovementType
        return MovementType
    elif name == 'ReferenceType':
        from stockkeeper.models.enums import ReferenceType
        return ReferenceType
    elif name == 'AlertType':
        from stockkeeper.models.enums import AlertType
        return AlertType
    elif name == 'DocumentType':
        from stockkeeper.references import DocumentType
        return DocumentType
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'inventory',
    'StockError',
    'SequenceError',
    'CategoryError',
    'StockAccount',
    'StockMovement',
    'MovementType',
    'ReferenceType',
    'AlertType',
    'DocumentType',
]

__version__ = '0.1.0'
