"""
Stockkeeper Models.

Core models for stock keeping:
- Category / Product: Catalog entities the ledger refers to
- StockAccount: Per-product stock counter and thresholds
- StockMovement: Immutable ledger of changes
- SequenceCounter: Locked counter behind reference numbers
"""

from stockkeeper.models.account import StockAccount
from stockkeeper.models.catalog import Category, Product
from stockkeeper.models.enums import AlertType, MovementType, ReferenceType
from stockkeeper.models.movement import StockMovement
from stockkeeper.models.sequence import SequenceCounter

__all__ = [
    'MovementType',
    'ReferenceType',
    'AlertType',
    'Category',
    'Product',
    'StockAccount',
    'StockMovement',
    'SequenceCounter',
]
