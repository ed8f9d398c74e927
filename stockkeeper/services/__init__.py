"""
Stock services — modular organization of stock operations.

Re-exports all public classes:
    from stockkeeper.services import StockLedger, StockQueries, StockAlerts, ...
"""

from stockkeeper.services.alerts import InventoryStats, LowStockItem, StockAlerts, classify
from stockkeeper.services.categories import CategoryTree
from stockkeeper.services.ledger import AdjustmentResult, LedgerCheck, StockLedger
from stockkeeper.services.queries import Page, StockQueries
from stockkeeper.services.sequences import ReferenceNumbers

__all__ = [
    'StockLedger',
    'StockQueries',
    'StockAlerts',
    'ReferenceNumbers',
    'CategoryTree',
    'AdjustmentResult',
    'LedgerCheck',
    'LowStockItem',
    'InventoryStats',
    'Page',
    'classify',
]
