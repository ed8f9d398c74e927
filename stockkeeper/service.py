"""
Inventory Service — The single public interface for stock operations.

Usage:
    from stockkeeper import inventory, StockError
    from stockkeeper.models import MovementType, ReferenceType

    inventory.adjust(product, 100, MovementType.IN, reference_type=ReferenceType.INITIAL)
    inventory.adjust(product, 30, MovementType.OUT)
    inventory.account(product).current_stock  # 70
    inventory.low_stock()
    inventory.issue_reference(DocumentType.PURCHASE)  # "PUR-20240101-001"
"""

from stockkeeper.concurrency import retry_on_conflict
from stockkeeper.services.alerts import StockAlerts
from stockkeeper.services.categories import CategoryTree
from stockkeeper.services.ledger import StockLedger
from stockkeeper.services.queries import StockQueries
from stockkeeper.services.sequences import ReferenceNumbers


class Inventory(StockLedger, StockQueries, StockAlerts):
    """
    Single interface for stock operations.

    State-changing methods (adjust, update_thresholds, recalculate,
    issue_reference, set_category_parent) run in atomic transactions
    with row locking. See each method's docstring.
    """

    issue_reference = ReferenceNumbers.issue
    peek_reference = ReferenceNumbers.peek
    set_category_parent = CategoryTree.set_parent
    category_ancestors = CategoryTree.ancestors
    retry_on_conflict = staticmethod(retry_on_conflict)
