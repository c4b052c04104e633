"""
Derivation of an item's quantity and status from its ledger history.

The cached ``quantity``/``status`` on a stock item is never the source of
truth; it is always recomputable from the transactions that reference it.
"""

import math
from typing import Iterable, List, Tuple

from schemas.inventory import StockItem, StockStatus, StockTransaction


def stock_status(quantity: float, reorder_level: float) -> StockStatus:
    if quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= reorder_level:
        return StockStatus.LOW_QUANTITY
    return StockStatus.AVAILABLE


def reconcile(item: StockItem, transactions: Iterable[StockTransaction]) -> Tuple[float, StockStatus]:
    """Fold the item's transactions into (quantity, status).

    Purchases and opening stock add, usage subtracts. The total is floored at
    zero, so overdrawn usage is absorbed rather than reported.
    """
    # fsum is exact, so the result does not depend on ledger order
    total = math.fsum(tx.kind.sign * tx.quantity for tx in transactions)
    quantity = max(0.0, total)
    return quantity, stock_status(quantity, item.reorder_level)


def transactions_for(item_id: int, ledger: Iterable[StockTransaction]) -> List[StockTransaction]:
    return [tx for tx in ledger if tx.stock_item_id == item_id]


def apply_reconciliation(item: StockItem, ledger: Iterable[StockTransaction]) -> StockItem:
    """Return a copy of ``item`` with quantity/status re-derived from the full ledger."""
    quantity, status = reconcile(item, transactions_for(item.id, ledger))
    return item.model_copy(update={"quantity": quantity, "status": status})
