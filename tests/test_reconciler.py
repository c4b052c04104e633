import itertools

import pytest

from schemas.inventory import StockItem, StockStatus, StockTransaction
from services.reconciler import apply_reconciliation, reconcile, stock_status, transactions_for

ITEM = StockItem(id=1, name="Tomatoes", reorder_level=10)
_ids = itertools.count(1)


def tx(type_, quantity, item_id=1):
    return StockTransaction(
        id=next(_ids),
        stock_item_id=item_id,
        date="3 June 2025",
        time="2:44 PM",
        type=type_,
        quantity=quantity,
    )


def test_empty_history_is_out_of_stock():
    assert reconcile(ITEM, []) == (0, StockStatus.OUT_OF_STOCK)


def test_opening_stock_above_reorder_level_is_available():
    assert reconcile(ITEM, [tx("Opening Stock", 50)]) == (50, StockStatus.AVAILABLE)


def test_usage_down_to_reorder_level_is_low_quantity():
    history = [tx("Opening Stock", 50), tx("Usage", 45)]
    assert reconcile(ITEM, history) == (5, StockStatus.LOW_QUANTITY)


def test_usage_to_exactly_zero_is_out_of_stock():
    history = [tx("Opening Stock", 50), tx("Usage", 45), tx("Usage", 5)]
    assert reconcile(ITEM, history) == (0, StockStatus.OUT_OF_STOCK)


def test_overdraw_is_clamped_to_zero():
    history = [tx("Opening Stock", 50), tx("Usage", 100)]
    assert reconcile(ITEM, history) == (0, StockStatus.OUT_OF_STOCK)


def test_purchases_add():
    history = [tx("Opening Stock", 5), tx("Purchase", 20), tx("Usage", 3)]
    assert reconcile(ITEM, history) == (22, StockStatus.AVAILABLE)


def test_quantity_equal_to_reorder_level_is_low():
    assert reconcile(ITEM, [tx("Purchase", 10)])[1] == StockStatus.LOW_QUANTITY


def test_zero_reorder_level_only_flags_empty():
    item = StockItem(id=1, name="Salt", reorder_level=0)
    assert reconcile(item, [tx("Purchase", 1)]) == (1, StockStatus.AVAILABLE)
    assert reconcile(item, [])[1] == StockStatus.OUT_OF_STOCK


@pytest.mark.parametrize("quantity,reorder_level,expected", [
    (0, 0, StockStatus.OUT_OF_STOCK),
    (0, 10, StockStatus.OUT_OF_STOCK),
    (0.5, 10, StockStatus.LOW_QUANTITY),
    (10, 10, StockStatus.LOW_QUANTITY),
    (10.5, 10, StockStatus.AVAILABLE),
])
def test_stock_status(quantity, reorder_level, expected):
    assert stock_status(quantity, reorder_level) == expected


def test_history_labels_from_either_view_are_accepted():
    history = [tx("Initial stock", 30), tx("Stock in", 5), tx("Stock out", 10)]
    assert [t.type for t in history] == ["Opening Stock", "Purchase", "Usage"]
    assert reconcile(ITEM, history) == (25, StockStatus.AVAILABLE)


def test_unknown_type_is_rejected():
    with pytest.raises(ValueError):
        tx("Transfer", 5)


def test_result_does_not_depend_on_order():
    history = [tx("Opening Stock", 12.5), tx("Usage", 0.1), tx("Purchase", 0.2), tx("Usage", 7.3), tx("Purchase", 3)]
    expected = reconcile(ITEM, history)
    for permutation in itertools.permutations(history):
        assert reconcile(ITEM, permutation) == expected


def test_quantity_is_never_negative_and_zero_iff_out_of_stock():
    kinds = ["Purchase", "Usage", "Opening Stock"]
    for combo in itertools.product(kinds, repeat=3):
        for amounts in itertools.product([1, 10, 25], repeat=3):
            history = [tx(k, q) for k, q in zip(combo, amounts)]
            quantity, status = reconcile(ITEM, history)
            assert quantity >= 0
            assert (quantity == 0) == (status == StockStatus.OUT_OF_STOCK)
            if 0 < quantity <= ITEM.reorder_level:
                assert status == StockStatus.LOW_QUANTITY


def test_apply_reconciliation_only_counts_the_items_own_transactions():
    ledger = [tx("Purchase", 50, item_id=1), tx("Purchase", 999, item_id=2)]
    assert [t.stock_item_id for t in transactions_for(1, ledger)] == [1]

    stale = ITEM.model_copy(update={"quantity": 3, "status": StockStatus.LOW_QUANTITY})
    fixed = apply_reconciliation(stale, ledger)
    assert fixed.quantity == 50
    assert fixed.status == StockStatus.AVAILABLE
    # the input is left untouched
    assert stale.quantity == 3
