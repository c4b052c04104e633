"""
Transaction ledger operations.

Every mutation rewrites the transaction collection and then the item
collection, re-deriving the owning item's quantity/status from the whole
ledger. The two writes are not atomic; ``reconcile_on_load`` repairs any
divergence left behind by an interrupted session.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional, Union

from core.converters import (
    format_last_updated,
    format_transaction_date,
    format_transaction_time,
    parse_date_time,
)
from core.exceptions import InvalidTransaction, StockItemNotFound, TransactionNotFound
from db.store import STOCK_ITEMS, STOCK_TRANSACTIONS, CollectionStore, write_lock
from schemas.base import load_records
from schemas.inventory import (
    DEFAULT_NOTES,
    UNKNOWN_ITEM,
    ActivityLogEntry,
    StockItem,
    StockTransaction,
    TransactionKind,
)
from services.ids import generate_unique_id
from services.reconciler import apply_reconciliation, transactions_for

logger = logging.getLogger(__name__)

DateTimeInput = Union[str, datetime, None]


def _coerce_date_time(value: DateTimeInput) -> datetime:
    try:
        return parse_date_time(value)
    except ValueError:
        raise InvalidTransaction(f"Invalid date/time: {value!r}")


def _check_amounts(quantity: float, unit_price: float) -> None:
    if quantity <= 0:
        raise InvalidTransaction("quantity must be > 0")
    if unit_price < 0:
        raise InvalidTransaction("unit price must be >= 0")


def _notes_or_default(notes: Optional[str]) -> str:
    return (notes or "").strip() or DEFAULT_NOTES


class Ledger:
    def __init__(self, store: CollectionStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.clock = clock

    # -- collections -------------------------------------------------------

    def load_items(self) -> List[StockItem]:
        return load_records(StockItem, self.store.read(STOCK_ITEMS, []), STOCK_ITEMS)

    def load_transactions(self) -> List[StockTransaction]:
        # records with an unknown type are dropped here, so they never reach the fold
        return load_records(StockTransaction, self.store.read(STOCK_TRANSACTIONS, []), STOCK_TRANSACTIONS)

    def save_items(self, items: List[StockItem]) -> None:
        self.store.write(STOCK_ITEMS, [i.to_record() for i in items])

    def save_transactions(self, transactions: List[StockTransaction]) -> None:
        self.store.write(STOCK_TRANSACTIONS, [t.to_record() for t in transactions])

    def _commit(self, items: List[StockItem], transactions: List[StockTransaction], item_id: int) -> Optional[StockItem]:
        """Re-derive ``item_id`` from ``transactions`` and persist both collections."""
        today = format_last_updated(self.clock())
        updated: Optional[StockItem] = None
        out: List[StockItem] = []
        for item in items:
            if item.id == item_id:
                item = apply_reconciliation(item, transactions)
                item.last_updated = today
                updated = item
            out.append(item)
        self.save_transactions(transactions)
        self.save_items(out)
        if updated is None:
            logger.info("Transaction references missing stock item %s; nothing to reconcile", item_id)
        return updated

    # -- operations --------------------------------------------------------

    def record_transaction(
        self,
        kind: Union[str, TransactionKind],
        stock_item_id: int,
        quantity: float,
        unit_price: float,
        party: str,
        date_time: DateTimeInput = None,
        notes: Optional[str] = None,
    ) -> StockTransaction:
        kind = TransactionKind.parse(kind)
        _check_amounts(quantity, unit_price)
        when = _coerce_date_time(date_time)

        with write_lock:
            items = self.load_items()
            item = next((i for i in items if i.id == stock_item_id), None)
            if item is None:
                raise StockItemNotFound(stock_item_id)

            transactions = self.load_transactions()
            tx = StockTransaction(
                id=generate_unique_id(t.id for t in transactions),
                stock_item_id=stock_item_id,
                date=format_transaction_date(when),
                time=format_transaction_time(when),
                type=kind.ledger_label,
                quantity=quantity,
                measuring_unit=item.measuring_unit,
                party=(party or "").strip(),
                stock_value=quantity * unit_price,
                per_unit_price=unit_price,
                notes=_notes_or_default(notes),
            )
            # newest first
            transactions.insert(0, tx)
            updated = self._commit(items, transactions, stock_item_id)
        logger.info(
            "Recorded %s of %s %s for %r; quantity now %s (%s)",
            tx.type, quantity, item.measuring_unit, item.name, updated.quantity, updated.status.value,
        )
        return tx

    def edit_transaction(
        self,
        transaction_id: int,
        new_quantity: Optional[float] = None,
        new_party: Optional[str] = None,
        new_unit_price: Optional[float] = None,
        new_date_time: DateTimeInput = None,
        new_notes: Optional[str] = None,
    ) -> StockTransaction:
        """Replace fields on an existing transaction; ``None`` keeps the current value."""
        with write_lock:
            transactions = self.load_transactions()
            index = next((n for n, t in enumerate(transactions) if t.id == transaction_id), None)
            if index is None:
                raise TransactionNotFound(transaction_id)
            current = transactions[index]

            quantity = current.quantity if new_quantity is None else new_quantity
            unit_price = current.unit_price if new_unit_price is None else new_unit_price
            _check_amounts(quantity, unit_price)

            changes = {
                "quantity": quantity,
                "stock_value": quantity * unit_price,
                "per_unit_price": unit_price,
            }
            if new_party is not None:
                changes["party"] = new_party.strip()
            if new_notes is not None:
                changes["notes"] = _notes_or_default(new_notes)
            if new_date_time is not None:
                when = _coerce_date_time(new_date_time)
                changes["date"] = format_transaction_date(when)
                changes["time"] = format_transaction_time(when)

            edited = current.model_copy(update=changes)
            transactions[index] = edited
            self._commit(self.load_items(), transactions, edited.stock_item_id)
        logger.info("Edited transaction %s (item %s)", transaction_id, edited.stock_item_id)
        return edited

    def delete_transaction(self, transaction_id: int) -> None:
        with write_lock:
            transactions = self.load_transactions()
            target = next((t for t in transactions if t.id == transaction_id), None)
            if target is None:
                return
            remaining = [t for t in transactions if t.id != transaction_id]
            self._commit(self.load_items(), remaining, target.stock_item_id)
        logger.info("Deleted transaction %s (item %s)", transaction_id, target.stock_item_id)

    def reconcile_on_load(
        self,
        items: Optional[List[StockItem]] = None,
        transactions: Optional[List[StockTransaction]] = None,
    ) -> List[StockItem]:
        """Overwrite every item's cached quantity/status with the ledger-derived values."""
        with write_lock:
            items = self.load_items() if items is None else items
            transactions = self.load_transactions() if transactions is None else transactions

            corrected: List[StockItem] = []
            for item in items:
                fixed = apply_reconciliation(item, transactions)
                if (fixed.quantity, fixed.status) != (item.quantity, item.status):
                    logger.info(
                        "Corrected stale stock for %r: %s -> %s",
                        item.name, item.quantity, fixed.quantity,
                    )
                corrected.append(fixed)
            self.save_items(corrected)
        return corrected

    # -- queries -----------------------------------------------------------

    def history(self, stock_item_id: int) -> List[StockTransaction]:
        return transactions_for(stock_item_id, self.load_transactions())

    def activity_log(self) -> List[ActivityLogEntry]:
        names = {item.id: item.name for item in self.load_items()}
        return [
            ActivityLogEntry(transaction=tx, item_name=names.get(tx.stock_item_id, UNKNOWN_ITEM))
            for tx in self.load_transactions()
        ]
