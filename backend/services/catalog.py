"""CRUD over stock items, suppliers, measuring units and stock groups."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Type

from core.converters import format_created_at, format_last_updated
from core.exceptions import RecordNotFound, StockItemNotFound
from db.store import (
    LEGACY_STOCK_GROUPS,
    MEASURING_UNITS,
    SIDEBAR_COLLAPSED,
    STOCK_GROUPS,
    STOCK_ITEMS,
    STOCK_TRANSACTIONS,
    SUPPLIERS,
    CollectionStore,
    write_lock,
)
from schemas.base import CamelModel, load_records
from schemas.catalog import (
    MeasuringUnit,
    MeasuringUnitCreate,
    MeasuringUnitUpdate,
    StockGroup,
    StockGroupCreate,
    StockGroupUpdate,
)
from schemas.inventory import (
    DEFAULT_USAGE_PARTY,
    StockItem,
    StockItemCreate,
    StockItemUpdate,
    StockOutRequest,
    TransactionKind,
)
from schemas.suppliers import Supplier, SupplierCreate, SupplierUpdate
from services.ids import generate_unique_id
from services.ledger import Ledger
from services.reconciler import stock_status

logger = logging.getLogger(__name__)

OPENING_STOCK_PARTY = "Opening Stock"


def filter_stock_items(items: List[StockItem], search: str = "", category: str = "all", status: str = "all") -> List[StockItem]:
    needle = (search or "").lower()

    def matches(item: StockItem) -> bool:
        matches_search = (
            needle in item.name.lower()
            or needle in (item.description or "").lower()
            or needle in item.category.lower()
        )
        matches_category = category in ("all", "", None) or item.category == category
        matches_status = status in ("all", "", None) or item.status.value == status
        return matches_search and matches_category and matches_status

    return [i for i in items if matches(i)]


def filter_suppliers(suppliers: List[Supplier], search: str = "") -> List[Supplier]:
    needle = (search or "").lower()
    return [
        s for s in suppliers
        if needle in s.legal_name.lower()
        or needle in s.contact_person.lower()
        or needle in s.email.lower()
        or (search or "") in s.phone_number
    ]


def unique_categories(items: List[StockItem]) -> List[str]:
    seen: List[str] = []
    for item in items:
        if item.category not in seen:
            seen.append(item.category)
    return seen


def stock_out_party(request: StockOutRequest) -> str:
    """Who or what received stock taken out of inventory."""
    reason = request.reason_for_deduction
    if reason == "returned-to-supplier" and request.supplier.strip():
        return request.supplier.strip()
    return reason or DEFAULT_USAGE_PARTY


class _Collection:
    """Read-modify-write helpers for a collection of id-keyed records."""

    def __init__(self, store: CollectionStore, key: str, model: Type[CamelModel], label: str):
        self.store = store
        self.key = key
        self.model = model
        self.label = label

    def all(self) -> list:
        return load_records(self.model, self.store.read(self.key, []), self.key)

    def save(self, records: list) -> None:
        self.store.write(self.key, [r.to_record() for r in records])

    def get(self, record_id: int):
        for record in self.all():
            if record.id == record_id:
                return record
        raise RecordNotFound(self.label, record_id)

    def add(self, build: Callable[[int], CamelModel]):
        with write_lock:
            records = self.all()
            record = build(generate_unique_id(r.id for r in records))
            records.append(record)
            self.save(records)
        return record

    def update(self, record_id: int, changes: dict):
        with write_lock:
            records = self.all()
            for n, record in enumerate(records):
                if record.id == record_id:
                    records[n] = record.model_copy(update=changes)
                    self.save(records)
                    return records[n]
        raise RecordNotFound(self.label, record_id)

    def delete(self, record_id: int):
        with write_lock:
            records = self.all()
            kept = [r for r in records if r.id != record_id]
            if len(kept) == len(records):
                raise RecordNotFound(self.label, record_id)
            self.save(kept)
        return next(r for r in records if r.id == record_id)


class _StockGroups(_Collection):
    def all(self) -> list:
        key = self.key if self.store.read(self.key) is not None else LEGACY_STOCK_GROUPS
        return load_records(self.model, self.store.read(key, []), key)


class Catalog:
    def __init__(self, store: CollectionStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.clock = clock
        self.ledger = Ledger(store, clock=clock)
        self.suppliers = _Collection(store, SUPPLIERS, Supplier, "Supplier")
        self.measuring_units = _Collection(store, MEASURING_UNITS, MeasuringUnit, "Measuring unit")
        self.stock_groups = _StockGroups(store, STOCK_GROUPS, StockGroup, "Stock group")

    # -- stock items -------------------------------------------------------

    def list_stock_items(self, search: str = "", category: str = "all", status: str = "all") -> List[StockItem]:
        return filter_stock_items(self.ledger.load_items(), search, category, status)

    def categories(self) -> List[str]:
        return unique_categories(self.ledger.load_items())

    def get_stock_item(self, item_id: int) -> StockItem:
        for item in self.ledger.load_items():
            if item.id == item_id:
                return item
        raise StockItemNotFound(item_id)

    def create_stock_item(self, payload: StockItemCreate, date_time=None) -> StockItem:
        with write_lock:
            items = self.ledger.load_items()
            item = StockItem(
                id=generate_unique_id(i.id for i in items),
                name=payload.name,
                category=payload.category.strip(),
                measuring_unit=payload.measuring_unit.strip(),
                reorder_level=payload.reorder_level,
                price=payload.price,
                supplier=payload.supplier.strip(),
                description=payload.description,
                icon=payload.icon,
                image=payload.image,
                last_updated=format_last_updated(self.clock()),
            )
            item.status = stock_status(item.quantity, item.reorder_level)
            items.append(item)
            self.ledger.save_items(items)
            logger.info("Created stock item %r (%s)", item.name, item.id)

            if payload.initial_stock > 0:
                self.ledger.record_transaction(
                    TransactionKind.OPENING_BALANCE,
                    item.id,
                    payload.initial_stock,
                    payload.price,
                    item.supplier or OPENING_STOCK_PARTY,
                    date_time,
                    None,
                )
                return self.get_stock_item(item.id)
        return item

    def update_stock_item(self, item_id: int, payload: StockItemUpdate) -> StockItem:
        with write_lock:
            items = self.ledger.load_items()
            for n, item in enumerate(items):
                if item.id != item_id:
                    continue
                changes = payload.model_dump(exclude_unset=True, exclude_none=True)
                changes["last_updated"] = format_last_updated(self.clock())
                updated = item.model_copy(update=changes)
                # the reorder level may have moved
                updated.status = stock_status(updated.quantity, updated.reorder_level)
                items[n] = updated
                self.ledger.save_items(items)
                return updated
        raise StockItemNotFound(item_id)

    def delete_stock_item(self, item_id: int) -> StockItem:
        with write_lock:
            items = self.ledger.load_items()
            target = next((i for i in items if i.id == item_id), None)
            if target is None:
                raise StockItemNotFound(item_id)
            # transactions stay behind and show up as "Unknown Item"
            self.ledger.save_items([i for i in items if i.id != item_id])
        logger.info("Deleted stock item %r (%s)", target.name, item_id)
        return target

    def stock_in(self, item_id: int, quantity: float, unit_price: float, supplier_name: str, date_time=None, notes=None):
        return self.ledger.record_transaction(
            TransactionKind.INFLOW, item_id, quantity, unit_price, supplier_name, date_time, notes,
        )

    def stock_out(self, item_id: int, request: StockOutRequest):
        item = self.get_stock_item(item_id)
        unit_price = item.price if request.per_unit_price is None else request.per_unit_price
        return self.ledger.record_transaction(
            TransactionKind.OUTFLOW,
            item_id,
            request.quantity,
            unit_price,
            stock_out_party(request),
            request.date_time,
            request.notes,
        )

    # -- suppliers ---------------------------------------------------------

    def list_suppliers(self, search: str = "") -> List[Supplier]:
        return filter_suppliers(self.suppliers.all(), search)

    def create_supplier(self, payload: SupplierCreate) -> Supplier:
        now = self.clock()
        return self.suppliers.add(
            lambda new_id: Supplier(
                id=new_id,
                created_at=format_created_at(now),
                last_updated=format_created_at(now),
                **payload.model_dump(),
            )
        )

    def update_supplier(self, supplier_id: int, payload: SupplierUpdate) -> Supplier:
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        changes["last_updated"] = format_created_at(self.clock())
        return self.suppliers.update(supplier_id, changes)

    def delete_supplier(self, supplier_id: int) -> Supplier:
        return self.suppliers.delete(supplier_id)

    # -- measuring units ---------------------------------------------------

    def list_measuring_units(self) -> List[MeasuringUnit]:
        return self.measuring_units.all()

    def create_measuring_unit(self, payload: MeasuringUnitCreate) -> MeasuringUnit:
        now = self.clock()
        return self.measuring_units.add(
            lambda new_id: MeasuringUnit(id=new_id, created_at=format_created_at(now), **payload.model_dump())
        )

    def update_measuring_unit(self, unit_id: int, payload: MeasuringUnitUpdate) -> MeasuringUnit:
        # items keep whatever unit string they were created with
        return self.measuring_units.update(unit_id, payload.model_dump(exclude_unset=True, exclude_none=True))

    def delete_measuring_unit(self, unit_id: int) -> MeasuringUnit:
        return self.measuring_units.delete(unit_id)

    # -- stock groups ------------------------------------------------------

    def _with_counts(self, groups: List[StockGroup]) -> List[StockGroup]:
        items = self.ledger.load_items()
        return [
            g.model_copy(update={"item_count": sum(1 for i in items if i.category == g.name)})
            for g in groups
        ]

    def list_stock_groups(self) -> List[StockGroup]:
        return self._with_counts(self.stock_groups.all())

    def create_stock_group(self, payload: StockGroupCreate) -> StockGroup:
        now = self.clock()
        group = self.stock_groups.add(
            lambda new_id: StockGroup(id=new_id, created_at=format_created_at(now), **payload.model_dump())
        )
        return self._with_counts([group])[0]

    def update_stock_group(self, group_id: int, payload: StockGroupUpdate) -> StockGroup:
        # renaming a group leaves existing item categories untouched
        group = self.stock_groups.update(group_id, payload.model_dump(exclude_unset=True, exclude_none=True))
        return self._with_counts([group])[0]

    def delete_stock_group(self, group_id: int) -> StockGroup:
        return self.stock_groups.delete(group_id)

    # -- preferences & settings --------------------------------------------

    def sidebar_collapsed(self) -> bool:
        value = self.store.read(SIDEBAR_COLLAPSED, False)
        return value if isinstance(value, bool) else False

    def set_sidebar_collapsed(self, collapsed: bool) -> bool:
        self.store.write(SIDEBAR_COLLAPSED, bool(collapsed))
        return bool(collapsed)

    def clear_all_data(self) -> None:
        with write_lock:
            for key in (STOCK_ITEMS, STOCK_TRANSACTIONS, SUPPLIERS, MEASURING_UNITS, STOCK_GROUPS):
                self.store.write(key, [])
        logger.info("Cleared all inventory data")
