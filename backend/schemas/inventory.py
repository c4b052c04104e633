from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from core.exceptions import InvalidTransactionType
from schemas.base import CamelModel, OptionalRawNumber, RawNumber, non_negative, strip_optional, strip_required


class TransactionKind(str, Enum):
    INFLOW = "Inflow"
    OUTFLOW = "Outflow"
    OPENING_BALANCE = "OpeningBalance"

    @property
    def ledger_label(self) -> str:
        return _LEDGER_LABELS[self]

    @property
    def history_label(self) -> str:
        return _HISTORY_LABELS[self]

    @property
    def sign(self) -> int:
        return -1 if self is TransactionKind.OUTFLOW else 1

    @classmethod
    def parse(cls, value: Union[str, "TransactionKind"]) -> "TransactionKind":
        """Accept the canonical name or either view's label; reject anything else."""
        if isinstance(value, cls):
            return value
        key = (value or "").strip().lower() if isinstance(value, str) else None
        kind = _KIND_BY_LABEL.get(key)
        if kind is None:
            raise InvalidTransactionType(value)
        return kind


_LEDGER_LABELS = {
    TransactionKind.INFLOW: "Purchase",
    TransactionKind.OUTFLOW: "Usage",
    TransactionKind.OPENING_BALANCE: "Opening Stock",
}
_HISTORY_LABELS = {
    TransactionKind.INFLOW: "Stock in",
    TransactionKind.OUTFLOW: "Stock out",
    TransactionKind.OPENING_BALANCE: "Initial stock",
}
_KIND_BY_LABEL = {}
for _kind in TransactionKind:
    for _label in (_kind.value, _LEDGER_LABELS[_kind], _HISTORY_LABELS[_kind]):
        _KIND_BY_LABEL[_label.lower()] = _kind


class StockStatus(str, Enum):
    AVAILABLE = "Available"
    LOW_QUANTITY = "Low Quantity"
    OUT_OF_STOCK = "Out of Stock"


STOCK_OUT_REASONS = ("returned-to-supplier", "used-for-dishes", "wasted", "other")
DEFAULT_USAGE_PARTY = "Kitchen"
DEFAULT_NOTES = "-"
UNKNOWN_ITEM = "Unknown Item"


class StockItem(CamelModel):
    id: int
    name: str
    category: str = ""
    measuring_unit: str = ""
    quantity: float = 0
    status: StockStatus = StockStatus.OUT_OF_STOCK
    last_updated: str = ""
    image: str = ""
    description: str = ""
    reorder_level: float = 0
    icon: str = ""
    price: float = 0
    supplier: str = ""


class StockTransaction(CamelModel):
    id: int
    stock_item_id: int
    date: str
    time: str
    # persisted with the ledger label: "Purchase" | "Usage" | "Opening Stock"
    type: str
    quantity: float
    measuring_unit: str = ""
    party: str = ""
    stock_value: float = 0
    # absent on records written before the price was stored alongside the value
    per_unit_price: Optional[float] = None
    notes: str = DEFAULT_NOTES

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, v) -> str:
        # InvalidTransactionType is a ValueError, so pydantic reports it as a validation error
        return TransactionKind.parse(v).ledger_label

    @property
    def kind(self) -> TransactionKind:
        return TransactionKind.parse(self.type)

    @property
    def unit_price(self) -> float:
        if self.per_unit_price is not None:
            return self.per_unit_price
        if not self.quantity:
            return 0.0
        return self.stock_value / self.quantity


class StockItemCreate(CamelModel):
    name: str
    category: str = ""
    measuring_unit: str = ""
    initial_stock: RawNumber = 0
    price: RawNumber = 0
    supplier: str = ""
    reorder_level: RawNumber = 0
    description: str = ""
    icon: str = ""
    image: str = ""

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("initial_stock", "price", "reorder_level")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        return non_negative(v)


class StockItemUpdate(CamelModel):
    name: Optional[str] = None
    category: Optional[str] = None
    measuring_unit: Optional[str] = None
    price: OptionalRawNumber = None
    supplier: Optional[str] = None
    reorder_level: OptionalRawNumber = None
    description: Optional[str] = None
    icon: Optional[str] = None
    image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)

    @field_validator("category", "measuring_unit", "supplier")
    @classmethod
    def _strip_text(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else v.strip()

    @field_validator("price", "reorder_level")
    @classmethod
    def _non_negative(cls, v: Optional[float]) -> Optional[float]:
        return None if v is None else non_negative(v)


class AddStockRequest(CamelModel):
    quantity: RawNumber = 0
    per_unit_price: RawNumber = 0
    supplier_name: str = ""
    date_time: Optional[str] = None
    notes: str = ""


class StockOutRequest(CamelModel):
    quantity: RawNumber = 0
    reason_for_deduction: str = ""
    # supplier name, only meaningful for "returned-to-supplier"
    supplier: str = ""
    # falls back to the item's price when omitted
    per_unit_price: OptionalRawNumber = None
    date_time: Optional[str] = None
    notes: str = ""

    @field_validator("reason_for_deduction")
    @classmethod
    def _known_reason(cls, v: str) -> str:
        v = (v or "").strip()
        if v and v not in STOCK_OUT_REASONS:
            raise ValueError(f"reason must be one of {', '.join(STOCK_OUT_REASONS)}")
        return v


class TransactionUpdate(CamelModel):
    quantity: OptionalRawNumber = None
    party: Optional[str] = None
    per_unit_price: OptionalRawNumber = None
    date_time: Optional[str] = None
    notes: Optional[str] = None


class ActivityLogEntry(BaseModel):
    transaction: StockTransaction
    item_name: str
