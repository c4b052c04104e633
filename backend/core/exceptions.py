class InventoryError(Exception):
    """Base class for inventory domain errors."""


class RecordNotFound(InventoryError):
    def __init__(self, collection: str, record_id: int):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record {record_id} not found")


class StockItemNotFound(RecordNotFound):
    def __init__(self, item_id: int):
        super().__init__("Stock item", item_id)


class TransactionNotFound(RecordNotFound):
    def __init__(self, transaction_id: int):
        super().__init__("Transaction", transaction_id)


class InvalidTransactionType(InventoryError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown transaction type: {value!r}")


class InvalidTransaction(InventoryError, ValueError):
    pass
