# sdk/errors.py
from typing import Optional


class StoreError(RuntimeError):
    pass


class CatalogUnavailable(StoreError):
    pass


class AccountUnavailable(StoreError):
    pass


class PurchaseTransportError(StoreError):
    # The purchase request never produced a usable response.
    def __init__(self, item_id: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"purchase of {item_id!r} failed: {message}")
        self.item_id = item_id
        self.cause = cause
