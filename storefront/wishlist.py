from typing import List
from pydantic import ValidationError

from .logger import get_logger
from .schemas import ProductOut, WishlistEntry
from .storage import LocalStore

logger = get_logger("wishlist")

DEFAULT_WISHLIST_KEY = "storefront_wishlist"

class WishlistService:
    def __init__(self, store: LocalStore, storage_key: str = DEFAULT_WISHLIST_KEY):
        self.store = store
        self.storage_key = storage_key

    def items(self) -> List[WishlistEntry]:
        raw = self.store.get(self.storage_key, [])
        try:
            return [WishlistEntry.model_validate(e) for e in raw or []]
        except (ValidationError, TypeError) as e:
            logger.error(f"Failed to parse wishlist, starting empty: {e}")
            return []

    def _save(self, entries: List[WishlistEntry]) -> None:
        self.store.set(self.storage_key, [e.model_dump() for e in entries])

    def add(self, product: ProductOut) -> bool:
        """Add a product snapshot; returns False when it is already listed."""
        entries = self.items()
        if any(e.id == product.id for e in entries):
            return False
        entries.append(WishlistEntry.from_product(product))
        self._save(entries)
        logger.info(f"{product.name} added to wishlist")
        return True

    def remove(self, product_id: str) -> None:
        self._save([e for e in self.items() if e.id != product_id])

    def contains(self, product_id: str) -> bool:
        return any(e.id == product_id for e in self.items())

    def clear(self) -> None:
        self._save([])
