import uuid
from typing import List
from pydantic import ValidationError

from .catalog import CatalogRepository
from .logger import get_logger
from .metrics import CART_MUTATIONS
from .schemas import CartItemOut, CartLine, OrderTotals
from .storage import LocalStore
from .totals import compute_totals, priced_lines, SHIPPING_THRESHOLD, SHIPPING_FEE

logger = get_logger("cart")

DEFAULT_CART_KEY = "storefront_cart"

class CartService:
    """Cart lines live only in the local store.

    Every mutation rewrites the whole line set and then answers with a fresh
    read joined against the catalog; nothing is cached in between.
    """

    def __init__(self, store: LocalStore, catalog: CatalogRepository, storage_key: str = DEFAULT_CART_KEY,
                 shipping_threshold: float = SHIPPING_THRESHOLD, shipping_fee: float = SHIPPING_FEE):
        self.store = store
        self.catalog = catalog
        self.storage_key = storage_key
        self.shipping_threshold = shipping_threshold
        self.shipping_fee = shipping_fee

    def lines(self) -> List[CartLine]:
        raw = self.store.get(self.storage_key, [])
        if not isinstance(raw, list):
            logger.error(f"Cart blob is not a list ({type(raw).__name__}), treating as empty")
            return []
        out = []
        for entry in raw:
            try:
                out.append(CartLine.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Dropping unreadable cart line {entry!r}: {e}")
        return out

    def _save(self, lines: List[CartLine]) -> None:
        self.store.set(self.storage_key, [l.model_dump() for l in lines])

    def items(self) -> List[CartItemOut]:
        return [
            CartItemOut(id=l.id, product_id=l.product_id, quantity=l.quantity,
                        product=self.catalog.fetch_product(l.product_id))
            for l in self.lines()
        ]

    def purchasable_items(self) -> List[CartItemOut]:
        """Lines whose product is still in the catalog; the rest cannot be priced or ordered."""
        items = self.items()
        for it in items:
            if it.product is None:
                logger.warning(f"Cart line {it.id} refers to missing product {it.product_id}")
        return [it for it in items if it.product is not None]

    def add(self, product_id: str, quantity: int = 1) -> List[CartItemOut]:
        """Increment the product's line or open a new one.

        A non-positive quantity never opens a line; on an existing line it
        subtracts, and a result of zero or less removes the line.
        """
        lines = self.lines()
        existing = next((l for l in lines if l.product_id == product_id), None)
        if existing:
            if existing.quantity + quantity <= 0:
                lines = [l for l in lines if l.id != existing.id]
            else:
                existing.quantity += quantity
        elif quantity > 0:
            lines.append(CartLine(id=uuid.uuid4().hex, product_id=product_id, quantity=quantity))
        else:
            return self.items()
        self._save(lines)
        CART_MUTATIONS.labels(op="add").inc()
        return self.items()

    def set_quantity(self, line_id: str, quantity: int) -> List[CartItemOut]:
        lines = self.lines()
        line = next((l for l in lines if l.id == line_id), None)
        if line:
            if quantity <= 0:
                self._save([l for l in lines if l.id != line_id])
            else:
                line.quantity = quantity
                self._save(lines)
            CART_MUTATIONS.labels(op="set_quantity").inc()
        return self.items()

    def remove(self, line_id: str) -> List[CartItemOut]:
        self._save([l for l in self.lines() if l.id != line_id])
        CART_MUTATIONS.labels(op="remove").inc()
        return self.items()

    def clear(self) -> None:
        self._save([])
        CART_MUTATIONS.labels(op="clear").inc()

    def count(self) -> int:
        return sum(l.quantity for l in self.lines())

    def totals(self, items: List[CartItemOut] | None = None) -> OrderTotals:
        items = self.items() if items is None else items
        return compute_totals(priced_lines(items), self.shipping_threshold, self.shipping_fee)
