from dataclasses import dataclass
from typing import Iterable, List, Optional

from .schemas import CartItemOut, OrderTotals

SHIPPING_THRESHOLD = 500.0
SHIPPING_FEE = 40.0

@dataclass(frozen=True)
class PricedLine:
    price: float
    quantity: int
    original_price: Optional[float] = None

def compute_totals(lines: Iterable[PricedLine], threshold: float = SHIPPING_THRESHOLD,
                   flat_fee: float = SHIPPING_FEE) -> OrderTotals:
    """Derive order totals from priced lines.

    Shipping is free strictly above the threshold. Quantities are taken as
    given; callers validate them.
    """
    subtotal = 0.0
    original_subtotal = 0.0
    for line in lines:
        price = float(line.price)
        original = float(line.original_price) if line.original_price is not None else price
        subtotal += price * line.quantity
        original_subtotal += original * line.quantity
    shipping_cost = 0.0 if subtotal > threshold else float(flat_fee)
    return OrderTotals(
        subtotal=subtotal,
        original_subtotal=original_subtotal,
        discount=max(0.0, original_subtotal - subtotal),
        shipping_cost=shipping_cost,
        grand_total=subtotal + shipping_cost,
    )

def priced_lines(items: Iterable[CartItemOut]) -> List[PricedLine]:
    # lines whose product has disappeared from the catalog carry no price
    return [
        PricedLine(price=it.product.price, quantity=it.quantity, original_price=it.product.original_price)
        for it in items if it.product is not None
    ]
