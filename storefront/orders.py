from datetime import datetime
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, selectinload

from .cart import CartService
from .errors import EmptyCartError, NotificationError, OrderCreationError
from .logger import get_logger
from .metrics import BACKEND_ERRORS, ORDERS_CREATED
from .models import Notification, NotificationStatus, Order, OrderItem, OrderStatus
from .schemas import NotificationContent, OrderItemOut, OrderOut, PaymentInfo, ShippingAddress

logger = get_logger("orders")

ORDER_PREFIX = "ORD"

def generate_order_number(db: Session, now: Optional[datetime] = None) -> str:
    today = (now or datetime.utcnow()).strftime("%y%m%d")
    prefix = f"{ORDER_PREFIX}-{today}-"
    numbers = db.execute(select(Order.order_number).where(Order.order_number.like(prefix + "%"))).scalars().all()
    # numeric max: "-999" sorts after "-1000" as text
    highest = 0
    for number in numbers:
        suffix = number[len(prefix):]
        if suffix.isascii() and suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1:03d}"

def order_to_out(order: Order) -> OrderOut:
    return OrderOut(
        id=order.id,
        created_at=order.created_at,
        order_number=order.order_number,
        user_id=order.user_id,
        shipping_name=order.shipping_name,
        shipping_phone=order.shipping_phone,
        shipping_address=order.shipping_address,
        shipping_city=order.shipping_city,
        shipping_state=order.shipping_state,
        shipping_pincode=order.shipping_pincode,
        subtotal=float(order.subtotal or 0),
        shipping_cost=float(order.shipping_cost or 0),
        total=float(order.total or 0),
        status=order.status.value,
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        transaction_id=order.transaction_id,
        items=[OrderItemOut.model_validate(it) for it in order.items],
    )

class OrderService:
    def __init__(self, session_factory: sessionmaker, cart: CartService):
        self.session_factory = session_factory
        self.cart = cart

    def create_order(self, shipping_address: ShippingAddress, payment_info: PaymentInfo,
                     user_id: Optional[str] = None) -> OrderOut:
        """Persist the current cart as an order (header + one row per line), then empty the cart."""
        if not self.cart.lines():
            raise EmptyCartError()

        priced = self.cart.purchasable_items()
        if not priced:
            raise EmptyCartError("Cart has no purchasable items")
        totals = self.cart.totals(priced)

        try:
            with self.session_factory() as s:
                order = Order(
                    order_number=generate_order_number(s),
                    user_id=user_id,
                    shipping_name=shipping_address.name.strip(),
                    shipping_phone=shipping_address.phone.strip(),
                    shipping_address=shipping_address.address.strip(),
                    shipping_city=shipping_address.city.strip(),
                    shipping_state=shipping_address.state.strip(),
                    shipping_pincode=shipping_address.pincode.strip(),
                    subtotal=totals.subtotal,
                    shipping_cost=totals.shipping_cost,
                    total=totals.grand_total,
                    status=OrderStatus.PENDING,
                    payment_method=payment_info.method,
                    payment_status=payment_info.status,
                    transaction_id=payment_info.transaction_id,
                )
                for it in priced:
                    order.items.append(OrderItem(
                        product_id=it.product_id,
                        product_name=it.product.name,
                        product_image=it.product.images[0] if it.product.images else None,
                        price=it.product.price,
                        quantity=it.quantity,
                    ))
                s.add(order); s.commit(); s.refresh(order)
                out = order_to_out(order)
        except SQLAlchemyError as e:
            logger.error(f"Error creating order: {e}")
            raise OrderCreationError("Failed to create order") from e

        self.cart.clear()
        ORDERS_CREATED.inc()
        logger.info(f"Order {out.order_number} created: {len(out.items)} items, total {out.total:.2f}")
        return out

    def get_order(self, order_id: str) -> Optional[OrderOut]:
        try:
            with self.session_factory() as s:
                order = s.execute(
                    select(Order).options(selectinload(Order.items)).where(Order.id == order_id)
                ).scalar_one_or_none()
                return order_to_out(order) if order else None
        except SQLAlchemyError as e:
            logger.error(f"Error fetching order {order_id}: {e}")
            BACKEND_ERRORS.labels(query="order").inc()
            return None

    def list_orders(self, user_id: Optional[str] = None) -> List[OrderOut]:
        try:
            with self.session_factory() as s:
                query = select(Order).options(selectinload(Order.items)).order_by(Order.created_at.desc(), Order.order_number.desc())
                if user_id:
                    query = query.where(Order.user_id == user_id)
                return [order_to_out(o) for o in s.execute(query).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error fetching orders: {e}")
            BACKEND_ERRORS.labels(query="orders").inc()
            return []

    def record_notification(self, email: str, order: OrderOut, user_id: Optional[str] = None) -> str:
        """Queue an order-confirmation notification row; delivery happens elsewhere."""
        content = NotificationContent(
            order_number=order.order_number,
            total=order.total,
            items=[{"name": i.product_name, "qty": i.quantity, "price": i.price} for i in order.items],
        )
        try:
            with self.session_factory() as s:
                n = Notification(
                    user_id=user_id,
                    email=email,
                    type="order_confirmation",
                    order_id=order.id,
                    content=content.model_dump(),
                    status=NotificationStatus.PENDING,
                )
                s.add(n); s.commit()
                return n.id
        except SQLAlchemyError as e:
            logger.error(f"Error recording notification: {e}")
            raise NotificationError("Failed to record notification") from e
