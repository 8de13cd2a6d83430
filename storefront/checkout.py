from typing import Optional

from .cart import CartService
from .errors import EmptyCartError, NotificationError, PaymentDeclinedError, ShippingValidationError
from .logger import get_logger
from .orders import OrderService
from .payment import PaymentSimulator
from .schemas import OrderOut, PaymentInfo, PaymentState, ShippingAddress
from .validators import validate_shipping_address

logger = get_logger("checkout")

PAYMENT_COMPLETED = "COMPLETED"

class CheckoutService:
    def __init__(self, cart: CartService, orders: OrderService, payments: PaymentSimulator):
        self.cart = cart
        self.orders = orders
        self.payments = payments

    def place_order(self, address: ShippingAddress, payment: PaymentState,
                    email: Optional[str] = None, user_id: Optional[str] = None) -> OrderOut:
        """Validate, pay, persist, notify.

        Each failing step ends the attempt before the next one starts, so a
        rejected form or payment never writes an order.
        """
        errors = validate_shipping_address(address)
        if errors:
            raise ShippingValidationError(errors)
        if not self.cart.lines():
            raise EmptyCartError()
        if not self.cart.purchasable_items():
            raise EmptyCartError("Cart has no purchasable items")

        result = self.payments.process_payment(payment)
        if not result.success:
            raise PaymentDeclinedError(result.message or "Payment failed")

        order = self.orders.create_order(
            address,
            PaymentInfo(method=payment.method, status=PAYMENT_COMPLETED, transaction_id=result.transaction_id),
            user_id=user_id,
        )

        if email:
            try:
                self.orders.record_notification(email, order, user_id)
            except NotificationError as e:
                # the order stands; only the confirmation is lost
                logger.error(f"Notification error for {order.order_number}: {e}")
        return order
