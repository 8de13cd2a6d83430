import random
import time
from typing import Callable

from .logger import get_logger
from .metrics import PAYMENTS
from .schemas import PaymentResult, PaymentState

logger = get_logger("payment")

CARD = "CARD"
UPI = "UPI"
COD = "COD"

MIN_CARD_NUMBER_LENGTH = 12

def _millis() -> int:
    return int(time.time() * 1000)

class PaymentSimulator:
    """Stand-in for a payment gateway: waits, checks the method's fields and invents a transaction id.

    Nothing is charged.
    """

    def __init__(self, delay_seconds: float = 2.0, sleep: Callable[[float], None] = time.sleep):
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    def process_payment(self, state: PaymentState) -> PaymentResult:
        if self.delay_seconds > 0:
            self.sleep(self.delay_seconds)
        result = self._settle(state)
        PAYMENTS.labels(method=state.method, outcome="ok" if result.success else "declined").inc()
        if not result.success:
            logger.info(f"Payment declined ({state.method}): {result.message}")
        return result

    def _settle(self, state: PaymentState) -> PaymentResult:
        if state.method == COD:
            return PaymentResult(success=True, transaction_id=f"COD-{_millis()}",
                                 message="Order placed successfully with Cash on Delivery")
        if state.method == UPI:
            if not state.upi_id or "@" not in state.upi_id:
                return PaymentResult(success=False, transaction_id="", message="Invalid UPI ID")
            return PaymentResult(success=True, transaction_id=f"UPI-{_millis()}-{random.randrange(1000)}",
                                 message="Payment processed successfully via UPI")
        if state.method == CARD:
            if not state.card_details or len(state.card_details.card_number) < MIN_CARD_NUMBER_LENGTH:
                return PaymentResult(success=False, transaction_id="", message="Invalid Card Details")
            return PaymentResult(success=True, transaction_id=f"TXN-{_millis()}-{random.randrange(10000)}",
                                 message="Card payment processed successfully")
        return PaymentResult(success=False, transaction_id="", message="Unknown payment method")
