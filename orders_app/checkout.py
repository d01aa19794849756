"""
Order creation at the end of a successful checkout.

The payment processor reports a completed checkout session once or several times; each session
produces at most one order because `payment_session_id` is unique. Verifying the processor's
signature and creating the session are done elsewhere.
"""
import logging
import string
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.crypto import get_random_string

from .commission import CENT, validate_amount
from .exceptions import DuplicatePaymentSession
from .models import Order, OrderStatusHistory

logger = logging.getLogger(__name__)

ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_number(now=None):
    """Returns a number like ORD-20250126-4F7K2Q built from the date and six random characters."""
    now = now or timezone.now()
    return f"ORD-{now:%Y%m%d}-{get_random_string(6, ORDER_NUMBER_ALPHABET)}"


def amount_from_minor_units(cents):
    """Converts an amount reported in minor units (cents) into a two-decimal currency amount."""
    return (Decimal(int(cents)) / 100).quantize(CENT)


def create_order(buyer, service, amount, payment_session_id, payment_intent_id=None,
                 order_number=None, requirements=None):
    """
    Creates a pending order and its first history row.

    Args:
        buyer: The paying user.
        service: The purchased `Service`.
        amount: The amount paid; must be positive.
        payment_session_id: The processor's checkout session id, unique per order.
        payment_intent_id: The processor's payment reference, if known.
        order_number: Use this number instead of generating one.
        requirements: The buyer's brief captured at checkout.

    Returns:
        Order: the new order in status `pending`.

    Raises:
        InvalidAmount: `amount` is not positive.
        DuplicatePaymentSession: an order (live or deleted) already exists for the session.
    """
    amount = validate_amount(amount)
    if payment_session_id and Order.all_objects.filter(payment_session_id=payment_session_id).exists():
        raise DuplicatePaymentSession()

    try:
        with transaction.atomic():
            order = Order.objects.create(
                order_number=order_number or generate_order_number(),
                buyer=buyer,
                service=service,
                amount=amount,
                status=Order.Status.PENDING,
                requirements=requirements,
                payment_session_id=payment_session_id,
                payment_intent_id=payment_intent_id,
            )
            OrderStatusHistory.objects.create(
                order=order,
                status=Order.Status.PENDING,
                changed_by=buyer,
                note='Order created from successful payment',
            )
    except IntegrityError:
        # A concurrent delivery of the same session won the insert.
        if payment_session_id and Order.all_objects.filter(payment_session_id=payment_session_id).exists():
            raise DuplicatePaymentSession()
        raise

    logger.info("Order %s created for session %s", order.order_number, payment_session_id)
    return order


def record_checkout(buyer, service, amount, payment_session_id, **kwargs):
    """
    Idempotent variant of `create_order` for repeated processor notifications.

    Returns:
        tuple: `(order, created)`; `created` is False when the session already had an order,
        which is then returned unchanged.
    """
    try:
        return create_order(buyer, service, amount, payment_session_id, **kwargs), True
    except DuplicatePaymentSession:
        logger.warning("Checkout session %s already has an order; skipping", payment_session_id)
        return Order.all_objects.by_payment_session(payment_session_id), False
