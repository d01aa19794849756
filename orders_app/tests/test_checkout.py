import re
from datetime import datetime
from decimal import Decimal

from django.test import TestCase

from orders_app import lifecycle
from orders_app.checkout import (
    amount_from_minor_units,
    create_order,
    generate_order_number,
    record_checkout,
)
from orders_app.exceptions import DuplicatePaymentSession, InvalidAmount
from orders_app.models import Order
from user_auth_app.models import UserProfile
from user_auth_app.tests.utils import create_user_with_role
from .utils import make_service


class OrderNumberTests(TestCase):

    def test_format(self):
        number = generate_order_number(datetime(2025, 1, 26, 12, 0))
        self.assertRegex(number, r'^ORD-20250126-[A-Z0-9]{6}$')

    def test_numbers_differ(self):
        numbers = {generate_order_number() for _ in range(20)}
        self.assertEqual(len(numbers), 20)

    def test_minor_units(self):
        self.assertEqual(amount_from_minor_units(4999), Decimal('49.99'))
        self.assertEqual(amount_from_minor_units('100'), Decimal('1.00'))


class CreateOrderTests(TestCase):

    def setUp(self):
        self.buyer = create_user_with_role('buyer', UserProfile.Role.USER)
        self.admin = create_user_with_role('admin', UserProfile.Role.SUPER_ADMIN)
        self.service = make_service()

    def test_creates_pending_order_with_history(self):
        order = create_order(self.buyer, self.service, Decimal('100.00'), 'cs_1', payment_intent_id='pi_1')

        self.assertEqual(order.status, Order.Status.PENDING)
        self.assertIsNone(order.seller)
        self.assertIsNone(order.platform_commission)
        self.assertIsNone(order.agent_earnings)
        self.assertTrue(re.match(r'^ORD-\d{8}-[A-Z0-9]{6}$', order.order_number))
        entry = order.status_history.get()
        self.assertEqual(entry.status, 'pending')
        self.assertEqual(entry.changed_by, self.buyer)
        self.assertEqual(entry.note, 'Order created from successful payment')

    def test_explicit_order_number_and_requirements(self):
        order = create_order(
            self.buyer, self.service, '25.00', 'cs_2',
            order_number='ORD-20250101-ABC123', requirements='Make it pop'
        )
        self.assertEqual(order.order_number, 'ORD-20250101-ABC123')
        self.assertEqual(order.requirements, 'Make it pop')

    def test_non_positive_amount(self):
        with self.assertRaises(InvalidAmount):
            create_order(self.buyer, self.service, '0', 'cs_3')
        self.assertFalse(Order.all_objects.exists())

    def test_duplicate_session_is_explicit(self):
        create_order(self.buyer, self.service, '10.00', 'cs_dup')
        with self.assertRaises(DuplicatePaymentSession):
            create_order(self.buyer, self.service, '10.00', 'cs_dup')
        self.assertEqual(Order.all_objects.filter(payment_session_id='cs_dup').count(), 1)

    def test_session_of_deleted_order_stays_used(self):
        order = create_order(self.buyer, self.service, '10.00', 'cs_deleted')
        lifecycle.soft_delete(order.pk, self.admin)
        with self.assertRaises(DuplicatePaymentSession):
            create_order(self.buyer, self.service, '10.00', 'cs_deleted')


class RecordCheckoutTests(TestCase):

    def setUp(self):
        self.buyer = create_user_with_role('buyer', UserProfile.Role.USER)
        self.service = make_service()

    def test_repeated_notification_returns_existing_order(self):
        first, created = record_checkout(self.buyer, self.service, Decimal('49.99'), 'cs_repeat')
        again, created_again = record_checkout(self.buyer, self.service, Decimal('49.99'), 'cs_repeat')

        self.assertTrue(created)
        self.assertFalse(created_again)
        self.assertEqual(first.pk, again.pk)
        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(first.status_history.count(), 1)
