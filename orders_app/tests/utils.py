from decimal import Decimal

from services_app.models import Service
from orders_app.checkout import create_order

_session_counter = 0


def make_service(slug='logo-design', price=Decimal('100.00')):
    service, _ = Service.objects.get_or_create(
        slug=slug,
        defaults={
            'name': slug.replace('-', ' ').title(),
            'description': 'A service used in order tests.',
            'category': Service.Category.GRAPHIC_DESIGN,
            'price': price,
            'delivery_time': 5,
        }
    )
    return service


def make_order(buyer, amount=Decimal('100.00'), service=None, **extra):
    """Creates a pending order through checkout with a fresh payment session id."""
    global _session_counter
    _session_counter += 1
    return create_order(
        buyer,
        service or make_service(),
        amount,
        extra.pop('payment_session_id', f'cs_test_{_session_counter}'),
        **extra
    )
