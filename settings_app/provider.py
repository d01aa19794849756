"""
Read and write access to the platform-wide default commission rate.

Values are read from the database on every call. There is no in-process cache, so an update
made by one worker is visible to every other worker on its next read.
"""
import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction

from orders_app.commission import validate_commission_rate
from .models import PlatformSetting

logger = logging.getLogger(__name__)

COMMISSION_RATE_DESCRIPTION = 'Default platform commission rate (percentage)'


def _seed_value():
    return str(validate_commission_rate(settings.MARKETPLACE_DEFAULT_COMMISSION_RATE))


def get_default_commission_rate():
    """
    Returns the default commission rate, creating the setting on first use.

    `get_or_create` retries the lookup when a concurrent request inserted the row first, so two
    first reads racing each other both return the stored value instead of failing.

    Returns:
        Decimal: the configured rate, e.g. Decimal('20.00').
    """
    setting, created = PlatformSetting.objects.get_or_create(
        key=PlatformSetting.DEFAULT_COMMISSION_RATE,
        defaults={
            'value': _seed_value(),
            'description': COMMISSION_RATE_DESCRIPTION,
        }
    )
    if created:
        logger.info("Initialized %s with %s", setting.key, setting.value)
    return Decimal(setting.value)


def update_default_commission_rate(rate, acting_user):
    """
    Stores a new default commission rate.

    Args:
        rate: The new percentage; anything `Decimal` accepts.
        acting_user: The administrator making the change, recorded as `updated_by`.

    Returns:
        Decimal: the stored rate with two decimals.

    Raises:
        InvalidCommissionRate: the rate is not a number within [0, 100].
    """
    rate = validate_commission_rate(rate)
    with transaction.atomic():
        setting, _ = PlatformSetting.objects.update_or_create(
            key=PlatformSetting.DEFAULT_COMMISSION_RATE,
            defaults={
                'value': str(rate),
                'description': COMMISSION_RATE_DESCRIPTION,
                'updated_by': acting_user,
            }
        )
    logger.info("Default commission rate set to %s by user %s", rate, acting_user.pk)
    return Decimal(setting.value)


def list_platform_settings():
    return PlatformSetting.objects.select_related('updated_by').order_by('key')
