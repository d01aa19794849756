from django.db import models

# Orders in these states count towards revenue figures.
REVENUE_BEARING_STATUSES = ('completed', 'delivered', 'in_progress', 'assigned')


class OrderQuerySet(models.QuerySet):
    """Reusable filters for the order store."""

    def for_seller(self, user):
        return self.filter(seller=user)

    def for_buyer(self, user):
        return self.filter(buyer=user)

    def with_status(self, *statuses):
        return self.filter(status__in=statuses)

    def pending_unassigned(self):
        return self.filter(status='pending', seller__isnull=True)

    def revenue_bearing(self):
        return self.filter(status__in=REVENUE_BEARING_STATUSES)

    def with_parties(self):
        """Joins the buyer, seller and service rows used by every listing."""
        return self.select_related('buyer', 'seller', 'service')

    def by_payment_session(self, session_id):
        return self.filter(payment_session_id=session_id).first()


class LiveOrderManager(models.Manager.from_queryset(OrderQuerySet)):
    """
    The default order manager.

    Soft-deleted orders (`deleted_at` set) are excluded from every query made through it, so
    lookups, listings and aggregates never see them.
    """

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)
