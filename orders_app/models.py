import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from services_app.models import Service
from .managers import LiveOrderManager, OrderQuerySet


class Order(models.Model):
    """
    A purchased service moving through the fulfilment lifecycle.

    An order is created in the `pending` state when a checkout completes, without a seller.
    Assigning it to an agent fixes the commission rate and stores the resulting split, after
    which the agent moves it through delivery until it is completed. Orders are never removed
    from the database; deleting one sets `deleted_at`.

    Attributes:
        order_number (CharField): Unique human-readable number, e.g. ORD-20250126-4F7K2Q.
        buyer (ForeignKey): The user who paid for the service.
        seller (ForeignKey): The agent fulfilling the order; empty while the order is pending.
        service (ForeignKey): The purchased service.
        amount (DecimalField): The amount paid at checkout.
        platform_commission_rate (DecimalField): The commission percentage applied at assignment.
        platform_commission (DecimalField): The platform's share, set at assignment.
        agent_earnings (DecimalField): The seller's share, set at assignment.
        status (CharField): The current lifecycle state.
        requirements (TextField): The buyer's brief.
        delivery_message (TextField): The seller's message attached to the delivery.
        payment_session_id (CharField): The payment processor's checkout session (unique).
        payment_intent_id (CharField): The payment processor's payment reference.
        completed_at (DateTimeField): Set when the order enters `completed`.
        deleted_at (DateTimeField): Soft-delete timestamp.
    """
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        ASSIGNED = 'assigned', 'Assigned'
        IN_PROGRESS = 'in_progress', 'In Progress'
        DELIVERED = 'delivered', 'Delivered'
        REVISION_REQUESTED = 'revision_requested', 'Revision Requested'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'
        DISPUTED = 'disputed', 'Disputed'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=40, unique=True)

    # --- Parties ---
    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='purchases',
        on_delete=models.PROTECT,
        help_text="The user who bought the service."
    )
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='sales',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        help_text="The agent assigned to fulfil the order."
    )
    service = models.ForeignKey(
        Service,
        related_name='orders',
        on_delete=models.PROTECT
    )

    # --- Commercial terms ---
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    platform_commission_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('20.00'),
        help_text="Commission percentage kept by the platform (e.g. 20.00 for 20%)."
    )
    platform_commission = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    agent_earnings = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    status = models.CharField(
        max_length=30,
        choices=Status.choices,
        default=Status.PENDING
    )

    # --- Narrative ---
    requirements = models.TextField(null=True, blank=True)
    delivery_message = models.TextField(null=True, blank=True)

    # --- Payment references, written once at creation ---
    payment_session_id = models.CharField(max_length=255, unique=True, null=True, blank=True)
    payment_intent_id = models.CharField(max_length=255, null=True, blank=True)

    # --- Timestamps ---
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = LiveOrderManager()
    all_objects = models.Manager.from_queryset(OrderQuerySet)()

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Order"
        verbose_name_plural = "Orders"
        indexes = [
            models.Index(fields=['status'], name='orders_status_idx'),
            models.Index(fields=['created_at'], name='orders_created_at_idx'),
        ]

    def __str__(self):
        return f"{self.order_number} ({self.status})"

    @property
    def is_assigned(self):
        return self.seller_id is not None


class OrderStatusHistory(models.Model):
    """
    Append-only audit log of order status changes.

    `status` is a plain text snapshot rather than a choice, so entries such as 'deleted' can be
    recorded next to the regular lifecycle states. Rows are written by the lifecycle functions
    in the same transaction as the order change they describe and are never edited.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, related_name='status_history', on_delete=models.CASCADE)
    status = models.CharField(max_length=50)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='order_status_changes',
        on_delete=models.PROTECT
    )
    note = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['created_at']
        verbose_name = "Order Status History"
        verbose_name_plural = "Order Status History"

    def __str__(self):
        return f"{self.order_id}: {self.status}"
