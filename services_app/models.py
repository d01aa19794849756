import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class ServiceQuerySet(models.QuerySet):
    def active(self):
        """Services that are listed publicly and can be bought."""
        return self.filter(is_active=True)


class LiveServiceManager(models.Manager.from_queryset(ServiceQuerySet)):
    """Default manager: soft-deleted services are never returned."""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class Service(models.Model):
    """
    A service listing that buyers can purchase through the checkout flow.

    Orders keep their own copy of the amount that was paid, so editing a service's price never
    changes existing orders. Services are never removed from the database; deleting one sets
    `deleted_at`, which hides it from the default manager.

    Attributes:
        slug (SlugField): Unique, URL-friendly identifier used by the public pages.
        name (CharField): The customer-facing name of the service.
        description (TextField): A detailed description of the service.
        category (CharField): One of the fixed service categories.
        price (DecimalField): The price charged at checkout.
        delivery_time (PositiveIntegerField): Delivery time in whole days.
        is_active (BooleanField): Inactive services are hidden from the public catalogue.
        deleted_at (DateTimeField): Soft-delete timestamp.
    """
    class Category(models.TextChoices):
        GRAPHIC_DESIGN = 'graphic_design', 'Graphic Design'
        FIVEM_TRAILER = 'fivem_trailer', 'FiveM Trailer'
        CUSTOM_CLOTHING = 'custom_clothing', 'Custom Clothing'
        CUSTOM_CARS = 'custom_cars', 'Custom Cars'
        STREAMING_DESIGN = 'streaming_design', 'Streaming Design'
        BUSINESS_BRANDING = 'business_branding', 'Business Branding'
        DISCORD_DESIGN = 'discord_design', 'Discord Design'
        DESIGN_3D = '3d_design', '3D Design'
        DESIGN_2D = '2d_design', '2D Design'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=120, unique=True)
    name = models.CharField(max_length=255)
    description = models.TextField()
    category = models.CharField(max_length=30, choices=Category.choices, db_index=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    delivery_time = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Delivery time in days."
    )
    icon = models.CharField(max_length=100, blank=True, null=True)
    color = models.CharField(max_length=20, default='#0284c7')
    image_url = models.URLField(blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = LiveServiceManager()
    all_objects = models.Manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Service"
        verbose_name_plural = "Services"

    def __str__(self):
        return f"{self.name} (${self.price})"

    def soft_delete(self):
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at', 'updated_at'])
