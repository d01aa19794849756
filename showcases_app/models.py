import uuid

from django.db import models
from django.utils import timezone


class ShowcaseQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class LiveShowcaseManager(models.Manager.from_queryset(ShowcaseQuerySet)):
    """Default manager: soft-deleted showcase items are never returned."""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class Showcase(models.Model):
    """
    A portfolio piece shown on the public landing page.

    Items are listed by `order` and then by creation time. Deleting an item sets `deleted_at`.

    Attributes:
        title (CharField): Short caption.
        description (TextField): Up to 500 characters of text under the image.
        category (CharField): Free-text grouping such as "Motion Graphics" or "Banners".
        image_url (URLField): Where the image is hosted.
        order (PositiveIntegerField): Position on the page, lowest first.
        is_active (BooleanField): Inactive items are hidden from the public list.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=100)
    description = models.TextField(max_length=500)
    category = models.CharField(max_length=100, db_index=True)
    image_url = models.URLField()
    order = models.PositiveIntegerField(default=0, db_index=True)
    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = LiveShowcaseManager()
    all_objects = models.Manager()

    class Meta:
        ordering = ['order', 'created_at']
        verbose_name = "Showcase"
        verbose_name_plural = "Showcases"

    def __str__(self):
        return self.title

    def soft_delete(self):
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at', 'updated_at'])
