import uuid

from django.conf import settings
from django.db import models


class PlatformSetting(models.Model):
    """
    A named, string-encoded configuration value editable by administrators at runtime.

    Attributes:
        key (CharField): Unique name of the setting, e.g. 'default_commission_rate'.
        value (TextField): The value as text; readers convert it to the type they need.
        description (TextField): What the setting controls.
        updated_by (ForeignKey): The administrator who last changed the value.
    """
    DEFAULT_COMMISSION_RATE = 'default_commission_rate'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=100, unique=True)
    value = models.TextField()
    description = models.TextField(null=True, blank=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='updated_settings',
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['key']
        verbose_name = "Platform Setting"
        verbose_name_plural = "Platform Settings"

    def __str__(self):
        return f"{self.key} = {self.value}"
