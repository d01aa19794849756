import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from user_auth_app.models import UserProfile


class InvitationQuerySet(models.QuerySet):
    def pending(self, now=None):
        """Invitations that were not accepted yet and have not expired."""
        return self.filter(accepted=False, expires_at__gt=now or timezone.now())

    def for_email(self, email):
        return self.filter(email__iexact=email)


class Invitation(models.Model):
    """
    An invitation for an email address to join the platform with a given role.

    The token is the only secret: whoever presents it together with the invited email address
    can accept the invitation, which gives the account with that address the invited role.

    Attributes:
        email (EmailField): The invited address.
        role (CharField): The role granted on acceptance.
        token (CharField): Random hex token sent to the invitee.
        invited_by (ForeignKey): The administrator who created the invitation.
        accepted (BooleanField): Set once the invitation was used.
        expires_at (DateTimeField): The invitation cannot be accepted after this moment.
        accepted_at (DateTimeField): When the invitation was accepted.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField()
    role = models.CharField(max_length=20, choices=UserProfile.Role.choices)
    token = models.CharField(max_length=64, unique=True)
    invited_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='sent_invitations',
        on_delete=models.PROTECT
    )
    accepted = models.BooleanField(default=False)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    accepted_at = models.DateTimeField(null=True, blank=True)

    objects = InvitationQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Invitation"
        verbose_name_plural = "Invitations"

    def __str__(self):
        return f"{self.email} as {self.role}"

    @property
    def is_pending(self):
        return not self.accepted and self.expires_at > timezone.now()
