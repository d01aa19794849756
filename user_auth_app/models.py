from django.db import models
from django.contrib.auth.models import User


class UserProfile(models.Model):
    """
    Extends the built-in Django User model with the marketplace role of the account.

    This model uses a one-to-one relationship to the `User` model. A profile is created
    automatically for every new user by a `post_save` signal (see `signals.py`), so
    `user.profile` can be relied upon everywhere a role has to be resolved.

    Attributes:
        user (OneToOneField): A required link to an instance of the `auth.User` model.
        role (CharField): The role of the account: 'super_admin', 'agent' or 'user'.
        banned (BooleanField): Banned accounts keep their data but lose every role capability.
        created_at (DateTimeField): Timestamp of when the profile was created.
    """
    class Role(models.TextChoices):
        """The closed set of roles an account can hold."""
        SUPER_ADMIN = 'super_admin', 'Super Admin'
        AGENT = 'agent', 'Agent'
        USER = 'user', 'User'

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='profile',
        help_text="The user this profile belongs to."
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.USER,
        db_index=True,
        help_text="The role of the user (super_admin, agent or user)."
    )
    banned = models.BooleanField(
        default=False,
        help_text="Banned users cannot perform any role-gated action."
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "User Profile"
        verbose_name_plural = "User Profiles"

    def __str__(self):
        return f"{self.user.username} ({self.role})"
