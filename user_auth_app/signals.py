from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import UserProfile


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """
    Creates the `UserProfile` for every newly created user.

    Superusers created through `createsuperuser` start out as platform administrators, every
    other account starts with the plain 'user' role.
    """
    if not created:
        return
    role = UserProfile.Role.SUPER_ADMIN if instance.is_superuser else UserProfile.Role.USER
    UserProfile.objects.get_or_create(user=instance, defaults={'role': role})
