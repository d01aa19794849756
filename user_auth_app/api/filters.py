import django_filters
from django.contrib.auth.models import User

from user_auth_app.models import UserProfile


class UserFilter(django_filters.FilterSet):
    """
    Filters the admin user list by role and ban state through the related profile.
    """
    role = django_filters.ChoiceFilter(field_name='profile__role', choices=UserProfile.Role.choices)
    banned = django_filters.BooleanFilter(field_name='profile__banned')

    class Meta:
        model = User
        fields = ['role', 'banned']
