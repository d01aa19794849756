import django_filters

from invitations_app.models import Invitation
from user_auth_app.models import UserProfile


class InvitationFilter(django_filters.FilterSet):
    role = django_filters.ChoiceFilter(choices=UserProfile.Role.choices)
    accepted = django_filters.BooleanFilter()
    email = django_filters.CharFilter(lookup_expr='iexact')

    class Meta:
        model = Invitation
        fields = ['role', 'accepted', 'email']
