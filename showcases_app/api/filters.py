import django_filters

from showcases_app.models import Showcase


class ShowcaseFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(lookup_expr='iexact')
    is_active = django_filters.BooleanFilter()

    class Meta:
        model = Showcase
        fields = ['category', 'is_active']
