import django_filters

from services_app.models import Service


class ServiceFilter(django_filters.FilterSet):
    """
    A `FilterSet` for the service catalogue.

    Attributes:
        category (ChoiceFilter): Exact match on one of the service categories.
        is_active (BooleanFilter): Only meaningful for administrators; the public queryset is
            already restricted to active services.
        min_price / max_price (NumberFilter): Price range bounds (inclusive).
    """
    category = django_filters.ChoiceFilter(choices=Service.Category.choices)
    is_active = django_filters.BooleanFilter()
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr='gte')
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr='lte')

    class Meta:
        model = Service
        fields = ['category', 'is_active', 'min_price', 'max_price']
