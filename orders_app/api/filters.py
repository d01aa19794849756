import django_filters

from ..models import Order


class OrderFilter(django_filters.FilterSet):
    """
    Narrows the order list by status and by the parties involved.

    Filters are applied on top of the role scoping of the view, so they can only narrow what
    the caller is allowed to see.
    """
    status = django_filters.ChoiceFilter(choices=Order.Status.choices)
    seller_id = django_filters.NumberFilter(field_name='seller_id')
    buyer_id = django_filters.NumberFilter(field_name='buyer_id')
    unassigned = django_filters.BooleanFilter(field_name='seller', lookup_expr='isnull')

    class Meta:
        model = Order
        fields = ['status', 'seller_id', 'buyer_id', 'unassigned']
