# orders/api/filters.py

from django_filters import rest_framework as filters

from orders.models import Order
from orders.services.search import filter_queryset


class OrderFilter(filters.FilterSet):
    """
    Board / list refinements on top of the store scope.

    The resulting queryset is handed to the repository as a refine callback,
    so the store filter and ordering stay in one place.
    """

    q = filters.CharFilter(method="search")
    exclude_in_house = filters.BooleanFilter(method="filter_exclude_in_house")
    is_completed = filters.BooleanFilter()
    status = filters.ChoiceFilter(choices=Order.STATUS_CHOICES)
    group_id = filters.UUIDFilter(field_name="group_id")

    class Meta:
        model = Order
        fields = ["q", "exclude_in_house", "is_completed", "status", "group_id"]

    def search(self, queryset, name, value):
        return filter_queryset(queryset, value)

    def filter_exclude_in_house(self, queryset, name, value):
        if value:
            return queryset.filter(is_in_house=False)
        return queryset


def refine_from_params(params):
    """
    Build a refine callback for OrderRepository.list_orders.

    Returns (refine, errors); errors is a dict when the params don't validate.
    """
    candidate = OrderFilter(data=params, queryset=Order.objects.none())
    if not candidate.is_valid():
        return None, candidate.errors

    def refine(qs):
        return OrderFilter(data=params, queryset=qs).qs

    return refine, None
