"""Filter set for the order history endpoint."""

from django_filters import rest_framework as filters

from .models import Order
from .selectors import filter_orders_by_term


class OrderFilterSet(filters.FilterSet):
    search = filters.CharFilter(method="filter_search", label="Search order code, item title or description")

    class Meta:
        model = Order
        fields = ["search"]

    def filter_search(self, queryset, name, value):
        return filter_orders_by_term(queryset, value)
