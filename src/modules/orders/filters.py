import django_filters

from modules.orders.constants import FulfillmentStatus
from modules.orders.models import OrderStatusRecord


class OrderStatusFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=FulfillmentStatus.choices)
    shop = django_filters.CharFilter(field_name="shop")

    class Meta:
        model = OrderStatusRecord
        fields = ["status", "shop"]
